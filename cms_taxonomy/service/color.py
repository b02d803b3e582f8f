# cms_taxonomy/service/color.py
"""
颜色工具：十六进制 <-> HSV 转换、对比色选择，以及标签的有效颜色解析

色相保留为浮点数（不取整），通道值统一四舍五入（round-half-up），
因此对任意合法的 #RRGGBB，hsv_to_hex(hex_to_hsv(x)) 与 x 完全一致（忽略大小写）。
"""
import math
import re
from typing import Any, NamedTuple, Optional, Tuple

HEX_COLOR_PATTERN = re.compile(r"#[0-9A-Fa-f]{6}")

DEFAULT_TAG_TYPE_COLOR = "#3B82F6"

# 颜色选择器中的预设色块
PRESET_COLORS = (
    "#FF5555",
    "#55FF55",
    "#5555FF",
    "#FFFF55",
    "#FF55FF",
    "#55FFFF",
    "#FFFFFF",
    "#000000",
    "#888888",
    "#CCCCCC",
)

BLACK = "#000000"
WHITE = "#ffffff"


class HSV(NamedTuple):
    h: float  # 0-360
    s: float  # 0-1
    v: float  # 0-1


FALLBACK_HSV = HSV(210, 1, 1)


def is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and HEX_COLOR_PATTERN.fullmatch(value) is not None


def _channels(hex_color: str) -> Tuple[int, int, int]:
    return int(hex_color[1:3], 16), int(hex_color[3:5], 16), int(hex_color[5:7], 16)


def hex_to_hsv(hex_color: str) -> HSV:
    """非法输入返回 FALLBACK_HSV，不抛异常"""
    if not is_hex_color(hex_color):
        return FALLBACK_HSV

    r, g, b = (channel / 255 for channel in _channels(hex_color))

    max_c = max(r, g, b)
    min_c = min(r, g, b)
    delta = max_c - min_c

    h = 0.0
    if delta > 0:
        if max_c == r:
            h = ((g - b) / delta) % 6
        elif max_c == g:
            h = (b - r) / delta + 2
        else:
            h = (r - g) / delta + 4
        h *= 60

    s = 0.0 if max_c == 0 else delta / max_c
    return HSV(h, s, max_c)


def _round_channel(value: float) -> int:
    return min(255, max(0, int(math.floor(value * 255 + 0.5))))


def hsv_to_hex(hsv: HSV, uppercase: bool = False) -> str:
    h, s, v = hsv
    h = h % 360

    c = v * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = v - c

    if h < 60:
        r, g, b = c, x, 0
    elif h < 120:
        r, g, b = x, c, 0
    elif h < 180:
        r, g, b = 0, c, x
    elif h < 240:
        r, g, b = 0, x, c
    elif h < 300:
        r, g, b = x, 0, c
    else:
        r, g, b = c, 0, x

    result = "#{:02x}{:02x}{:02x}".format(
        _round_channel(r + m), _round_channel(g + m), _round_channel(b + m)
    )
    return result.upper() if uppercase else result


def hsv_gradient(hsv: HSV, channel: str) -> Tuple[str, str]:
    """颜色选择器中饱和度/明度滑块两端的颜色"""
    if channel == "s":
        return hsv_to_hex(hsv._replace(s=0)), hsv_to_hex(hsv._replace(s=1))
    if channel == "v":
        return hsv_to_hex(hsv._replace(v=0)), hsv_to_hex(hsv._replace(v=1))
    raise ValueError(f"Unsupported gradient channel: {channel}")


def get_contrast_color(hex_color: str) -> str:
    """根据背景色亮度选择黑色或白色文字"""
    if not is_hex_color(hex_color):
        hex_color = hsv_to_hex(FALLBACK_HSV)

    r, g, b = _channels(hex_color)
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return BLACK if luminance > 0.5 else WHITE


def _field(entity: Any, name: str) -> Optional[str]:
    if isinstance(entity, dict):
        return entity.get(name)
    return getattr(entity, name, None)


def effective_color(tag: Any, tag_type: Any) -> str:
    """标签自身的颜色优先，否则继承所属标签类型的颜色"""
    return _field(tag, "color") or _field(tag_type, "color")
