# cms_taxonomy/service/validators.py
from typing import Optional

from cms_taxonomy.errors import ValidationError
from cms_taxonomy.service.color import is_hex_color

# 与模型中 String(255) 的长度一致
NAME_MAX_LENGTH = 255


def require_name(name: Optional[str]) -> str:
    """名称必填且不能为空白"""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name is required")
    name = name.strip()
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(f"Name must be at most {NAME_MAX_LENGTH} characters")
    return name


def require_color(color: Optional[str]) -> str:
    if not color:
        raise ValidationError("Color is required")
    return check_color(color)


def optional_color(color: Optional[str]) -> Optional[str]:
    """空字符串视为未设置颜色"""
    if not color:
        return None
    return check_color(color)


def check_color(color: str) -> str:
    if not is_hex_color(color):
        raise ValidationError(f"Invalid color '{color}', expected #RRGGBB")
    return color
