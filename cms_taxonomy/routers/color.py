# cms_taxonomy/routers/color.py
from fastapi import APIRouter, Query

from cms_taxonomy.errors import ValidationError
from cms_taxonomy.schemas.taxonomy import ContrastResponse, HSVModel
from cms_taxonomy.service.color import get_contrast_color, hex_to_hsv, is_hex_color

router = APIRouter(tags=["colors"])


@router.get("/colors/contrast", response_model=ContrastResponse)
def contrast(color: str = Query(..., description="背景色，#RRGGBB")):
    """计算背景色对应的文字颜色（黑/白）及 HSV 值"""
    if not is_hex_color(color):
        raise ValidationError(f"Invalid color '{color}', expected #RRGGBB")

    h, s, v = hex_to_hsv(color)
    return ContrastResponse(color=color, contrast=get_contrast_color(color), hsv=HSVModel(h=h, s=s, v=v))
