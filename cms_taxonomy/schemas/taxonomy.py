# cms_taxonomy/schemas/taxonomy.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# 请求体：字段均可缺省，必填校验由存储层统一完成，错误信息保持一致
class ProjectTypePayload(BaseModel):
    name: Optional[str] = None


class TagTypePayload(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None


class TagPayload(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None


class Tag(BaseModel):
    id: str
    name: str
    color: Optional[str] = None
    tag_type_id: str = Field(alias="tagTypeId")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class TagType(BaseModel):
    id: str
    name: str
    color: str
    project_type_id: Optional[str] = Field(default=None, alias="projectTypeId")
    tags: List[Tag] = []
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class ProjectType(BaseModel):
    id: str
    name: str
    tag_types: List[TagType] = Field(default=[], alias="tagTypes")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str


class HSVModel(BaseModel):
    h: float
    s: float
    v: float


class ContrastResponse(BaseModel):
    color: str
    contrast: str
    hsv: HSVModel
