# cms_taxonomy/routers/tag_type.py
# 全局标签类型接口：与项目类型下的接口共用同一存储逻辑，只是不做项目类型范围校验
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cms_taxonomy.models.database import get_db
from cms_taxonomy.schemas.taxonomy import SuccessResponse, TagType, TagTypePayload
from cms_taxonomy.service import tag_type_store

router = APIRouter(tags=["tag-types"])


@router.get("/tag-types", response_model=List[TagType])
def list_tag_types(db: Session = Depends(get_db)):
    """获取所有标签类型（含标签）"""
    return tag_type_store.list_tag_types(db)


@router.post("/tag-types", response_model=TagType)
def create_tag_type(payload: TagTypePayload, db: Session = Depends(get_db)):
    """创建不属于任何项目类型的全局标签类型"""
    return tag_type_store.create_tag_type(db, payload.name, payload.color)


@router.get("/tag-types/{tag_type_id}", response_model=TagType)
def get_tag_type(tag_type_id: str, db: Session = Depends(get_db)):
    return tag_type_store.get_tag_type(db, tag_type_id)


@router.put("/tag-types/{tag_type_id}", response_model=TagType)
def update_tag_type(tag_type_id: str, payload: TagTypePayload, db: Session = Depends(get_db)):
    return tag_type_store.update_tag_type(db, tag_type_id, payload.name, payload.color)


@router.delete("/tag-types/{tag_type_id}", response_model=SuccessResponse)
def delete_tag_type(tag_type_id: str, db: Session = Depends(get_db)):
    tag_type_store.delete_tag_type(db, tag_type_id)
    return SuccessResponse()
