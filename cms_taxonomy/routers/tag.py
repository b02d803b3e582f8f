# cms_taxonomy/routers/tag.py
# 标签的增删改均返回完整的父级标签类型
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cms_taxonomy.models.database import get_db
from cms_taxonomy.schemas.taxonomy import Tag, TagPayload, TagType
from cms_taxonomy.service import tag_store

router = APIRouter(tags=["tags"])


@router.post("/tag-types/{tag_type_id}/tags", response_model=TagType)
def create_tag(tag_type_id: str, payload: TagPayload, db: Session = Depends(get_db)):
    """创建标签，未指定颜色时继承标签类型的颜色"""
    return tag_store.create_tag(db, tag_type_id, payload.name, payload.color)


@router.get("/tag-types/{tag_type_id}/tags/{tag_id}", response_model=Tag)
def get_tag(tag_type_id: str, tag_id: str, db: Session = Depends(get_db)):
    return tag_store.get_tag(db, tag_type_id, tag_id)


@router.put("/tag-types/{tag_type_id}/tags/{tag_id}", response_model=TagType)
def update_tag(tag_type_id: str, tag_id: str, payload: TagPayload, db: Session = Depends(get_db)):
    return tag_store.update_tag(db, tag_type_id, tag_id, payload.name, payload.color)


@router.delete("/tag-types/{tag_type_id}/tags/{tag_id}", response_model=TagType)
def delete_tag(tag_type_id: str, tag_id: str, db: Session = Depends(get_db)):
    return tag_store.delete_tag(db, tag_type_id, tag_id)


# 项目类型范围内的标签接口
@router.post("/project-types/{project_type_id}/tag-types/{tag_type_id}/tags", response_model=TagType)
def create_project_tag(project_type_id: str, tag_type_id: str, payload: TagPayload, db: Session = Depends(get_db)):
    return tag_store.create_tag(db, tag_type_id, payload.name, payload.color, project_type_id)


@router.get("/project-types/{project_type_id}/tag-types/{tag_type_id}/tags/{tag_id}", response_model=Tag)
def get_project_tag(project_type_id: str, tag_type_id: str, tag_id: str, db: Session = Depends(get_db)):
    return tag_store.get_tag(db, tag_type_id, tag_id, project_type_id)


@router.put("/project-types/{project_type_id}/tag-types/{tag_type_id}/tags/{tag_id}", response_model=TagType)
def update_project_tag(
    project_type_id: str, tag_type_id: str, tag_id: str, payload: TagPayload, db: Session = Depends(get_db)
):
    return tag_store.update_tag(db, tag_type_id, tag_id, payload.name, payload.color, project_type_id)


@router.delete("/project-types/{project_type_id}/tag-types/{tag_type_id}/tags/{tag_id}", response_model=TagType)
def delete_project_tag(project_type_id: str, tag_type_id: str, tag_id: str, db: Session = Depends(get_db)):
    return tag_store.delete_tag(db, tag_type_id, tag_id, project_type_id)
