# cms_taxonomy/routers/project_type.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cms_taxonomy.models.database import get_db
from cms_taxonomy.schemas.taxonomy import (
    ProjectType,
    ProjectTypePayload,
    SuccessResponse,
    TagType,
    TagTypePayload,
)
from cms_taxonomy.service import project_type_store, tag_type_store

router = APIRouter(tags=["project-types"])


@router.get("/project-types", response_model=List[ProjectType])
def list_project_types(db: Session = Depends(get_db)):
    """获取所有项目类型（含标签类型与标签）"""
    return project_type_store.list_project_types(db)


@router.post("/project-types", response_model=ProjectType)
def create_project_type(payload: ProjectTypePayload, db: Session = Depends(get_db)):
    """创建项目类型"""
    return project_type_store.create_project_type(db, payload.name)


@router.get("/project-types/{project_type_id}", response_model=ProjectType)
def get_project_type(project_type_id: str, db: Session = Depends(get_db)):
    return project_type_store.get_project_type(db, project_type_id)


@router.put("/project-types/{project_type_id}", response_model=ProjectType)
def update_project_type(project_type_id: str, payload: ProjectTypePayload, db: Session = Depends(get_db)):
    """更新项目类型名称，标签类型保持不变"""
    return project_type_store.update_project_type(db, project_type_id, payload.name)


@router.delete("/project-types/{project_type_id}", response_model=SuccessResponse)
def delete_project_type(project_type_id: str, db: Session = Depends(get_db)):
    """删除项目类型，级联删除其标签类型与标签"""
    project_type_store.delete_project_type(db, project_type_id)
    return SuccessResponse()


# 项目类型下的标签类型
@router.get("/project-types/{project_type_id}/tag-types", response_model=List[TagType])
def list_project_tag_types(project_type_id: str, db: Session = Depends(get_db)):
    return tag_type_store.list_tag_types(db, project_type_id)


@router.post("/project-types/{project_type_id}/tag-types", response_model=TagType)
def create_project_tag_type(project_type_id: str, payload: TagTypePayload, db: Session = Depends(get_db)):
    """在项目类型下创建标签类型"""
    return tag_type_store.create_tag_type(db, payload.name, payload.color, project_type_id)


@router.get("/project-types/{project_type_id}/tag-types/{tag_type_id}", response_model=TagType)
def get_project_tag_type(project_type_id: str, tag_type_id: str, db: Session = Depends(get_db)):
    return tag_type_store.get_tag_type(db, tag_type_id, project_type_id)


@router.put("/project-types/{project_type_id}/tag-types/{tag_type_id}", response_model=TagType)
def update_project_tag_type(
    project_type_id: str, tag_type_id: str, payload: TagTypePayload, db: Session = Depends(get_db)
):
    return tag_type_store.update_tag_type(db, tag_type_id, payload.name, payload.color, project_type_id)


@router.delete("/project-types/{project_type_id}/tag-types/{tag_type_id}", response_model=SuccessResponse)
def delete_project_tag_type(project_type_id: str, tag_type_id: str, db: Session = Depends(get_db)):
    """删除标签类型及其所有标签"""
    tag_type_store.delete_tag_type(db, tag_type_id, project_type_id)
    return SuccessResponse()
