# cms_taxonomy/service/project_type_store.py
from typing import List

from sqlalchemy.orm import Session, selectinload

from cms_taxonomy.errors import NotFound
from cms_taxonomy.logger import get_logger
from cms_taxonomy.models.database import commit_or_rollback
from cms_taxonomy.models.project_type import ProjectType as ProjectTypeModel
from cms_taxonomy.models.tag_type import TagType as TagTypeModel
from cms_taxonomy.models.tag import Tag as TagModel
from cms_taxonomy.service.validators import require_name

logger = get_logger(__name__)


def _project_type_query(db: Session):
    # 两级预加载：标签类型及其标签
    return (
        db.query(ProjectTypeModel)
        .options(selectinload(ProjectTypeModel.tag_types).selectinload(TagTypeModel.tags))
        .populate_existing()
    )


def find_project_type(db: Session, project_type_id: str) -> ProjectTypeModel:
    project_type = db.query(ProjectTypeModel).filter(ProjectTypeModel.id == project_type_id).first()
    if not project_type:
        logger.warning("Project type %s not found", project_type_id)
        raise NotFound("Project type not found")
    return project_type


def get_project_type(db: Session, project_type_id: str) -> ProjectTypeModel:
    project_type = _project_type_query(db).filter(ProjectTypeModel.id == project_type_id).first()
    if not project_type:
        logger.warning("Project type %s not found", project_type_id)
        raise NotFound("Project type not found")
    return project_type


def list_project_types(db: Session) -> List[ProjectTypeModel]:
    return _project_type_query(db).order_by(ProjectTypeModel.created_at, ProjectTypeModel.id).all()


def create_project_type(db: Session, name: str) -> ProjectTypeModel:
    name = require_name(name)

    project_type = ProjectTypeModel(name=name)
    db.add(project_type)
    commit_or_rollback(db)
    logger.info("Created project type %s (%s)", project_type.id, name)

    return get_project_type(db, project_type.id)


def update_project_type(db: Session, project_type_id: str, name: str) -> ProjectTypeModel:
    name = require_name(name)

    project_type = find_project_type(db, project_type_id)
    project_type.name = name
    commit_or_rollback(db)
    logger.info("Updated project type %s (%s)", project_type_id, name)

    return get_project_type(db, project_type_id)


def delete_project_type(db: Session, project_type_id: str) -> None:
    """删除项目类型，并在同一事务内级联删除其标签类型与标签"""
    project_type = find_project_type(db, project_type_id)

    tag_type_ids = [
        row.id
        for row in db.query(TagTypeModel.id).filter(TagTypeModel.project_type_id == project_type.id)
    ]
    try:
        # 1) 删除所有子标签
        deleted_tags = (
            db.query(TagModel)
            .filter(TagModel.tag_type_id.in_(tag_type_ids))
            .delete(synchronize_session="fetch")
        )
        # 2) 删除标签类型
        db.query(TagTypeModel).filter(TagTypeModel.id.in_(tag_type_ids)).delete(
            synchronize_session="fetch"
        )
        # 3) 删除项目类型本身
        db.expire(project_type, ["tag_types"])
        db.delete(project_type)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Deleted project type %s with %d tag types and %d tags",
        project_type_id,
        len(tag_type_ids),
        deleted_tags,
    )
