# cms_taxonomy/service/tag_type_store.py
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from cms_taxonomy.errors import NotFound
from cms_taxonomy.logger import get_logger
from cms_taxonomy.models.database import commit_or_rollback
from cms_taxonomy.models.tag_type import TagType as TagTypeModel
from cms_taxonomy.models.tag import Tag as TagModel
from cms_taxonomy.service.project_type_store import find_project_type
from cms_taxonomy.service.validators import require_color, require_name

logger = get_logger(__name__)


def _tag_type_query(db: Session):
    return db.query(TagTypeModel).options(selectinload(TagTypeModel.tags)).populate_existing()


def get_tag_type(db: Session, tag_type_id: str, project_type_id: Optional[str] = None) -> TagTypeModel:
    """
    获取标签类型（含标签）

    传入 project_type_id 时，项目类型必须存在，且标签类型必须属于该项目类型，否则视为不存在
    """
    query = _tag_type_query(db).filter(TagTypeModel.id == tag_type_id)
    if project_type_id is not None:
        find_project_type(db, project_type_id)
        query = query.filter(TagTypeModel.project_type_id == project_type_id)

    tag_type = query.first()
    if not tag_type:
        logger.warning("Tag type %s not found", tag_type_id)
        raise NotFound("Tag type not found")
    return tag_type


def list_tag_types(db: Session, project_type_id: Optional[str] = None) -> List[TagTypeModel]:
    """不传 project_type_id 时返回全部标签类型"""
    query = _tag_type_query(db)
    if project_type_id is not None:
        find_project_type(db, project_type_id)
        query = query.filter(TagTypeModel.project_type_id == project_type_id)
    return query.order_by(TagTypeModel.created_at, TagTypeModel.id).all()


def create_tag_type(
    db: Session, name: str, color: str, project_type_id: Optional[str] = None
) -> TagTypeModel:
    name = require_name(name)
    color = require_color(color)
    if project_type_id is not None:
        find_project_type(db, project_type_id)

    tag_type = TagTypeModel(name=name, color=color, project_type_id=project_type_id)
    db.add(tag_type)
    commit_or_rollback(db)
    logger.info("Created tag type %s (%s, %s) in project type %s", tag_type.id, name, color, project_type_id)

    return get_tag_type(db, tag_type.id)


def update_tag_type(
    db: Session, tag_type_id: str, name: str, color: str, project_type_id: Optional[str] = None
) -> TagTypeModel:
    name = require_name(name)
    color = require_color(color)

    tag_type = get_tag_type(db, tag_type_id, project_type_id)
    tag_type.name = name
    tag_type.color = color
    commit_or_rollback(db)
    logger.info("Updated tag type %s (%s, %s)", tag_type_id, name, color)

    return get_tag_type(db, tag_type_id)


def delete_tag_type(db: Session, tag_type_id: str, project_type_id: Optional[str] = None) -> None:
    """删除标签类型：先删子标签，再删标签类型，同一事务内完成"""
    tag_type = get_tag_type(db, tag_type_id, project_type_id)

    try:
        deleted_tags = (
            db.query(TagModel)
            .filter(TagModel.tag_type_id == tag_type.id)
            .delete(synchronize_session="fetch")
        )
        db.expire(tag_type, ["tags"])
        db.delete(tag_type)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Deleted tag type %s with %d tags", tag_type_id, deleted_tags)
