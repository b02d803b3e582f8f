# cms_taxonomy/service/tag_store.py
"""
标签的增删改

所有写操作都返回完整的父级标签类型（含最新的标签列表），调用方整体替换本地数据即可
"""
from typing import Optional

from sqlalchemy.orm import Session

from cms_taxonomy.errors import NotFound
from cms_taxonomy.logger import get_logger
from cms_taxonomy.models.database import commit_or_rollback
from cms_taxonomy.models.tag import Tag as TagModel
from cms_taxonomy.models.tag_type import TagType as TagTypeModel
from cms_taxonomy.service.tag_type_store import get_tag_type
from cms_taxonomy.service.validators import optional_color, require_name

logger = get_logger(__name__)


def get_tag(
    db: Session, tag_type_id: str, tag_id: str, project_type_id: Optional[str] = None
) -> TagModel:
    get_tag_type(db, tag_type_id, project_type_id)

    tag = db.query(TagModel).filter(TagModel.id == tag_id, TagModel.tag_type_id == tag_type_id).first()
    if not tag:
        logger.warning("Tag %s not found in tag type %s", tag_id, tag_type_id)
        raise NotFound("Tag not found")
    return tag


def create_tag(
    db: Session,
    tag_type_id: str,
    name: str,
    color: Optional[str] = None,
    project_type_id: Optional[str] = None,
) -> TagTypeModel:
    name = require_name(name)
    color = optional_color(color)

    # 先确认标签类型存在
    get_tag_type(db, tag_type_id, project_type_id)

    tag = TagModel(name=name, color=color, tag_type_id=tag_type_id)
    db.add(tag)
    commit_or_rollback(db)
    logger.info("Created tag %s (%s) in tag type %s", tag.id, name, tag_type_id)

    return get_tag_type(db, tag_type_id)


def update_tag(
    db: Session,
    tag_type_id: str,
    tag_id: str,
    name: str,
    color: Optional[str] = None,
    project_type_id: Optional[str] = None,
) -> TagTypeModel:
    """整体替换名称与颜色；不传颜色即清除自定义颜色，恢复继承"""
    name = require_name(name)
    color = optional_color(color)

    tag = get_tag(db, tag_type_id, tag_id, project_type_id)
    tag.name = name
    tag.color = color
    commit_or_rollback(db)
    logger.info("Updated tag %s (%s)", tag_id, name)

    return get_tag_type(db, tag_type_id)


def delete_tag(
    db: Session, tag_type_id: str, tag_id: str, project_type_id: Optional[str] = None
) -> TagTypeModel:
    tag = get_tag(db, tag_type_id, tag_id, project_type_id)
    db.delete(tag)
    commit_or_rollback(db)
    logger.info("Deleted tag %s from tag type %s", tag_id, tag_type_id)

    return get_tag_type(db, tag_type_id)
