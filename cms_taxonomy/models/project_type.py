# cms_taxonomy/models/project_type.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from cms_taxonomy.models.database import Base


def generate_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProjectType(Base):
    __tablename__ = "project_types"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # 一个项目类型拥有多个标签类型
    tag_types = relationship(
        "TagType",
        back_populates="project_type",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[TagType.created_at, TagType.id]",
    )
