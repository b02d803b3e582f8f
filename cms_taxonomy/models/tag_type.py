# cms_taxonomy/models/tag_type.py
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from cms_taxonomy.models.database import Base
from cms_taxonomy.models.project_type import generate_id, utcnow


class TagType(Base):
    __tablename__ = "tag_types"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    color = Column(String(7), nullable=False)  # 十六进制颜色值，如 #228B22，子标签未设置颜色时继承
    # 为空表示全局标签类型
    project_type_id = Column(
        String(36), ForeignKey("project_types.id", ondelete="CASCADE"), nullable=True, index=True
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    project_type = relationship("ProjectType", back_populates="tag_types")
    tags = relationship(
        "Tag",
        back_populates="tag_type",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[Tag.created_at, Tag.id]",
    )
