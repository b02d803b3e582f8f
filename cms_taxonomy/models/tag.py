# cms_taxonomy/models/tag.py
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from cms_taxonomy.models.database import Base
from cms_taxonomy.models.project_type import generate_id, utcnow


class Tag(Base):
    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    color = Column(String(7), nullable=True)  # 可选，为空时使用所属标签类型的颜色
    tag_type_id = Column(
        String(36), ForeignKey("tag_types.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    tag_type = relationship("TagType", back_populates="tags")
