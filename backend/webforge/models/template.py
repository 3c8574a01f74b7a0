"""
Template Model

Named bundles of file snapshots used to seed new projects.
"""
from datetime import datetime
from sqlalchemy import String, Text, DateTime, Integer, Boolean, JSON, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column
from typing import List
import uuid

from ..database import Base
from .project import ProjectType


class Template(Base):
    """
    A project template.

    files holds value copies ({path, content, type}), never references
    to live File rows.
    """
    __tablename__ = "templates"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    type: Mapped[ProjectType] = mapped_column(
        SQLEnum(ProjectType),
        nullable=False
    )

    files: Mapped[List[dict]] = mapped_column(JSON, nullable=False, default=list)
    tags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    usage_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False
    )

    __table_args__ = (
        Index("idx_templates_ranking", "is_featured", "usage_count"),
    )

    def __repr__(self) -> str:
        return f"<Template(id={self.id}, name={self.name}, uses={self.usage_count})>"
