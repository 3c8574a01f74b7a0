"""
Version Model

Append-only commit log for project files.
Each version carries the ordered list of file changes it recorded.
"""
from datetime import datetime
from sqlalchemy import String, Text, DateTime, JSON, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List
import enum
import uuid

from ..database import Base


class ChangeAction(str, enum.Enum):
    """What a version did to a file."""
    CREATED = "created"
    MODIFIED = "modified"
    DELETED = "deleted"


class Version(Base):
    """
    A named, hashed commit.

    file_changes is stored as a JSON list of
    {file_id, action, content_before, content_after, file_name, file_path, file_type}.
    Versions are never updated; they disappear only with their project.
    """
    __tablename__ = "versions"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    project_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Advisory digest, not a key
    commit_hash: Mapped[str] = mapped_column(String(8), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)

    file_changes: Mapped[List[dict]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        index=True
    )

    # Relationships
    project: Mapped["Project"] = relationship(
        "Project",
        back_populates="versions"
    )

    __table_args__ = (
        Index("idx_versions_project_time", "project_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Version(id={self.id}, commit={self.commit_hash})>"
