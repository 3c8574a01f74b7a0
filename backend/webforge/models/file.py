"""
File Model

Source files of a project. Files are soft-deleted so their paths can be
reused and their history survives.
"""
from datetime import datetime
from sqlalchemy import String, Text, DateTime, Integer, Boolean, Enum as SQLEnum, Index, text
from sqlalchemy.orm import Mapped, mapped_column
from typing import Optional
import enum
import uuid

from ..database import Base


class FileType(str, enum.Enum):
    """Supported source file types."""
    JS = "js"
    TS = "ts"
    JSX = "jsx"
    TSX = "tsx"
    CSS = "css"
    SCSS = "scss"
    HTML = "html"
    JSON = "json"
    MD = "md"
    TXT = "txt"  # generic text

    @classmethod
    def from_filename(cls, name: Optional[str]) -> "FileType":
        """Infer the type from a file name's extension, defaulting to text."""
        if name and "." in name:
            ext = name.rsplit(".", 1)[-1].lower()
            try:
                return cls(ext)
            except ValueError:
                pass
        return cls.TXT


def byte_size(content: str) -> int:
    """Size of file content in bytes (UTF-8)."""
    return len(content.encode("utf-8"))


class ProjectFile(Base):
    """
    A single file in a project.

    (project_id, path) is unique among non-deleted rows. The file service
    checks it to raise a clean conflict; a partial unique index enforces it
    in the database.
    """
    __tablename__ = "files"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    project_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    path: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    type: Mapped[FileType] = mapped_column(
        SQLEnum(FileType),
        nullable=False
    )

    # Always derived from content, never taken from the caller
    size: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False
    )

    __table_args__ = (
        Index("idx_files_project_path", "project_id", "path"),
        Index(
            "uq_files_live_path",
            "project_id",
            "path",
            unique=True,
            sqlite_where=text("is_deleted = 0"),
            postgresql_where=text("NOT is_deleted"),
        ),
    )

    def set_content(self, content: str) -> None:
        """Replace content and recompute size."""
        self.content = content
        self.size = byte_size(content)
        self.updated_at = datetime.utcnow()

    def __repr__(self) -> str:
        return f"<ProjectFile(id={self.id}, path={self.path}, deleted={self.is_deleted})>"
