"""
Collaboration Model

Role and permission grants linking a project to another session.
"""
from datetime import datetime
from sqlalchemy import String, DateTime, JSON, ForeignKey, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import Optional, List
import enum
import uuid

from ..database import Base


class CollaborationRole(str, enum.Enum):
    """Roles a session can hold on a shared project."""
    OWNER = "owner"
    EDITOR = "editor"
    VIEWER = "viewer"


DEFAULT_PERMISSIONS = {
    CollaborationRole.OWNER: ["read", "write", "delete", "share", "deploy"],
    CollaborationRole.EDITOR: ["read", "write"],
    CollaborationRole.VIEWER: ["read"],
}


class Collaboration(Base):
    """A session's access to a project it does not own."""
    __tablename__ = "collaborations"

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
    session_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    role: Mapped[CollaborationRole] = mapped_column(
        SQLEnum(CollaborationRole),
        nullable=False
    )
    permissions: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    invited_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False
    )
    last_active: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # Relationship
    project: Mapped["Project"] = relationship(
        "Project",
        back_populates="collaborations"
    )

    __table_args__ = (
        UniqueConstraint("project_id", "session_id", name="uq_collaboration_project_session"),
    )

    def __repr__(self) -> str:
        return f"<Collaboration(project={self.project_id}, session={self.session_id}, role={self.role})>"
