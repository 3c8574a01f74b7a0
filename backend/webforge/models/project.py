"""
Project Model

Projects are the top-level container for files, versions and deployments.
Each project is owned by exactly one session.
"""
from datetime import datetime
from sqlalchemy import String, Text, DateTime, Boolean, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import Optional, List
import enum
import uuid

from ..database import Base


class ProjectType(str, enum.Enum):
    """Frameworks a project can be built with."""
    REACT = "react"
    VANILLA = "vanilla"
    VUE = "vue"
    ANGULAR = "angular"
    NODE = "node"


class Project(Base):
    """
    A web project owned by a session.

    Other sessions reach a project only through Collaboration records.
    Files are not linked by foreign key: soft-deleted files are kept as
    history after their project is removed.
    """
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    type: Mapped[ProjectType] = mapped_column(
        SQLEnum(ProjectType),
        nullable=False
    )

    # Template the project was seeded from, if any
    template_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("templates.id", ondelete="SET NULL"),
        nullable=True
    )
    session_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    preview_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    deployment_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

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

    # Relationships
    session: Mapped["Session"] = relationship(
        "Session",
        back_populates="projects"
    )
    versions: Mapped[List["Version"]] = relationship(
        "Version",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
    collaborations: Mapped[List["Collaboration"]] = relationship(
        "Collaboration",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
    deployments: Mapped[List["Deployment"]] = relationship(
        "Deployment",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name={self.name})>"
