"""
Deployment Model

Status-tagged deployment records referencing a project version.
"""
from datetime import datetime
from sqlalchemy import String, Text, DateTime, JSON, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import Optional
import enum
import uuid

from ..database import Base


class DeploymentStatus(str, enum.Enum):
    """Deployment lifecycle states."""
    PENDING = "pending"
    BUILDING = "building"
    DEPLOYED = "deployed"
    FAILED = "failed"


class Deployment(Base):
    """
    A deployment of one project version.

    A version may be deployed any number of times.
    """
    __tablename__ = "deployments"

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
    version_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("versions.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    status: Mapped[DeploymentStatus] = mapped_column(
        SQLEnum(DeploymentStatus),
        default=DeploymentStatus.PENDING,
        nullable=False
    )
    url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    build_logs: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Opaque passthrough for the deployment target
    config: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        index=True
    )
    deployed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # Relationship
    project: Mapped["Project"] = relationship(
        "Project",
        back_populates="deployments"
    )

    def __repr__(self) -> str:
        return f"<Deployment(id={self.id}, status={self.status})>"
