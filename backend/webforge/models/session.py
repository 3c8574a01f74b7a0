"""
Session Model

Anonymous identity handles. Every project, chat and collaboration
is scoped by the session that created it.
"""
from datetime import datetime
from sqlalchemy import String, Text, DateTime, JSON, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import Optional, List
import enum
import uuid

from ..database import Base


class SessionStatus(str, enum.Enum):
    """Lifecycle of an anonymous session."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"


class Session(Base):
    """
    An anonymous browser session.

    Sessions expire a fixed number of hours after creation;
    last_activity is refreshed on every read but does not extend expiry.
    """
    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    browser_fingerprint: Mapped[str] = mapped_column(Text, nullable=False)
    ip_address: Mapped[str] = mapped_column(String(64), nullable=False)
    user_agent: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[SessionStatus] = mapped_column(
        SQLEnum(SessionStatus),
        default=SessionStatus.ACTIVE,
        nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False
    )
    last_activity: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # 'metadata' is reserved by SQLAlchemy, so the attribute is renamed
    session_metadata: Mapped[Optional[dict]] = mapped_column(
        "metadata",
        JSON,
        nullable=True
    )

    # Relationships
    projects: Mapped[List["Project"]] = relationship(
        "Project",
        back_populates="session",
        passive_deletes=True
    )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check whether the fixed expiry has passed."""
        return (now or datetime.utcnow()) >= self.expires_at

    def __repr__(self) -> str:
        return f"<Session(id={self.id}, status={self.status})>"
