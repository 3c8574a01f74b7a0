"""
AI Chat Model

Log of assistant exchanges per session, optionally tied to a project.
"""
from datetime import datetime
from sqlalchemy import String, Text, DateTime, Integer, JSON, ForeignKey, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column
from typing import Optional, List
import enum
import uuid

from ..database import Base


class AiModel(str, enum.Enum):
    """Assistant models a chat can be addressed to."""
    GPT_4 = "gpt-4"
    CLAUDE_3 = "claude-3"
    GEMINI_PRO = "gemini-pro"
    CUSTOM = "custom"


class AiChat(Base):
    """A single user message and the assistant's reply."""
    __tablename__ = "ai_chats"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    session_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    project_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )

    message: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=False)

    model: Mapped[AiModel] = mapped_column(SQLEnum(AiModel), nullable=False)
    tokens_used: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # File ids the user attached as context
    context_files: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        index=True
    )

    __table_args__ = (
        Index("idx_chats_session_time", "session_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<AiChat(id={self.id}, model={self.model})>"
