"""
Chat Schemas

Pydantic models for assistant chat requests and responses.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from ..models.ai_chat import AiModel


class ChatRequest(BaseModel):
    """Message for the assistant, sent on behalf of the acting session."""
    message: str = Field(..., min_length=1)
    project_id: Optional[str] = None
    model: Optional[AiModel] = None
    context_files: Optional[List[str]] = None

    model_config = {"extra": "forbid", "protected_namespaces": ()}


class ChatResponse(BaseModel):
    """Recorded exchange."""
    id: str
    session_id: str
    project_id: Optional[str] = None
    message: str
    response: str
    model: AiModel
    tokens_used: int
    created_at: datetime
    context_files: Optional[List[str]] = None

    model_config = {"from_attributes": True, "protected_namespaces": ()}


class ChatHistoryResponse(BaseModel):
    """Chats of a session, newest first."""
    chats: List[ChatResponse]
    total: int
