"""
Session Schemas

Pydantic models for anonymous session requests and responses.
"""
from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel

from ..models.session import SessionStatus


class SessionCreate(BaseModel):
    """Request to open an anonymous session."""
    browser_fingerprint: str
    ip_address: str
    user_agent: str
    metadata: Optional[Dict[str, Any]] = None

    model_config = {"extra": "forbid"}


class SessionResponse(BaseModel):
    """Session data returned from API."""
    id: str
    browser_fingerprint: str
    ip_address: str
    user_agent: str
    status: SessionStatus
    created_at: datetime
    last_activity: datetime
    expires_at: datetime
    metadata: Optional[Dict[str, Any]] = None
