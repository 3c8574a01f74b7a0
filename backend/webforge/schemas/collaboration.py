"""
Collaboration Schemas
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel

from ..models.collaboration import CollaborationRole


class ShareRequest(BaseModel):
    """Grant another session access to a project."""
    session_id: str
    role: CollaborationRole
    permissions: Optional[List[str]] = None

    model_config = {"extra": "forbid"}


class CollaborationResponse(BaseModel):
    """Collaboration record."""
    id: str
    project_id: str
    session_id: str
    role: CollaborationRole
    invited_at: datetime
    last_active: Optional[datetime] = None
    permissions: List[str]

    model_config = {"from_attributes": True}
