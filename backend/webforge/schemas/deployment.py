"""
Deployment Schemas
"""
from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel

from ..models.deployment import DeploymentStatus


class DeploymentCreate(BaseModel):
    """Request to deploy a project version. config is passed through untouched."""
    version_id: str
    config: Optional[Dict[str, Any]] = None

    model_config = {"extra": "forbid"}


class DeploymentResponse(BaseModel):
    """Deployment record."""
    id: str
    project_id: str
    version_id: str
    status: DeploymentStatus
    url: Optional[str] = None
    build_logs: Optional[str] = None
    created_at: datetime
    deployed_at: Optional[datetime] = None
    config: Optional[Dict[str, Any]] = None

    model_config = {"from_attributes": True}
