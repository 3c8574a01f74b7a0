"""
Project Schemas

Pydantic models for project API requests and responses.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from ..models.project import ProjectType


class ProjectCreate(BaseModel):
    """Request to create a new project."""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    type: ProjectType
    template_id: Optional[str] = None
    session_id: str

    model_config = {"extra": "forbid"}


class ProjectUpdate(BaseModel):
    """Request to update a project."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    is_public: Optional[bool] = None

    model_config = {"extra": "forbid"}


class ProjectResponse(BaseModel):
    """Project data returned from API."""
    id: str
    name: str
    description: Optional[str] = None
    type: ProjectType
    template_id: Optional[str] = None
    session_id: str
    created_at: datetime
    updated_at: datetime
    is_public: bool
    preview_url: Optional[str] = None
    deployment_url: Optional[str] = None

    model_config = {"from_attributes": True}


class ProjectListResponse(BaseModel):
    """List of projects."""
    projects: list[ProjectResponse]
    total: int


class ProjectDeleteResponse(BaseModel):
    """Outcome of a delete request."""
    project_id: str
    deleted: bool
