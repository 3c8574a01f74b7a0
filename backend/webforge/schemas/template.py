"""
Template Schemas
"""
from datetime import datetime
from typing import List
from pydantic import BaseModel, Field

from ..models.file import FileType
from ..models.project import ProjectType


class TemplateFile(BaseModel):
    """A file snapshot stored inside a template."""
    path: str
    content: str
    type: FileType


class TemplateFromProject(BaseModel):
    """Request to capture a project as a template."""
    name: str = Field(..., min_length=1)
    description: str
    tags: List[str] = []

    model_config = {"extra": "forbid"}


class TemplateResponse(BaseModel):
    """Template data returned from API."""
    id: str
    name: str
    description: str
    type: ProjectType
    files: List[TemplateFile]
    tags: List[str]
    is_featured: bool
    created_at: datetime
    usage_count: int

    model_config = {"from_attributes": True}
