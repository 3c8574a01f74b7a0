"""
File Schemas

Pydantic models for project file requests and responses.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from ..models.file import FileType


class FileCreate(BaseModel):
    """Request to add a file to a project."""
    name: str = Field(..., min_length=1, max_length=255)
    path: str = Field(..., min_length=1)
    content: str
    type: FileType

    model_config = {"extra": "forbid"}


class FileUpdate(BaseModel):
    """Request to edit a file. Size is always recomputed from content."""
    content: Optional[str] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    path: Optional[str] = Field(None, min_length=1)

    model_config = {"extra": "forbid"}


class FileResponse(BaseModel):
    """File data returned from API."""
    id: str
    project_id: str
    name: str
    path: str
    content: str
    type: FileType
    size: int
    created_at: datetime
    updated_at: datetime
    is_deleted: bool

    model_config = {"from_attributes": True}


class FileDeleteResponse(BaseModel):
    """Outcome of a soft delete."""
    file_id: str
    deleted: bool
