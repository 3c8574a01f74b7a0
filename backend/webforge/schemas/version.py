"""
Version Schemas

Pydantic models for the version log.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from ..models.file import FileType
from ..models.version import ChangeAction


class FileChange(BaseModel):
    """
    One file-level change recorded by a version.

    file_name, file_path and file_type are optional hints kept so a
    deleted file can be re-created with its original metadata on rollback.
    """
    file_id: str
    action: ChangeAction
    content_before: Optional[str] = None
    content_after: Optional[str] = None
    file_name: Optional[str] = None
    file_path: Optional[str] = None
    file_type: Optional[FileType] = None


class VersionCreate(BaseModel):
    """Request to record a version."""
    message: str = Field(..., min_length=1)
    author: str
    file_changes: List[FileChange] = []

    model_config = {"extra": "forbid"}


class VersionResponse(BaseModel):
    """Version data returned from API."""
    id: str
    project_id: str
    commit_hash: str
    message: str
    author: str
    created_at: datetime
    file_changes: List[FileChange]

    model_config = {"from_attributes": True}


class VersionListResponse(BaseModel):
    """Versions of a project, newest first."""
    versions: List[VersionResponse]
    total: int


class RollbackResponse(BaseModel):
    """Outcome of a rollback."""
    project_id: str
    version_id: str
    success: bool
