"""
Versions API

Endpoints for the version log and rollback.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..context import RequestContext, get_request_context
from ..database import get_db
from ..schemas.version import (
    VersionCreate,
    VersionResponse,
    VersionListResponse,
    RollbackResponse,
)
from ..versioning import VersionLog, RollbackEngine

router = APIRouter(prefix="/projects/{project_id}/versions", tags=["versions"])


@router.post("", response_model=VersionResponse)
async def create_version(
    project_id: str,
    data: VersionCreate,
    db: AsyncSession = Depends(get_db),
):
    """Record a named set of file changes."""
    version = await VersionLog(db).create_version(project_id, data)
    return VersionResponse.model_validate(version)


@router.get("", response_model=VersionListResponse)
async def list_versions(
    project_id: str,
    db: AsyncSession = Depends(get_db),
):
    """List versions of a project, newest first."""
    versions = await VersionLog(db).list_versions(project_id)
    return VersionListResponse(
        versions=[VersionResponse.model_validate(v) for v in versions],
        total=len(versions),
    )


@router.post("/{version_id}/rollback", response_model=RollbackResponse)
async def rollback_version(
    project_id: str,
    version_id: str,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    """
    Undo the changes a version recorded.

    Only the owning session may roll back. The inverse changes are
    recorded as a new version authored by "system".
    """
    success = await RollbackEngine(db).rollback(ctx, project_id, version_id)
    return RollbackResponse(project_id=project_id, version_id=version_id, success=success)
