"""
Collaborations API
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.collaboration import ShareRequest, CollaborationResponse
from ..services.collaboration import CollaborationService

router = APIRouter(prefix="/projects/{project_id}/collaborations", tags=["collaborations"])


@router.post("", response_model=CollaborationResponse)
async def share_project(
    project_id: str,
    data: ShareRequest,
    db: AsyncSession = Depends(get_db),
):
    """Share a project with another session."""
    collaboration = await CollaborationService(db).share_project(project_id, data)
    return CollaborationResponse.model_validate(collaboration)


@router.get("", response_model=List[CollaborationResponse])
async def list_collaborations(
    project_id: str,
    db: AsyncSession = Depends(get_db),
):
    collaborations = await CollaborationService(db).list_collaborations(project_id)
    return [CollaborationResponse.model_validate(c) for c in collaborations]
