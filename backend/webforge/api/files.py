"""
Files API

Endpoints for project files.
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..context import RequestContext, get_request_context
from ..database import get_db
from ..schemas.file import FileCreate, FileUpdate, FileResponse, FileDeleteResponse
from ..services.files import FileService

router = APIRouter(tags=["files"])


@router.post("/projects/{project_id}/files", response_model=FileResponse)
async def create_file(
    project_id: str,
    data: FileCreate,
    db: AsyncSession = Depends(get_db),
):
    """Add a file to a project."""
    file = await FileService(db).create_file(project_id, data)
    return FileResponse.model_validate(file)


@router.get("/projects/{project_id}/files", response_model=List[FileResponse])
async def list_files(
    project_id: str,
    db: AsyncSession = Depends(get_db),
):
    """List live files of a project."""
    files = await FileService(db).list_files(project_id)
    return [FileResponse.model_validate(f) for f in files]


@router.patch("/files/{file_id}", response_model=FileResponse)
async def update_file(
    file_id: str,
    data: FileUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Edit a file's content, name or path."""
    file = await FileService(db).update_file(file_id, data)
    return FileResponse.model_validate(file)


@router.delete("/files/{file_id}", response_model=FileDeleteResponse)
async def delete_file(
    file_id: str,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    """Soft-delete a file of a project owned by the acting session."""
    deleted = await FileService(db).delete_file(ctx, file_id)
    return FileDeleteResponse(file_id=file_id, deleted=deleted)
