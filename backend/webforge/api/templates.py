"""
Templates API

Template catalog and capturing projects as templates.
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.template import TemplateFromProject, TemplateResponse
from ..services.templates import TemplateCatalog

router = APIRouter(tags=["templates"])


@router.get("/templates", response_model=List[TemplateResponse])
async def list_templates(
    db: AsyncSession = Depends(get_db),
):
    """List templates, featured first, then by usage."""
    templates = await TemplateCatalog(db).list_templates()
    return [TemplateResponse.model_validate(t) for t in templates]


@router.post("/projects/{project_id}/template", response_model=TemplateResponse)
async def create_template_from_project(
    project_id: str,
    data: TemplateFromProject,
    db: AsyncSession = Depends(get_db),
):
    """Capture a project's live files as a new template."""
    template = await TemplateCatalog(db).create_from_project(project_id, data)
    return TemplateResponse.model_validate(template)
