"""
Deployments API
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.deployment import DeploymentCreate, DeploymentResponse
from ..services.deployments import DeploymentService

router = APIRouter(prefix="/projects/{project_id}/deployments", tags=["deployments"])


@router.post("", response_model=DeploymentResponse)
async def create_deployment(
    project_id: str,
    data: DeploymentCreate,
    db: AsyncSession = Depends(get_db),
):
    """Queue a deployment of a project version."""
    deployment = await DeploymentService(db).create_deployment(project_id, data)
    return DeploymentResponse.model_validate(deployment)


@router.get("", response_model=List[DeploymentResponse])
async def list_deployments(
    project_id: str,
    db: AsyncSession = Depends(get_db),
):
    deployments = await DeploymentService(db).list_deployments(project_id)
    return [DeploymentResponse.model_validate(d) for d in deployments]
