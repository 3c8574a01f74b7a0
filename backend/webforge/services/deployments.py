"""
Deployment Service

Records deployment requests for project versions. No build runs here;
records start pending and stay there until something external moves them.
"""
import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import transaction
from ..errors import NotFoundError, ConflictError
from ..models.deployment import Deployment, DeploymentStatus
from ..models.project import Project
from ..models.version import Version
from ..schemas.deployment import DeploymentCreate

logger = logging.getLogger(__name__)

INITIAL_BUILD_LOG = "Starting deployment...\n"


class DeploymentService:
    """Create and list deployments."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_deployment(self, project_id: str, data: DeploymentCreate) -> Deployment:
        """Queue a deployment of a version that belongs to the project."""
        async with transaction(self.db, "create_deployment"):
            if await self.db.get(Project, project_id) is None:
                raise NotFoundError(f"Project not found: {project_id}")

            version = await self.db.get(Version, data.version_id)
            if version is None:
                raise NotFoundError(f"Version not found: {data.version_id}")

            if version.project_id != project_id:
                raise ConflictError(
                    f"Version {data.version_id} does not belong to project {project_id}"
                )

            deployment = Deployment(
                project_id=project_id,
                version_id=data.version_id,
                status=DeploymentStatus.PENDING,
                url=None,
                build_logs=INITIAL_BUILD_LOG,
                deployed_at=None,
                config=data.config,
            )
            self.db.add(deployment)

        logger.info(f"Queued deployment {deployment.id} of version {version.commit_hash}")
        return deployment

    async def list_deployments(self, project_id: str) -> List[Deployment]:
        """Deployments of a project, newest first."""
        stmt = (
            select(Deployment)
            .where(Deployment.project_id == project_id)
            .order_by(Deployment.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
