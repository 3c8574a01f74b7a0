"""
Collaboration Service

Shares projects with other sessions under a role.
"""
import logging
from typing import List

from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import transaction
from ..errors import NotFoundError, ConflictError
from ..models.collaboration import Collaboration, DEFAULT_PERMISSIONS
from ..models.project import Project
from ..models.session import Session
from ..schemas.collaboration import ShareRequest

logger = logging.getLogger(__name__)


class CollaborationService:
    """Create and list collaboration records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def share_project(self, project_id: str, data: ShareRequest) -> Collaboration:
        """Grant a session a role on a project; one grant per (project, session)."""
        async with transaction(self.db, "share_project"):
            if await self.db.get(Project, project_id) is None:
                raise NotFoundError(f"Project not found: {project_id}")

            if await self.db.get(Session, data.session_id) is None:
                raise NotFoundError(f"Session not found: {data.session_id}")

            existing = await self.db.execute(
                select(Collaboration.id).where(
                    and_(
                        Collaboration.project_id == project_id,
                        Collaboration.session_id == data.session_id,
                    )
                )
            )
            if existing.first() is not None:
                raise ConflictError("Collaboration already exists for this project and session")

            permissions = data.permissions
            if permissions is None:
                permissions = list(DEFAULT_PERMISSIONS[data.role])

            collaboration = Collaboration(
                project_id=project_id,
                session_id=data.session_id,
                role=data.role,
                permissions=permissions,
            )
            self.db.add(collaboration)

        logger.info(f"Shared project {project_id} with session {data.session_id} as {data.role.value}")
        return collaboration

    async def list_collaborations(self, project_id: str) -> List[Collaboration]:
        """All collaboration records of a project."""
        stmt = (
            select(Collaboration)
            .where(Collaboration.project_id == project_id)
            .order_by(Collaboration.invited_at)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
