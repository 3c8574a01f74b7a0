"""
Project Service

Project lifecycle: creation (optionally from a template), updates,
cascade deletion and per-session listing.
"""
import logging
import uuid
from datetime import datetime
from typing import List

from sqlalchemy import select, update, delete, or_
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..context import RequestContext
from ..database import transaction
from ..errors import NotFoundError
from ..models.ai_chat import AiChat
from ..models.collaboration import Collaboration
from ..models.deployment import Deployment
from ..models.file import ProjectFile, FileType, byte_size
from ..models.project import Project
from ..models.session import Session
from ..models.template import Template
from ..models.version import Version
from ..schemas.project import ProjectCreate, ProjectUpdate
from ..schemas.template import TemplateFile
from ..tracer import traced, trace_step, trace_input

logger = logging.getLogger(__name__)


def preview_url_for(project_id: str) -> str:
    """Live preview URL of a project."""
    return f"{settings.preview_base_url}/{project_id}"


def _name_from_path(path: str) -> str:
    """Last segment of a file path."""
    return path.rstrip("/").rsplit("/", 1)[-1] or path


class ProjectService:
    """
    Project store.

    Creating from a template, and deleting, each touch several tables
    and run as a single transaction.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, project_id: str) -> Project:
        project = await self.db.get(Project, project_id)
        if project is None:
            raise NotFoundError(f"Project not found: {project_id}")
        return project

    @traced("services.projects")
    async def create_project(self, data: ProjectCreate) -> Project:
        """Create a project, copying template files when a template is given."""
        trace_input("services.projects", "name", data.name)

        async with transaction(self.db, "create_project"):
            session = await self.db.get(Session, data.session_id)
            if session is None:
                raise NotFoundError(f"Session not found: {data.session_id}")

            template = None
            if data.template_id:
                template = await self.db.get(Template, data.template_id)
                if template is None:
                    raise NotFoundError(f"Template not found: {data.template_id}")

            project_id = str(uuid.uuid4())
            now = datetime.utcnow()
            project = Project(
                id=project_id,
                name=data.name,
                description=data.description,
                type=data.type,
                template_id=data.template_id,
                session_id=data.session_id,
                is_public=False,
                preview_url=preview_url_for(project_id),
                created_at=now,
                updated_at=now,
            )
            self.db.add(project)

            if template is not None:
                snapshots = [TemplateFile.model_validate(f) for f in template.files]
                trace_step("services.projects", f"Copying {len(snapshots)} template files")
                for snapshot in snapshots:
                    self.db.add(ProjectFile(
                        project_id=project_id,
                        name=_name_from_path(snapshot.path),
                        path=snapshot.path,
                        content=snapshot.content,
                        type=FileType(snapshot.type),
                        size=byte_size(snapshot.content),
                        is_deleted=False,
                        created_at=now,
                        updated_at=now,
                    ))

                await self.db.execute(
                    update(Template)
                    .where(Template.id == template.id)
                    .values(usage_count=Template.usage_count + 1)
                )

        logger.info(f"Created project {project.id} for session {data.session_id}")
        return project

    async def get_project(self, project_id: str) -> Project:
        """Get a project by ID."""
        return await self._get(project_id)

    async def list_projects(self, session_id: str) -> List[Project]:
        """Projects owned by the session plus projects shared with it."""
        shared = select(Collaboration.project_id).where(
            Collaboration.session_id == session_id
        )
        stmt = (
            select(Project)
            .where(
                or_(
                    Project.session_id == session_id,
                    Project.id.in_(shared),
                )
            )
            .order_by(Project.updated_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update_project(self, project_id: str, data: ProjectUpdate) -> Project:
        """Partially update a project. updated_at is always refreshed."""
        async with transaction(self.db, "update_project"):
            project = await self._get(project_id)

            for field, value in data.model_dump(exclude_unset=True).items():
                setattr(project, field, value)
            project.updated_at = datetime.utcnow()

        return project

    @traced("services.projects")
    async def delete_project(self, ctx: RequestContext, project_id: str) -> bool:
        """
        Delete a project owned by the caller.

        Files are soft-deleted and kept; chats, collaborations, deployments,
        versions and the project row are removed. Returns False, touching
        nothing, when the project is missing or owned by someone else.
        """
        async with transaction(self.db, "delete_project"):
            project = await self.db.get(Project, project_id)
            if not ctx.owns(project):
                logger.info(f"Refused delete of project {project_id} for session {ctx.session_id}")
                return False

            now = datetime.utcnow()
            await self.db.execute(
                update(ProjectFile)
                .where(ProjectFile.project_id == project_id)
                .values(is_deleted=True, updated_at=now)
            )

            # Deployments reference versions, so they go first
            for model in (AiChat, Collaboration, Deployment, Version):
                await self.db.execute(delete(model).where(model.project_id == project_id))

            await self.db.execute(delete(Project).where(Project.id == project_id))

        logger.info(f"Deleted project {project_id}")
        return True
