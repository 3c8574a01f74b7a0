"""
File Service

File store for project sources: path uniqueness among live files,
size derived from content, soft deletion.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..context import RequestContext, require_owner
from ..database import transaction
from ..errors import NotFoundError, ConflictError
from ..models.file import ProjectFile, byte_size
from ..models.project import Project
from ..schemas.file import FileCreate, FileUpdate
from ..tracer import trace_step

logger = logging.getLogger(__name__)


async def find_live_file_at_path(
    db: AsyncSession,
    project_id: str,
    path: str,
    exclude_id: Optional[str] = None,
) -> Optional[ProjectFile]:
    """Non-deleted file occupying a path in a project, if any."""
    conditions = [
        ProjectFile.project_id == project_id,
        ProjectFile.path == path,
        ProjectFile.is_deleted.is_(False),
    ]
    if exclude_id is not None:
        conditions.append(ProjectFile.id != exclude_id)

    result = await db.execute(select(ProjectFile).where(and_(*conditions)).limit(1))
    return result.scalar_one_or_none()


class FileService:
    """Create, edit, list and soft-delete project files."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_file(self, project_id: str, data: FileCreate) -> ProjectFile:
        """Add a file. Fails if a live file already holds the path."""
        try:
            async with transaction(self.db, "create_file"):
                project = await self.db.get(Project, project_id)
                if project is None:
                    raise NotFoundError(f"Project not found: {project_id}")

                if await find_live_file_at_path(self.db, project_id, data.path):
                    raise ConflictError(f"A file already exists at path {data.path}")

                now = datetime.utcnow()
                file = ProjectFile(
                    project_id=project_id,
                    name=data.name,
                    path=data.path,
                    content=data.content,
                    type=data.type,
                    size=byte_size(data.content),
                    is_deleted=False,
                    created_at=now,
                    updated_at=now,
                )
                self.db.add(file)
        except IntegrityError:
            # Lost a race for the path against a concurrent create
            raise ConflictError(f"A file already exists at path {data.path}")

        logger.info(f"Created file {file.path} ({file.size} bytes) in project {project_id}")
        return file

    async def update_file(self, file_id: str, data: FileUpdate) -> ProjectFile:
        """Edit content, name or path. updated_at is refreshed even for empty updates."""
        async with transaction(self.db, "update_file"):
            file = await self.db.get(ProjectFile, file_id)
            if file is None:
                raise NotFoundError(f"File not found: {file_id}")

            if data.path is not None and data.path != file.path:
                # Deleted rows do not hold their path
                if not file.is_deleted and await find_live_file_at_path(
                    self.db, file.project_id, data.path, exclude_id=file.id
                ):
                    raise ConflictError(f"A file already exists at path {data.path}")
                file.path = data.path

            if data.name is not None:
                file.name = data.name

            if data.content is not None:
                file.set_content(data.content)

            file.updated_at = datetime.utcnow()

        return file

    async def list_files(self, project_id: str) -> List[ProjectFile]:
        """Live files of a project. Unknown projects simply have none."""
        stmt = (
            select(ProjectFile)
            .where(
                and_(
                    ProjectFile.project_id == project_id,
                    ProjectFile.is_deleted.is_(False),
                )
            )
            .order_by(ProjectFile.path)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete_file(self, ctx: RequestContext, file_id: str) -> bool:
        """Soft-delete a file in a project owned by the caller."""
        async with transaction(self.db, "delete_file"):
            file = await self.db.get(ProjectFile, file_id)
            if file is None:
                raise NotFoundError(f"File not found: {file_id}")

            project = await self.db.get(Project, file.project_id)
            require_owner(ctx, project, "Unauthorized: access denied, file belongs to a different session")

            if file.is_deleted:
                raise ConflictError("File is already deleted")

            trace_step("services.files", f"Soft-deleting {file.path}")
            file.is_deleted = True
            file.updated_at = datetime.utcnow()

        return True
