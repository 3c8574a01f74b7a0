"""
Version Log

Append-only history of named, hashed commits for a project.
Recording a version never touches files; it trusts the caller's payload.
"""
import hashlib
import json
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import transaction
from ..errors import NotFoundError
from ..models.project import Project
from ..models.version import Version
from ..schemas.version import FileChange, VersionCreate
from ..tracer import trace_step

logger = logging.getLogger(__name__)

COMMIT_HASH_LENGTH = 8


def serialize_changes(changes: Sequence[FileChange]) -> List[dict]:
    """JSON-ready form of file changes, in recorded order."""
    return [change.model_dump(mode="json") for change in changes]


def compute_commit_hash(file_changes: List[dict], created_at: datetime, project_id: str) -> str:
    """
    Short digest over the change payload, creation time and project.

    Advisory only; collisions are tolerated.
    """
    payload = json.dumps(file_changes, sort_keys=True) + created_at.isoformat() + project_id
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:COMMIT_HASH_LENGTH]


class VersionLog:
    """Record and read project versions."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def append(
        self,
        project_id: str,
        message: str,
        author: str,
        changes: Sequence[FileChange],
    ) -> Version:
        """
        Add a version to the current transaction without committing.

        Callers own the transaction boundary.
        """
        now = datetime.utcnow()
        file_changes = serialize_changes(changes)
        version = Version(
            project_id=project_id,
            commit_hash=compute_commit_hash(file_changes, now, project_id),
            message=message,
            author=author,
            file_changes=file_changes,
            created_at=now,
        )
        self.db.add(version)
        await self.db.flush()

        trace_step("versioning.log", f"Appended {version.commit_hash} with {len(file_changes)} changes")
        return version

    async def create_version(self, project_id: str, data: VersionCreate) -> Version:
        """Record a version for an existing project."""
        async with transaction(self.db, "create_version"):
            project = await self.db.get(Project, project_id)
            if project is None:
                raise NotFoundError(f"Project not found: {project_id}")

            version = await self.append(project_id, data.message, data.author, data.file_changes)

        logger.info(f"Recorded version {version.commit_hash} for project {project_id}")
        return version

    async def list_versions(self, project_id: str) -> List[Version]:
        """Versions of a project, newest first. Unknown projects have none."""
        stmt = (
            select(Version)
            .where(Version.project_id == project_id)
            .order_by(Version.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_version(self, project_id: str, version_id: str) -> Optional[Version]:
        """A version, only if it belongs to the project."""
        stmt = select(Version).where(
            and_(
                Version.id == version_id,
                Version.project_id == project_id,
            )
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def history_oldest_first(self, project_id: str) -> List[Version]:
        """Versions of a project in recording order."""
        stmt = (
            select(Version)
            .where(Version.project_id == project_id)
            .order_by(Version.created_at.asc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
