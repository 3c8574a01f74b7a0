"""
Rollback Engine

Applies the inverse of a recorded version to current file state and logs
that inverse as a new version.

Steps:
1. Authorize: only the project's owning session may roll back
2. Load the target version (must belong to the project)
3. Invert each file change in recorded order
4. Append the compensating version and touch the project

Everything runs in one transaction; any failure undoes all file edits.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..context import RequestContext, require_owner
from ..database import transaction
from ..errors import NotFoundError, ConflictError
from ..models.file import ProjectFile, FileType, byte_size
from ..models.project import Project
from ..models.version import ChangeAction
from ..schemas.version import FileChange
from ..services.files import find_live_file_at_path
from ..tracer import trace_section, trace_input, trace_change, trace_output
from .log import VersionLog

logger = logging.getLogger(__name__)

ROLLBACK_AUTHOR = "system"
ROLLBACK_MESSAGE_PREFIX = "Rollback to version: "

FALLBACK_FILE_NAME = "restored_file"


@dataclass
class RecoveredFile:
    """Name, path and type for re-creating a file that has no row."""
    name: str
    path: str
    type: FileType
    used_fallback: bool


def _hints(file: ProjectFile) -> dict:
    """Metadata hints carried on compensating records."""
    return {"file_name": file.name, "file_path": file.path, "file_type": file.type}


class RollbackEngine:
    """Inverts a version's file changes."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.log = VersionLog(db)

    async def rollback(self, ctx: RequestContext, project_id: str, version_id: str) -> bool:
        """
        Roll back the changes recorded by a version.

        Raises AccessDeniedError when the project is missing or not owned by
        the caller (collaborators are not honored), NotFoundError when the
        version is missing or belongs to another project.
        """
        trace_section("Rollback")
        trace_input("versioning.rollback", "version_id", version_id)

        async with transaction(self.db, "rollback_version"):
            project = require_owner(ctx, await self.db.get(Project, project_id))

            target = await self.log.get_version(project_id, version_id)
            if target is None:
                raise NotFoundError(f"Version not found: {version_id}")

            compensating = []
            for raw in target.file_changes:
                change = FileChange.model_validate(raw)
                record = await self._invert(project_id, change)
                if record is not None:
                    compensating.append(record)

            rollback_version = await self.log.append(
                project_id,
                ROLLBACK_MESSAGE_PREFIX + target.message,
                ROLLBACK_AUTHOR,
                compensating,
            )
            project.updated_at = datetime.utcnow()

        logger.info(
            f"Rolled back version {target.commit_hash} of project {project_id} "
            f"as {rollback_version.commit_hash} ({len(compensating)} changes)"
        )
        trace_output("versioning.rollback", "commit_hash", rollback_version.commit_hash)
        return True

    async def _invert(self, project_id: str, change: FileChange) -> Optional[FileChange]:
        if change.action == ChangeAction.CREATED:
            return await self._undo_create(project_id, change)
        if change.action == ChangeAction.MODIFIED:
            return await self._undo_modify(project_id, change)
        return await self._undo_delete(project_id, change)

    async def _live_file(self, project_id: str, file_id: str) -> Optional[ProjectFile]:
        """Non-deleted file of this project, if any."""
        file = await self.db.get(ProjectFile, file_id)
        if file is None or file.project_id != project_id or file.is_deleted:
            return None
        return file

    async def _undo_create(self, project_id: str, change: FileChange) -> Optional[FileChange]:
        """A created file is soft-deleted again."""
        file = await self._live_file(project_id, change.file_id)
        if file is None:
            trace_change("versioning.rollback", change.file_id, change.action.value, "skipped, file gone")
            return None

        content = file.content
        file.is_deleted = True
        file.updated_at = datetime.utcnow()

        trace_change("versioning.rollback", change.file_id, change.action.value, "soft-deleted")
        return FileChange(
            file_id=file.id,
            action=ChangeAction.DELETED,
            content_before=content,
            content_after=None,
            **_hints(file),
        )

    async def _undo_modify(self, project_id: str, change: FileChange) -> Optional[FileChange]:
        """A modified file gets its recorded previous content back."""
        if change.content_before is None:
            trace_change("versioning.rollback", change.file_id, change.action.value, "skipped, no previous content")
            return None

        file = await self._live_file(project_id, change.file_id)
        if file is None:
            trace_change("versioning.rollback", change.file_id, change.action.value, "skipped, file gone")
            return None

        current = file.content
        file.set_content(change.content_before)

        trace_change("versioning.rollback", change.file_id, change.action.value, "content restored")
        return FileChange(
            file_id=file.id,
            action=ChangeAction.MODIFIED,
            content_before=current,
            content_after=change.content_before,
            **_hints(file),
        )

    async def _undo_delete(self, project_id: str, change: FileChange) -> Optional[FileChange]:
        """A deleted file is restored in place, or re-created when its row is gone."""
        if change.content_before is None:
            trace_change("versioning.rollback", change.file_id, change.action.value, "skipped, no previous content")
            return None

        file = await self.db.get(ProjectFile, change.file_id)
        if file is not None and file.project_id != project_id:
            raise ConflictError(f"File {change.file_id} does not belong to project {project_id}")

        if file is not None:
            if file.is_deleted:
                await self._ensure_path_free(project_id, file.path, file.id)
            file.is_deleted = False
            file.set_content(change.content_before)
            outcome = "undeleted"
        else:
            recovered = await self._recover_file(project_id, change.file_id)
            await self._ensure_path_free(project_id, recovered.path, change.file_id)

            now = datetime.utcnow()
            file = ProjectFile(
                id=change.file_id,
                project_id=project_id,
                name=recovered.name,
                path=recovered.path,
                content=change.content_before,
                type=recovered.type,
                size=byte_size(change.content_before),
                is_deleted=False,
                created_at=now,
                updated_at=now,
            )
            self.db.add(file)
            await self.db.flush()
            outcome = "re-created"

        trace_change("versioning.rollback", change.file_id, change.action.value, outcome)
        return FileChange(
            file_id=file.id,
            action=ChangeAction.CREATED,
            content_before=None,
            content_after=change.content_before,
            **_hints(file),
        )

    async def _ensure_path_free(self, project_id: str, path: str, file_id: str) -> None:
        """Restoring must not put two live files on one path."""
        if await find_live_file_at_path(self.db, project_id, path, exclude_id=file_id):
            raise ConflictError(f"Cannot restore file {file_id}: a file already exists at path {path}")

    async def _recover_file(self, project_id: str, file_id: str) -> RecoveredFile:
        """
        Recover name, path and type for a file with no row.

        Earlier change entries for the same file id may carry hints; the
        first hint found for each field wins. Missing fields fall back to a
        synthetic name/path and a type inferred from the name.
        """
        name = path = None
        file_type = None

        for version in await self.log.history_oldest_first(project_id):
            for raw in version.file_changes:
                if raw.get("file_id") != file_id:
                    continue
                name = name or raw.get("file_name")
                path = path or raw.get("file_path")
                file_type = file_type or raw.get("file_type")
            if name and path and file_type:
                break

        used_fallback = not (name and path and file_type)
        if not name:
            name = path.rstrip("/").rsplit("/", 1)[-1] if path else FALLBACK_FILE_NAME
            name = name or FALLBACK_FILE_NAME
        if not path:
            path = f"/{name}"
        resolved_type = FileType(file_type) if file_type else FileType.from_filename(name)

        if used_fallback:
            logger.warning(
                f"Re-creating file {file_id} in project {project_id} from incomplete history; "
                f"using name={name} path={path} type={resolved_type.value}"
            )

        return RecoveredFile(name=name, path=path, type=resolved_type, used_fallback=used_fallback)
