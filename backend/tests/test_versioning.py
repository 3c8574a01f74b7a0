"""Tests for the version log and rollback."""

from datetime import datetime

import pytest
from sqlalchemy import select, func

from webforge.context import RequestContext
from webforge.errors import NotFoundError, AccessDeniedError, ConflictError
from webforge.models.collaboration import CollaborationRole
from webforge.models.file import ProjectFile, FileType
from webforge.models.project import Project
from webforge.models.version import ChangeAction, Version
from webforge.schemas.collaboration import ShareRequest
from webforge.schemas.file import FileUpdate
from webforge.schemas.version import FileChange, VersionCreate
from webforge.services.collaboration import CollaborationService
from webforge.services.files import FileService
from webforge.versioning import VersionLog, RollbackEngine, compute_commit_hash


async def _record(db, project_id, *changes, message="change"):
    return await VersionLog(db).create_version(
        project_id, VersionCreate(message=message, author="dev", file_changes=list(changes))
    )


async def _newest(db, project_id):
    """The compensating version appended by a rollback."""
    versions = await VersionLog(db).list_versions(project_id)
    return next(v for v in versions if v.author == "system")


def test_commit_hash_is_short_and_deterministic():
    stamp = datetime(2024, 1, 1, 12, 0, 0)
    changes = [{"file_id": "f1", "action": "created"}]

    first = compute_commit_hash(changes, stamp, "p1")

    assert len(first) == 8
    assert first == compute_commit_hash(changes, stamp, "p1")
    assert first != compute_commit_hash(changes, stamp, "p2")


@pytest.mark.asyncio
async def test_create_version_records_changes(db, project):
    version = await _record(
        db,
        project.id,
        FileChange(file_id="f1", action=ChangeAction.CREATED, content_after="x"),
        message="Add f1",
    )

    assert version.message == "Add f1"
    assert len(version.commit_hash) == 8
    assert version.file_changes[0]["action"] == "created"
    assert version.file_changes[0]["content_before"] is None


@pytest.mark.asyncio
async def test_create_version_unknown_project(db):
    with pytest.raises(NotFoundError):
        await _record(db, "nope")


@pytest.mark.asyncio
async def test_list_versions_unknown_project_is_empty(db):
    assert await VersionLog(db).list_versions("nope") == []


@pytest.mark.asyncio
async def test_rollback_modified_restores_content(db, ctx, project, make_file):
    project_id = project.id
    file = await make_file(project_id, "/app.js", "v1")
    await FileService(db).update_file(file.id, FileUpdate(content="v2 longer"))
    target = await _record(db, project_id, FileChange(
        file_id=file.id, action=ChangeAction.MODIFIED, content_before="v1", content_after="v2 longer",
    ), message="Edit app")

    assert await RollbackEngine(db).rollback(ctx, project_id, target.id) is True

    assert file.content == "v1"
    assert file.size == 2

    rollback = await _newest(db, project_id)
    assert rollback.message == "Rollback to version: Edit app"
    assert rollback.author == "system"
    assert rollback.file_changes == [{
        "file_id": file.id,
        "action": "modified",
        "content_before": "v2 longer",
        "content_after": "v1",
        "file_name": "app.js",
        "file_path": "/app.js",
        "file_type": "js",
    }]


@pytest.mark.asyncio
async def test_rollback_created_soft_deletes(db, ctx, project, make_file):
    project_id = project.id
    file = await make_file(project_id, "/new.css", "body {}")
    target = await _record(db, project_id, FileChange(
        file_id=file.id, action=ChangeAction.CREATED, content_after="body {}",
    ))

    await RollbackEngine(db).rollback(ctx, project_id, target.id)

    assert file.is_deleted is True
    assert await FileService(db).list_files(project_id) == []
    change = (await _newest(db, project_id)).file_changes[0]
    assert change["action"] == "deleted"
    assert change["content_before"] == "body {}"
    assert change["content_after"] is None


@pytest.mark.asyncio
async def test_rollback_deleted_undeletes_in_place(db, ctx, project, make_file):
    project_id = project.id
    file = await make_file(project_id, "/README.md", "# Title")
    await FileService(db).delete_file(ctx, file.id)
    target = await _record(db, project_id, FileChange(
        file_id=file.id, action=ChangeAction.DELETED, content_before="# Title",
    ))

    await RollbackEngine(db).rollback(ctx, project_id, target.id)

    live = await FileService(db).list_files(project_id)
    assert [f.id for f in live] == [file.id]
    assert live[0].content == "# Title"
    change = (await _newest(db, project_id)).file_changes[0]
    assert change["action"] == "created"
    assert change["content_after"] == "# Title"


@pytest.mark.asyncio
async def test_rollback_deleted_recreates_missing_row_from_hints(db, ctx, project):
    project_id = project.id
    await _record(db, project_id, FileChange(
        file_id="gone-1", action=ChangeAction.CREATED, content_after="a",
        file_name="util.ts", file_path="/src/util.ts", file_type=FileType.TS,
    ))
    target = await _record(db, project_id, FileChange(
        file_id="gone-1", action=ChangeAction.DELETED, content_before="export {}",
    ))

    await RollbackEngine(db).rollback(ctx, project_id, target.id)

    file = await db.get(ProjectFile, "gone-1")
    assert file.project_id == project_id
    assert file.path == "/src/util.ts"
    assert file.name == "util.ts"
    assert file.type == FileType.TS
    assert file.content == "export {}"
    assert file.size == 9
    assert file.is_deleted is False


@pytest.mark.asyncio
async def test_rollback_deleted_recreates_with_fallback(db, ctx, project):
    project_id = project.id
    target = await _record(db, project_id, FileChange(
        file_id="gone-2", action=ChangeAction.DELETED, content_before="data",
    ))

    await RollbackEngine(db).rollback(ctx, project_id, target.id)

    file = await db.get(ProjectFile, "gone-2")
    assert file.name == "restored_file"
    assert file.path == "/restored_file"
    assert file.type == FileType.TXT


@pytest.mark.asyncio
async def test_rollback_restore_onto_taken_path_conflicts(db, ctx, project, make_file):
    project_id = project.id
    old = await make_file(project_id, "/index.html", "old")
    old_id = old.id
    await FileService(db).delete_file(ctx, old_id)
    await make_file(project_id, "/index.html", "new")
    target = await _record(db, project_id, FileChange(
        file_id=old_id, action=ChangeAction.DELETED, content_before="old",
    ))
    target_id = target.id

    with pytest.raises(ConflictError):
        await RollbackEngine(db).rollback(ctx, project_id, target_id)

    live = await FileService(db).list_files(project_id)
    assert [f.content for f in live] == ["new"]
    count = await db.scalar(
        select(func.count()).select_from(Version).where(Version.project_id == project_id)
    )
    assert count == 1


@pytest.mark.asyncio
async def test_rollback_modified_without_previous_content_is_noop(db, ctx, project, make_file):
    project_id = project.id
    file = await make_file(project_id, "/a.js", "current")
    target = await _record(db, project_id, FileChange(
        file_id=file.id, action=ChangeAction.MODIFIED, content_before=None, content_after="current",
    ))

    assert await RollbackEngine(db).rollback(ctx, project_id, target.id) is True

    assert file.content == "current"
    rollback = await _newest(db, project_id)
    assert rollback.author == "system"
    assert rollback.file_changes == []


@pytest.mark.asyncio
async def test_rollback_skips_missing_files(db, ctx, project):
    project_id = project.id
    target = await _record(
        db,
        project_id,
        FileChange(file_id="none-1", action=ChangeAction.CREATED, content_after="x"),
        FileChange(file_id="none-2", action=ChangeAction.MODIFIED, content_before="a", content_after="b"),
    )

    await RollbackEngine(db).rollback(ctx, project_id, target.id)

    assert (await _newest(db, project_id)).file_changes == []


@pytest.mark.asyncio
async def test_rollback_by_collaborator_denied(db, project, make_session, make_file):
    project_id = project.id
    file = await make_file(project_id, "/a.js", "v1")
    file_id = file.id
    await FileService(db).update_file(file_id, FileUpdate(content="v2"))
    target = await _record(db, project_id, FileChange(
        file_id=file_id, action=ChangeAction.MODIFIED, content_before="v1", content_after="v2",
    ))
    target_id = target.id
    editor = await make_session("editor")
    editor_id = editor.id
    await CollaborationService(db).share_project(
        project_id, ShareRequest(session_id=editor_id, role=CollaborationRole.OWNER)
    )

    with pytest.raises(AccessDeniedError):
        await RollbackEngine(db).rollback(RequestContext(session_id=editor_id), project_id, target_id)

    stored = await db.get(ProjectFile, file_id)
    await db.refresh(stored)
    assert stored.content == "v2"


@pytest.mark.asyncio
async def test_rollback_unknown_version(db, ctx, project):
    with pytest.raises(NotFoundError, match="Version not found"):
        await RollbackEngine(db).rollback(ctx, project.id, "missing")


@pytest.mark.asyncio
async def test_rollback_version_of_other_project(db, ctx, owner, make_project):
    first = await make_project(owner.id, "First")
    second = await make_project(owner.id, "Second")
    first_id, second_id = first.id, second.id
    foreign = await _record(db, second_id)
    foreign_id = foreign.id

    with pytest.raises(NotFoundError):
        await RollbackEngine(db).rollback(ctx, first_id, foreign_id)


@pytest.mark.asyncio
async def test_rollback_touches_project(db, ctx, project):
    project_id = project.id
    stamp = project.updated_at
    target = await _record(db, project_id)

    await RollbackEngine(db).rollback(ctx, project_id, target.id)

    refreshed = await db.get(Project, project_id)
    assert refreshed.updated_at >= stamp
