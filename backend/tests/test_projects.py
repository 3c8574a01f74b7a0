"""Tests for the project store: template seeding, listing and cascading delete."""

import pytest
import pytest_asyncio
from sqlalchemy import select, func

from webforge.context import RequestContext
from webforge.errors import NotFoundError
from webforge.models.ai_chat import AiChat, AiModel
from webforge.models.collaboration import Collaboration, CollaborationRole
from webforge.models.deployment import Deployment
from webforge.models.file import ProjectFile
from webforge.models.project import Project, ProjectType
from webforge.models.template import Template
from webforge.models.version import Version
from webforge.schemas.collaboration import ShareRequest
from webforge.schemas.deployment import DeploymentCreate
from webforge.schemas.file import FileUpdate
from webforge.schemas.project import ProjectCreate, ProjectUpdate
from webforge.schemas.version import VersionCreate
from webforge.services.collaboration import CollaborationService
from webforge.services.deployments import DeploymentService
from webforge.services.files import FileService
from webforge.services.projects import ProjectService
from webforge.versioning import VersionLog


STARTER_FILES = [
    {"path": "/src/App.jsx", "content": "export default () => null;", "type": "jsx"},
    {"path": "/index.html", "content": "<div id=root></div>", "type": "html"},
]


async def _count(db, model, project_id):
    return await db.scalar(
        select(func.count()).select_from(model).where(model.project_id == project_id)
    )


@pytest_asyncio.fixture
async def template(db):
    tpl = Template(
        name="Starter",
        description="React starter",
        type=ProjectType.REACT,
        files=[dict(f) for f in STARTER_FILES],
        tags=["react"],
        is_featured=True,
        usage_count=0,
    )
    db.add(tpl)
    await db.commit()
    return tpl


@pytest.mark.asyncio
async def test_create_project_defaults(db, owner):
    project = await ProjectService(db).create_project(ProjectCreate(
        name="Landing", type=ProjectType.VANILLA, session_id=owner.id,
    ))

    assert project.is_public is False
    assert project.preview_url == f"https://preview.dev/{project.id}"
    assert project.template_id is None


@pytest.mark.asyncio
async def test_create_project_unknown_session(db):
    with pytest.raises(NotFoundError, match="Session not found"):
        await ProjectService(db).create_project(ProjectCreate(
            name="X", type=ProjectType.NODE, session_id="ghost",
        ))


@pytest.mark.asyncio
async def test_create_project_unknown_template(db, owner):
    owner_id = owner.id
    with pytest.raises(NotFoundError, match="Template not found"):
        await ProjectService(db).create_project(ProjectCreate(
            name="X", type=ProjectType.NODE, session_id=owner_id, template_id="ghost",
        ))
    assert await db.scalar(select(func.count()).select_from(Project)) == 0


@pytest.mark.asyncio
async def test_template_files_copied_and_usage_counted(db, owner, template, make_project):
    template_id = template.id

    first = await make_project(owner.id, "One", template_id=template_id)
    second = await make_project(owner.id, "Two", template_id=template_id)

    files = await FileService(db).list_files(first.id)
    assert {f.path for f in files} == {"/src/App.jsx", "/index.html"}
    app_file = next(f for f in files if f.path == "/src/App.jsx")
    assert app_file.name == "App.jsx"
    assert app_file.size == len("export default () => null;")

    # Copies are independent per project
    await FileService(db).update_file(app_file.id, FileUpdate(content="changed"))
    other = await FileService(db).list_files(second.id)
    assert all(f.content != "changed" for f in other)

    await db.refresh(template)
    assert template.usage_count == 2
    assert template.files == STARTER_FILES


@pytest.mark.asyncio
async def test_get_and_update_project(db, project):
    stamp = project.updated_at

    updated = await ProjectService(db).update_project(
        project.id, ProjectUpdate(name="Renamed", is_public=True)
    )

    assert updated.name == "Renamed"
    assert updated.is_public is True
    assert updated.updated_at >= stamp
    assert (await ProjectService(db).get_project(project.id)).name == "Renamed"


@pytest.mark.asyncio
async def test_get_unknown_project(db):
    with pytest.raises(NotFoundError):
        await ProjectService(db).get_project("nope")


@pytest.mark.asyncio
async def test_list_projects_owned_and_shared(db, owner, make_session, make_project):
    guest = await make_session("guest")
    mine = await make_project(owner.id, "Mine")
    theirs = await make_project(guest.id, "Theirs")
    await make_project(guest.id, "Private")

    await CollaborationService(db).share_project(
        mine.id, ShareRequest(session_id=guest.id, role=CollaborationRole.EDITOR)
    )

    guest_view = await ProjectService(db).list_projects(guest.id)
    assert {p.name for p in guest_view} == {"Mine", "Theirs", "Private"}
    assert len(guest_view) == 3

    owner_view = await ProjectService(db).list_projects(owner.id)
    assert [p.id for p in owner_view] == [mine.id]
    assert theirs.id not in {p.id for p in owner_view}


@pytest.mark.asyncio
async def test_delete_project_cascades(db, ctx, owner, make_session, make_project, make_file):
    guest = await make_session("guest")
    target = await make_project(owner.id, "Target")
    keep = await make_project(owner.id, "Keep")
    target_id, keep_id = target.id, keep.id

    for p in (target_id, keep_id):
        await make_file(p, "/a.js", "a")
        await make_file(p, "/b.js", "b")
        version = await VersionLog(db).create_version(p, VersionCreate(message="init", author="me"))
        await DeploymentService(db).create_deployment(p, DeploymentCreate(version_id=version.id))
        await CollaborationService(db).share_project(
            p, ShareRequest(session_id=guest.id, role=CollaborationRole.VIEWER)
        )
        db.add(AiChat(session_id=owner.id, project_id=p, message="hi", response="hello",
                      model=AiModel.GPT_4, tokens_used=2))
    await db.commit()

    assert await ProjectService(db).delete_project(ctx, target_id) is True

    assert await db.get(Project, target_id) is None
    for model in (Version, Collaboration, Deployment, AiChat):
        assert await _count(db, model, target_id) == 0
        assert await _count(db, model, keep_id) == 1

    # Files are kept, all soft-deleted
    rows = (await db.execute(
        select(ProjectFile).where(ProjectFile.project_id == target_id)
    )).scalars().all()
    assert len(rows) == 2
    assert all(f.is_deleted for f in rows)
    assert len(await FileService(db).list_files(keep_id)) == 2


@pytest.mark.asyncio
async def test_delete_project_not_owned_returns_false(db, project, make_session):
    project_id = project.id
    stranger = await make_session("stranger")

    deleted = await ProjectService(db).delete_project(RequestContext(session_id=stranger.id), project_id)

    assert deleted is False
    assert await db.get(Project, project_id) is not None


@pytest.mark.asyncio
async def test_delete_missing_project_returns_false(db, ctx):
    assert await ProjectService(db).delete_project(ctx, "missing") is False
