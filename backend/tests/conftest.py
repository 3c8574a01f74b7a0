"""Shared pytest fixtures: an in-memory database per test and an API client bound to it."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from webforge import models  # noqa: F401
from webforge.context import RequestContext
from webforge.database import Base, build_engine, build_session_factory, get_db
from webforge.main import app
from webforge.models.file import FileType
from webforge.models.project import ProjectType
from webforge.schemas.file import FileCreate
from webforge.schemas.project import ProjectCreate
from webforge.schemas.session import SessionCreate
from webforge.services.files import FileService
from webforge.services.projects import ProjectService
from webforge.services.sessions import SessionService


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory SQLite database with all tables."""
    test_engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def db(engine):
    factory = build_session_factory(engine)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(engine):
    """HTTP client for the app, with get_db pointed at the test database."""
    factory = build_session_factory(engine)

    async def override_get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_session(db):
    """Factory creating anonymous sessions."""
    async def _make(fingerprint: str = "fp-1"):
        return await SessionService(db).create_session(SessionCreate(
            browser_fingerprint=fingerprint,
            ip_address="127.0.0.1",
            user_agent="pytest",
        ))
    return _make


@pytest.fixture
def make_project(db):
    """Factory creating projects for a session."""
    async def _make(session_id: str, name: str = "Site", template_id=None):
        return await ProjectService(db).create_project(ProjectCreate(
            name=name,
            type=ProjectType.REACT,
            session_id=session_id,
            template_id=template_id,
        ))
    return _make


@pytest.fixture
def make_file(db):
    """Factory creating files in a project."""
    async def _make(project_id: str, path: str = "/index.html", content: str = "<html></html>"):
        name = path.rsplit("/", 1)[-1]
        return await FileService(db).create_file(project_id, FileCreate(
            name=name,
            path=path,
            content=content,
            type=FileType.from_filename(name),
        ))
    return _make


@pytest_asyncio.fixture
async def owner(make_session):
    return await make_session("owner-fp")


@pytest_asyncio.fixture
async def project(owner, make_project):
    return await make_project(owner.id)


@pytest.fixture
def ctx(owner):
    """Request context of the project owner."""
    return RequestContext(session_id=owner.id)
