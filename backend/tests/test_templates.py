"""Tests for the template catalog."""

import pytest

from webforge.errors import NotFoundError
from webforge.models.project import ProjectType
from webforge.models.template import Template
from webforge.schemas.template import TemplateFromProject
from webforge.services.files import FileService
from webforge.services.templates import TemplateCatalog


@pytest.mark.asyncio
async def test_list_templates_featured_then_usage(db):
    for name, featured, usage in [("a", False, 50), ("b", True, 1), ("c", True, 9), ("d", False, 3)]:
        db.add(Template(name=name, description="", type=ProjectType.VUE, files=[], tags=[],
                        is_featured=featured, usage_count=usage))
    await db.commit()

    templates = await TemplateCatalog(db).list_templates()

    assert [t.name for t in templates] == ["c", "b", "a", "d"]


@pytest.mark.asyncio
async def test_create_template_snapshots_live_files(db, ctx, project, make_file):
    await make_file(project.id, "/index.html", "<h1>Hi</h1>")
    dropped = await make_file(project.id, "/old.js", "old")
    await FileService(db).delete_file(ctx, dropped.id)

    template = await TemplateCatalog(db).create_from_project(
        project.id, TemplateFromProject(name="Mine", description="Snapshot", tags=["demo"])
    )

    assert template.type == project.type
    assert template.is_featured is False
    assert template.usage_count == 0
    assert template.tags == ["demo"]
    assert template.files == [{"path": "/index.html", "content": "<h1>Hi</h1>", "type": "html"}]


@pytest.mark.asyncio
async def test_create_template_unknown_project(db):
    with pytest.raises(NotFoundError):
        await TemplateCatalog(db).create_from_project(
            "nope", TemplateFromProject(name="X", description="")
        )
