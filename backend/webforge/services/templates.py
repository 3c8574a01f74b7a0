"""
Template Catalog

Lists templates and captures projects as new templates.
"""
import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import transaction
from ..errors import NotFoundError
from ..models.project import Project
from ..models.template import Template
from ..schemas.template import TemplateFile, TemplateFromProject
from .files import FileService

logger = logging.getLogger(__name__)


class TemplateCatalog:
    """Template listing and creation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_templates(self) -> List[Template]:
        """Featured templates first, then the most used."""
        stmt = select(Template).order_by(
            Template.is_featured.desc(),
            Template.usage_count.desc(),
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create_from_project(self, project_id: str, data: TemplateFromProject) -> Template:
        """Snapshot a project's live files into a new, unfeatured template."""
        async with transaction(self.db, "create_template"):
            project = await self.db.get(Project, project_id)
            if project is None:
                raise NotFoundError(f"Project not found: {project_id}")

            files = await FileService(self.db).list_files(project_id)
            snapshots = [
                TemplateFile(path=f.path, content=f.content, type=f.type).model_dump(mode="json")
                for f in files
            ]

            template = Template(
                name=data.name,
                description=data.description,
                type=project.type,
                files=snapshots,
                tags=list(data.tags),
                is_featured=False,
                usage_count=0,
            )
            self.db.add(template)

        logger.info(f"Created template {template.id} from project {project_id} ({len(snapshots)} files)")
        return template
