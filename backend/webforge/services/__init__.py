"""
Services module for Webforge.
"""
from .sessions import SessionService
from .projects import ProjectService, preview_url_for
from .files import FileService
from .collaboration import CollaborationService
from .deployments import DeploymentService
from .templates import TemplateCatalog
from .assistant import AssistantService

__all__ = [
    "SessionService",
    "ProjectService",
    "preview_url_for",
    "FileService",
    "CollaborationService",
    "DeploymentService",
    "TemplateCatalog",
    "AssistantService",
]
