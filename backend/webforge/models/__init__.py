# Webforge Models
from .session import Session, SessionStatus
from .project import Project, ProjectType
from .file import ProjectFile, FileType, byte_size
from .version import Version, ChangeAction
from .collaboration import Collaboration, CollaborationRole, DEFAULT_PERMISSIONS
from .deployment import Deployment, DeploymentStatus
from .template import Template
from .ai_chat import AiChat, AiModel

__all__ = [
    "Session",
    "SessionStatus",
    "Project",
    "ProjectType",
    "ProjectFile",
    "FileType",
    "byte_size",
    "Version",
    "ChangeAction",
    "Collaboration",
    "CollaborationRole",
    "DEFAULT_PERMISSIONS",
    "Deployment",
    "DeploymentStatus",
    "Template",
    "AiChat",
    "AiModel",
]
