# API Routes
from .sessions import router as sessions_router
from .projects import router as projects_router
from .files import router as files_router
from .versions import router as versions_router
from .collaborations import router as collaborations_router
from .deployments import router as deployments_router
from .templates import router as templates_router
from .chat import router as chat_router

__all__ = [
    "sessions_router",
    "projects_router",
    "files_router",
    "versions_router",
    "collaborations_router",
    "deployments_router",
    "templates_router",
    "chat_router",
]
