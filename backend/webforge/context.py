"""
Request Context

The acting session, passed explicitly to every operation that authorizes.
Ownership checks are plain functions of (context, project).
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Header

from .errors import AccessDeniedError
from .models.project import Project


@dataclass(frozen=True)
class RequestContext:
    """Identity of the caller for one request."""
    session_id: str

    def owns(self, project: Optional[Project]) -> bool:
        """True when the project exists and was created by this session."""
        return project is not None and project.session_id == self.session_id


def require_owner(
    ctx: RequestContext,
    project: Optional[Project],
    message: str = "Project not found or access denied",
) -> Project:
    """Return the project if the caller owns it, otherwise raise AccessDeniedError."""
    if not ctx.owns(project):
        raise AccessDeniedError(message)
    return project


async def get_request_context(x_session_id: str = Header(...)) -> RequestContext:
    """Dependency building the context from the X-Session-Id header."""
    return RequestContext(session_id=x_session_id)
