"""
Sessions API

Endpoints for anonymous browser sessions.
"""
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models.session import Session
from ..schemas.session import SessionCreate, SessionResponse
from ..services.sessions import SessionService

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _session_to_response(session: Session) -> SessionResponse:
    """Convert Session model to response schema."""
    return SessionResponse(
        id=session.id,
        browser_fingerprint=session.browser_fingerprint,
        ip_address=session.ip_address,
        user_agent=session.user_agent,
        status=session.status,
        created_at=session.created_at,
        last_activity=session.last_activity,
        expires_at=session.expires_at,
        metadata=session.session_metadata,
    )


@router.post("", response_model=SessionResponse)
async def create_session(
    data: SessionCreate,
    db: AsyncSession = Depends(get_db),
):
    """Open a new anonymous session."""
    session = await SessionService(db).create_session(data)
    return _session_to_response(session)


@router.get("/{session_id}", response_model=Optional[SessionResponse])
async def get_session(
    session_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a session by ID, or null when it does not exist."""
    session = await SessionService(db).get_session(session_id)
    if session is None:
        return None
    return _session_to_response(session)
