"""
Session Service

Issues and looks up anonymous sessions.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import transaction
from ..models.session import Session, SessionStatus
from ..schemas.session import SessionCreate
from ..tracer import trace_step

logger = logging.getLogger(__name__)


class SessionService:
    """Create and read anonymous sessions."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_session(self, data: SessionCreate) -> Session:
        """Open a session that expires a fixed TTL after creation."""
        now = datetime.utcnow()
        session = Session(
            browser_fingerprint=data.browser_fingerprint,
            ip_address=data.ip_address,
            user_agent=data.user_agent,
            status=SessionStatus.ACTIVE,
            created_at=now,
            last_activity=now,
            expires_at=now + timedelta(hours=settings.session_ttl_hours),
            session_metadata=data.metadata,
        )

        async with transaction(self.db, "create_session"):
            self.db.add(session)

        logger.info(f"Created session {session.id}")
        return session

    async def get_session(self, session_id: str) -> Optional[Session]:
        """
        Look up a session and refresh its last_activity.

        Expiry stays fixed at creation time; a session read past it is
        reported as expired.
        """
        async with transaction(self.db, "get_session"):
            session = await self.db.get(Session, session_id)
            if session is None:
                return None

            now = datetime.utcnow()
            session.last_activity = now
            if session.status == SessionStatus.ACTIVE and session.is_expired(now):
                trace_step("services.sessions", f"Session {session_id} passed its expiry")
                session.status = SessionStatus.EXPIRED

        return session
