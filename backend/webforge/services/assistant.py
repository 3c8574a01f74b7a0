"""
Assistant Chat Service

Answers chat messages with canned replies and keeps the exchange log.
No model is called; the chosen model name only shapes the reply text.
"""
import logging
import math
from typing import List, Optional, Tuple

from sqlalchemy import select, func, and_
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..context import RequestContext
from ..database import transaction
from ..errors import NotFoundError, ValidationError
from ..models.ai_chat import AiChat, AiModel
from ..models.file import ProjectFile
from ..models.project import Project
from ..models.session import Session
from ..prompts.assistant import KEYWORD_REPLIES, ECHO_REPLY, ECHO_CONTEXT, ECHO_NO_CONTEXT
from ..schemas.chat import ChatRequest
from ..tracer import trace_section, trace_input, trace_step, trace_output

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN = 4
DEFAULT_HISTORY_LIMIT = 50


def estimate_tokens(text: str) -> int:
    """Rough token count: one token per four characters, rounded up."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def compose_reply(message: str, model: AiModel, context_files: Optional[List[str]] = None) -> str:
    """Pick the canned reply for a message."""
    count = len(context_files) if context_files else 0
    lowered = message.lower()

    for keywords, reply, context_suffix in KEYWORD_REPLIES:
        if any(k in lowered for k in keywords):
            text = reply.format(model=model.value)
            if count:
                text += context_suffix.format(count=count)
            return text

    text = ECHO_REPLY.format(message=message, model=model.value)
    if count:
        return text + ECHO_CONTEXT.format(count=count)
    return text + ECHO_NO_CONTEXT


class AssistantService:
    """Chat with the assistant and read back chat history."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def chat(self, ctx: RequestContext, data: ChatRequest) -> AiChat:
        """
        Record a message and its reply for the acting session.

        A project, when given, must belong to the session. Context files
        require a project and must all be live files of it.
        """
        trace_section("Assistant Chat")
        trace_input("services.assistant", "message", data.message)

        async with transaction(self.db, "chat"):
            if await self.db.get(Session, ctx.session_id) is None:
                raise NotFoundError(f"Session not found: {ctx.session_id}")

            if data.project_id:
                project = await self.db.get(Project, data.project_id)
                if project is None or not ctx.owns(project):
                    raise NotFoundError("Project not found or does not belong to session")

            if data.context_files:
                await self._check_context_files(data.project_id, data.context_files)

            model = data.model or AiModel(settings.default_chat_model)
            reply = compose_reply(data.message, model, data.context_files)
            tokens = estimate_tokens(data.message) + estimate_tokens(reply)
            trace_step("services.assistant", f"Composed reply: model={model.value}, tokens={tokens}")

            chat = AiChat(
                session_id=ctx.session_id,
                project_id=data.project_id,
                message=data.message,
                response=reply,
                model=model,
                tokens_used=tokens,
                context_files=data.context_files or None,
            )
            self.db.add(chat)

        trace_output("services.assistant", "chat_id", chat.id)
        return chat

    async def _check_context_files(self, project_id: Optional[str], file_ids: List[str]) -> None:
        if not project_id:
            raise ValidationError("Project ID is required when context files are specified")

        wanted = set(file_ids)
        stmt = select(ProjectFile.id).where(
            and_(
                ProjectFile.project_id == project_id,
                ProjectFile.id.in_(wanted),
                ProjectFile.is_deleted.is_(False),
            )
        )
        found = set((await self.db.execute(stmt)).scalars().all())
        if found != wanted:
            logger.info(f"Chat rejected, unknown context files: {sorted(wanted - found)}")
            raise ValidationError("Some context files not found or do not belong to the project")

    async def chat_history(
        self,
        session_id: str,
        project_id: Optional[str] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
        offset: int = 0,
    ) -> Tuple[List[AiChat], int]:
        """Chats of a session, newest first, with the unpaged total."""
        conditions = [AiChat.session_id == session_id]
        if project_id:
            conditions.append(AiChat.project_id == project_id)

        total = await self.db.scalar(
            select(func.count()).select_from(AiChat).where(and_(*conditions))
        )

        stmt = (
            select(AiChat)
            .where(and_(*conditions))
            .order_by(AiChat.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total or 0
