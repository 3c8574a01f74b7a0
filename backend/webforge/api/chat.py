"""
Chat API

Endpoints for the assistant chat.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..context import RequestContext, get_request_context
from ..database import get_db
from ..schemas.chat import ChatRequest, ChatResponse, ChatHistoryResponse
from ..services.assistant import AssistantService, DEFAULT_HISTORY_LIMIT
from ..tracer import trace_section, trace_input, trace_output

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def chat(
    data: ChatRequest,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    """
    Send a message to the assistant.

    The exchange is stored against the acting session and, when given,
    the project. Context files must be live files of that project.
    """
    record = await AssistantService(db).chat(ctx, data)
    return ChatResponse.model_validate(record)


@router.get("/history", response_model=ChatHistoryResponse)
async def chat_history(
    project_id: Optional[str] = None,
    limit: int = Query(DEFAULT_HISTORY_LIMIT, ge=1, le=200),
    offset: int = Query(0, ge=0),
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    """Chats of the acting session, newest first."""
    trace_section("Chat History")
    trace_input("api.chat", "session_id", ctx.session_id)

    chats, total = await AssistantService(db).chat_history(
        ctx.session_id, project_id=project_id, limit=limit, offset=offset
    )

    trace_output("api.chat", "returned", len(chats))
    return ChatHistoryResponse(
        chats=[ChatResponse.model_validate(c) for c in chats],
        total=total,
    )
