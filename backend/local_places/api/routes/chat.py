"""
Chat endpoint: requests go to the orchestrator (places tool loop). Supports session memory.
"""
import logging
from typing import NoReturn

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic_ai.models import Model
from sqlalchemy.orm import Session

from local_places.api.deps import get_chat_model, get_session_store, require_chat_config
from local_places.core.errors import InvalidRequestError, agent_error_to_places_error
from local_places.db.session import get_db
from local_places.orchestrator.orchestrator import run as orchestrator_run
from local_places.services.chat_session_service import ChatSessionStore, messages_for_display

router = APIRouter()
logger = logging.getLogger(__name__)


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str | None = None
    # optional; if omitted, a new session is created
    session_id: str | None = Field(default=None, alias="sessionId")


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response: str
    # send this back on the next request for conversation context
    session_id: str = Field(alias="sessionId")


class ResetRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str | None = Field(default=None, alias="sessionId")


def _handle_agent_error(exc: Exception, log_message: str) -> NoReturn:
    logger.exception(log_message)
    raise agent_error_to_places_error(exc) from exc


@router.post("", response_model=ChatResponse, response_model_by_alias=True)
async def chat(
    body: ChatRequest,
    _config: None = Depends(require_chat_config),
    db: Session = Depends(get_db),
    store: ChatSessionStore = Depends(get_session_store),
    model: Model = Depends(get_chat_model),
) -> ChatResponse:
    """
    Send a message; the model answers using the place tools.
    Pass sessionId from a previous response to keep conversation context.
    """
    if not body.message or not body.message.strip():
        raise InvalidRequestError("Message is required")
    session = store.get_or_create(body.session_id)
    try:
        text = await orchestrator_run(body.message, db, session=session, model=model)
    except Exception as e:  # noqa: BLE001
        _handle_agent_error(e, "Chat failed")
    return ChatResponse(response=text, session_id=session.session_id)


@router.post("/reset")
async def reset(
    body: ResetRequest | None = None,
    store: ChatSessionStore = Depends(get_session_store),
) -> dict:
    """Forget a conversation. Unknown or missing sessionId (or no body at all) is a no-op."""
    if body and body.session_id:
        store.evict(body.session_id)
    return {"success": True, "message": "Conversation reset"}


@router.get("/history")
async def history(
    session_id: str = Query(..., alias="sessionId"),
    store: ChatSessionStore = Depends(get_session_store),
) -> dict:
    """Return the transcript as [{ role, content }, ...] for display after refresh."""
    return {"sessionId": session_id, "messages": messages_for_display(store.get(session_id))}
