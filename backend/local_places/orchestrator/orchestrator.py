"""
Orchestrator: runs one chat turn against the places model.

Sends the session transcript plus the new message, executes every tool call the
model proposes, feeds the results back and loops until the model answers in text.
Intermediate tool exchanges are kept for the turn only; the transcript gets the
user message and the final answer.
"""
import logging

from pydantic_ai.direct import model_request
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    TextPart,
    ToolCallPart,
    ToolReturnPart,
    UserPromptPart,
)
from pydantic_ai.models import Model, ModelRequestParameters
from sqlalchemy.orm import Session

from local_places.agents.deps import PlacesDeps
from local_places.agents.places_agent import MODEL_SETTINGS, SYSTEM_PROMPT
from local_places.config import settings
from local_places.core.constants import FALLBACK_RESPONSE
from local_places.core.errors import OracleError, agent_error_to_places_error
from local_places.services.chat_session_service import ChatSession
from local_places.toolsets.places.tools import execute_tool, tool_definitions

logger = logging.getLogger(__name__)


def history_messages(session: ChatSession) -> list[ModelMessage]:
    """Session transcript as pydantic-ai messages."""
    out: list[ModelMessage] = []
    for turn in session.turns:
        if turn.role == "user":
            out.append(ModelRequest(parts=[UserPromptPart(content=turn.text)]))
        else:
            out.append(ModelResponse(parts=[TextPart(content=turn.text)]))
    return out


def _run_tool_call(deps: PlacesDeps, call: ToolCallPart) -> ToolReturnPart:
    try:
        args = call.args_as_dict()
    except ValueError as e:
        result = {"success": False, "error": "invalid_arguments", "detail": f"Arguments are not valid JSON: {e}"}
    else:
        result = execute_tool(deps, call.tool_name, args)
    return ToolReturnPart(tool_name=call.tool_name, content=result, tool_call_id=call.tool_call_id)


async def run(
    message: str,
    db: Session,
    *,
    session: ChatSession,
    model: Model,
    max_rounds: int | None = None,
) -> str:
    deps = PlacesDeps(db, session.session_id)
    params = ModelRequestParameters(function_tools=tool_definitions(), allow_text_output=True)
    messages = history_messages(session)
    messages.append(ModelRequest(parts=[UserPromptPart(content=message)], instructions=SYSTEM_PROMPT))
    max_rounds = max_rounds or settings.max_tool_rounds

    for round_no in range(max_rounds):
        try:
            response = await model_request(
                model,
                messages,
                model_settings=MODEL_SETTINGS,
                model_request_parameters=params,
            )
        except Exception as e:
            logger.warning("Model request failed for session %s: %s", session.session_id, e)
            raise agent_error_to_places_error(e) from e
        messages.append(response)

        calls = response.tool_calls
        if not calls:
            text = response.text or ""
            if not text.strip():
                logger.warning("Empty final response from model for session %s", session.session_id)
                return FALLBACK_RESPONSE
            session.append_exchange(message, text)
            return text

        if round_no == max_rounds - 1:
            # no request left to report results back, so leave the proposed calls unexecuted
            logger.warning("Tool loop exceeded %d rounds for session %s", max_rounds, session.session_id)
            raise OracleError(f"Model did not produce an answer within {max_rounds} tool rounds.")
        returns = [_run_tool_call(deps, call) for call in calls]
        messages.append(ModelRequest(parts=returns, instructions=SYSTEM_PROMPT))

    raise OracleError(f"Model did not produce an answer within {max_rounds} tool rounds.")
