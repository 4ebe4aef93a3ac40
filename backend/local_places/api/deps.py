"""
Request dependencies: chat session store, model, and the fail-closed configuration check.
"""
from fastapi import Request
from pydantic_ai.models import Model

from local_places.agents.places_agent import build_chat_model
from local_places.config import settings
from local_places.core.errors import ConfigurationMissingError
from local_places.services.chat_session_service import ChatSessionStore


def get_session_store(request: Request) -> ChatSessionStore:
    return request.app.state.session_store


def require_chat_config() -> None:
    """Chat needs both a model key and a database; fail before any model call."""
    if not settings.gemini_api_key:
        raise ConfigurationMissingError("Gemini API key not configured")
    if not settings.database_url:
        raise ConfigurationMissingError("Database not configured")


def get_chat_model() -> Model:
    return build_chat_model(settings.gemini_api_key, settings.ai_model)
