"""Places agent: model + instructions for the chat bridge. Instructions loaded from places_agent_instructions.md."""
from functools import lru_cache
from pathlib import Path

from pydantic_ai.models import Model
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.settings import ModelSettings

from local_places.schemas.place import CATEGORY_VALUES

_INSTRUCTIONS_PATH = Path(__file__).resolve().parent / "places_agent_instructions.md"
SYSTEM_PROMPT = _INSTRUCTIONS_PATH.read_text().strip().replace("{{categories}}", ", ".join(CATEGORY_VALUES))

MODEL_SETTINGS = ModelSettings(max_tokens=8192)


@lru_cache(maxsize=4)
def build_chat_model(api_key: str, model_name: str) -> Model:
    """Gemini chat model for the given key. Cached so the HTTP client is reused across requests."""
    return GoogleModel(model_name, provider=GoogleProvider(api_key=api_key))
