"""
Centralized error handling for store/agent/API failures.
Error classes carry a machine-readable category and HTTP status so routes stay thin;
rules map raw model-provider exceptions to user-facing details.
"""
from __future__ import annotations

from typing import Callable

from fastapi.responses import JSONResponse

# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

GEMINI_QUOTA_URL = "https://ai.google.dev/gemini-api/docs/rate-limits"
MSG_AI_QUOTA_EXCEEDED = (
    "AI service quota exceeded. Check your Gemini plan and rate limits at {url}"
).format(url=GEMINI_QUOTA_URL)

STATUS_BAD_REQUEST = 400
STATUS_INTERNAL_ERROR = 500


class PlacesError(Exception):
    """Base for errors surfaced to API callers as {"error": category, "detail": text}."""

    category = "internal_error"
    status_code = STATUS_INTERNAL_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ConfigurationMissingError(PlacesError):
    """API key or database handle not configured; raised before any work begins."""

    category = "configuration_missing"


class InvalidRequestError(PlacesError):
    """Missing or malformed request body field."""

    category = "validation_error"
    status_code = STATUS_BAD_REQUEST


class StoreError(PlacesError):
    """Query or connectivity failure in the relational store."""

    category = "store_failure"


class OracleError(PlacesError):
    """The model call failed or the tool loop did not terminate."""

    category = "oracle_failure"


def error_response(exc: PlacesError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.category, "detail": exc.detail},
    )


# ---------------------------------------------------------------------------
# Error rules: (predicate, detail_message)
# Add new rules here instead of scattering checks in routes.
# ---------------------------------------------------------------------------

def _is_quota_error(msg: str) -> bool:
    lower = msg.lower()
    return (
        "429" in msg
        or "resource_exhausted" in lower
        or "quota" in lower
        or "rate limit" in lower
    )


# List of (predicate, detail). First match wins.
AGENT_ERROR_RULES: list[tuple[Callable[[str], bool], str]] = [
    (_is_quota_error, MSG_AI_QUOTA_EXCEEDED),
]


def agent_error_to_places_error(exc: Exception) -> PlacesError:
    """
    Map an exception from the chat path into a PlacesError.
    PlacesError passes through; known provider failures get a friendlier detail via AGENT_ERROR_RULES;
    otherwise an OracleError with the exception message.
    """
    if isinstance(exc, PlacesError):
        return exc
    msg = str(exc) or exc.__class__.__name__
    for predicate, detail in AGENT_ERROR_RULES:
        if predicate(msg):
            return OracleError(detail)
    return OracleError(msg)
