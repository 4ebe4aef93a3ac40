"""
FastAPI app entrypoint.

Data API (/api/places), chat over the place tools (/api/chat), and the static map UI.
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from local_places.api.routes import chat, places
from local_places.config import settings
from local_places.core.constants import (
    EXAMPLE_QUESTIONS,
    SERVICE_NAME,
    SERVICE_TITLE,
    SERVICE_VERSION,
    SESSION_PRUNE_JOB_ID,
)
from local_places.core.errors import PlacesError, error_response
from local_places.db.session import create_tables
from local_places.services.chat_session_service import ChatSessionStore
from local_places.toolsets.places.tools import tool_names

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        create_tables()

    # Scheduler: drop idle chat sessions
    scheduler = BackgroundScheduler()
    scheduler.add_job(
        app.state.session_store.prune_expired,
        "interval",
        seconds=settings.session_prune_interval_seconds,
        id=SESSION_PRUNE_JOB_ID,
    )
    scheduler.start()
    app.state.scheduler = scheduler
    logger.info(
        "Backend ready: model=%s session_ttl=%ss max_sessions=%s",
        settings.ai_model,
        settings.session_ttl_seconds,
        settings.session_max_count,
    )
    yield
    scheduler.shutdown(wait=False)


app = FastAPI(title=SERVICE_TITLE, version=SERVICE_VERSION, lifespan=lifespan)
app.state.session_store = ChatSessionStore(
    ttl_seconds=settings.session_ttl_seconds,
    max_sessions=settings.session_max_count,
)

# CORS: open by default; CORS_ORIGINS (comma-separated) narrows it
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(PlacesError)
async def places_error_handler(request: Request, exc: PlacesError) -> JSONResponse:
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    detail = "; ".join(
        f"{'.'.join(str(x) for x in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"error": "validation_error", "detail": detail or "Invalid request"})


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    # Unknown path or method: plain 404 like any other unrouted request
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not Found", status_code=404)
    return await http_exception_handler(request, exc)


app.include_router(places.router, prefix="/api/places", tags=["places"])
app.include_router(chat.router, prefix="/api/chat", tags=["chat"])
app.mount("/static", StaticFiles(directory=_STATIC_DIR, check_dir=False), name="static")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "service": SERVICE_NAME}


@app.get("/api")
def api_info() -> dict:
    """Service descriptor: endpoints, MCP tools and example prompts."""
    return {
        "service": SERVICE_TITLE,
        "version": SERVICE_VERSION,
        "description": "MCP server for local places database with AI chatbot powered by Gemini",
        "endpoints": {
            "GET /health": "Health check",
            "GET /api": "API information",
            "GET /api/places": "Get all places (for map display)",
            "POST /api/chat": "Chat with AI about places (body: { message, sessionId? })",
            "POST /api/chat/reset": "Reset conversation (body: { sessionId })",
            "GET /api/chat/history": "Conversation transcript (query: sessionId)",
            "GET /": "Web interface",
        },
        "mcp_tools": tool_names(),
        "example_questions": EXAMPLE_QUESTIONS,
    }


@app.get("/", include_in_schema=False)
def root():
    """Map + chat UI when bundled, otherwise the API descriptor."""
    index = _STATIC_DIR / "index.html"
    if index.is_file():
        return FileResponse(index, media_type="text/html")
    return RedirectResponse("/api", status_code=302)
