import os
import sys
from pathlib import Path

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

import pytest
from fastapi.testclient import TestClient
from pydantic_ai.messages import ModelResponse, TextPart
from pydantic_ai.models.function import FunctionModel
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import local_places.models  # noqa: F401
from local_places.db.base import Base
from local_places.schemas.place import PlaceCreate
from local_places.services import place_service
from local_places.services.chat_session_service import ChatSessionStore


SAMPLE_PLACES = [
    {
        "name": "Bean Scene",
        "category": "cafe",
        "latitude": 41.88,
        "longitude": -87.62,
        "rating": 4.5,
        "price_level": 1,
        "amenities": ["wifi", "outdoor_seating"],
        "address": "100 N State St, Chicago, IL",
    },
    {
        "name": "Morning Brew",
        "category": "cafe",
        "latitude": 40.73,
        "longitude": -73.99,
        "rating": 4.8,
        "price_level": 2,
        "address": "12 Bleecker St, New York, NY",
    },
    {
        "name": "Lincoln Park",
        "category": "park",
        "latitude": 41.92,
        "longitude": -87.63,
        "rating": 4.7,
        "price_level": 1,
        "address": "2045 N Lincoln Park W, Chicago, IL",
    },
    {
        "name": "Prospect Park",
        "category": "park",
        "latitude": 40.66,
        "longitude": -73.97,
        "rating": 4.6,
        "price_level": 1,
        "address": "Prospect Park, Brooklyn, New York, NY",
    },
    {
        "name": "Golden Dragon",
        "category": "restaurant",
        "latitude": 37.79,
        "longitude": -122.40,
        "rating": 4.2,
        "price_level": 3,
        "description": "Dim sum",
        "address": "816 Washington St, San Francisco, CA",
    },
    {
        "name": "Iron Temple",
        "category": "gym",
        "latitude": 37.77,
        "longitude": -122.42,
        "rating": 3.9,
        "price_level": 2,
        "address": "1 Market St, San Francisco, CA",
    },
]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded(db):
    return [place_service.add_place(db, PlaceCreate(**p)) for p in SAMPLE_PLACES]


@pytest.fixture
def store():
    return ChatSessionStore(ttl_seconds=3600, max_sessions=100)


def text_model(text: str) -> FunctionModel:
    """Scripted model that always answers with the given text."""

    def respond(messages, info):
        return ModelResponse(parts=[TextPart(content=text)])

    return FunctionModel(respond)


@pytest.fixture
def client(session_factory, store):
    from local_places.api.deps import get_chat_model, get_session_store
    from local_places.db.session import get_db
    from local_places.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: store
    app.dependency_overrides[get_chat_model] = lambda: text_model("Hello from the places assistant")
    yield TestClient(app)
    app.dependency_overrides.clear()
