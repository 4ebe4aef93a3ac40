"""
Database session and engine.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from local_places.config import settings
from local_places.db.base import Base


def _engine_kwargs(url: str) -> dict:
    # SQLite: one file, shared across the threadpool FastAPI runs sync deps in
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 8,
        "max_overflow": 10,
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_timeout": 30,
    }


# Empty DATABASE_URL: chat fails closed (configuration_missing); engine still builds in-memory
_url = settings.database_url or "sqlite://"
engine = create_engine(_url, **_engine_kwargs(_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create missing tables (dev convenience; production uses alembic upgrade head)."""
    import local_places.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
