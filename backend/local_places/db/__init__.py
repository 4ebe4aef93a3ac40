from local_places.db.base import Base
from local_places.db.session import SessionLocal, create_tables, engine, get_db
from local_places.db.tables import ALL_TABLE_NAMES

__all__ = ["get_db", "engine", "SessionLocal", "Base", "create_tables", "ALL_TABLE_NAMES"]
