"""
Dependencies for the places tools (injected at run time).
"""
from sqlalchemy.orm import Session


class PlacesDeps:
    """Deps passed to every place tool; provides DB session and chat session_id for logging."""

    def __init__(self, db: Session, session_id: str | None = None):
        self.db = db
        self.session_id = session_id
