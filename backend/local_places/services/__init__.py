from local_places.services.chat_session_service import ChatSessionStore, create_session_id
from local_places.services.place_service import get_all_places, get_place, search_places

__all__ = ["ChatSessionStore", "create_session_id", "get_all_places", "get_place", "search_places"]
