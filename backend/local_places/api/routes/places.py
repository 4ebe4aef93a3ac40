"""
Places data endpoint (map display).
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from local_places.db.session import get_db
from local_places.schemas.place import PlaceRecord
from local_places.services.place_service import get_all_places

router = APIRouter()


@router.get("", response_model=list[PlaceRecord])
def list_places(db: Session = Depends(get_db)) -> list[PlaceRecord]:
    """Every place, amenities as lists. Store failures render as 500 store_failure."""
    return get_all_places(db)
