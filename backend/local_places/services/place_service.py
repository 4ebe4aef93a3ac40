"""
Place store: typed CRUD, search, proximity and statistics over the places table.

Amenities are stored as a JSON array in a text column and always returned as a list.
"Not found" is a normal return value (None / False); store failures raise StoreError.
"""
import json
import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from sqlalchemy import Float, Numeric, cast, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from local_places.core.constants import (
    KM_PER_DEGREE,
    MIN_COS_LATITUDE,
    NAME_SEARCH_DEFAULT_LIMIT,
    NEARBY_DEFAULT_LIMIT,
)
from local_places.core.errors import StoreError
from local_places.models.place import Place
from local_places.schemas.place import (
    CategoryStats,
    PlaceCategory,
    PlaceCreate,
    PlaceRecord,
    PlaceUpdate,
    SearchFilters,
)

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(db: Session, action: str) -> Iterator[None]:
    """Roll back and re-raise SQLAlchemy failures as StoreError."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Place store failed to %s: %s", action, e)
        raise StoreError(f"Failed to {action}: {e}") from e


def _parse_amenities(raw: str | None) -> list[str]:
    if not raw or not raw.strip():
        return []
    try:
        value = json.loads(raw)
    except (TypeError, json.JSONDecodeError):
        return []
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


def to_record(row: Place) -> PlaceRecord:
    return PlaceRecord(
        id=row.id,
        name=row.name,
        category=row.category,
        latitude=row.latitude,
        longitude=row.longitude,
        rating=row.rating if row.rating is not None else 0,
        price_level=row.price_level if row.price_level is not None else 2,
        description=row.description,
        amenities=_parse_amenities(row.amenities),
        hours=row.hours,
        address=row.address,
        phone=row.phone,
        website=row.website,
        created_at=row.created_at,
    )


@dataclass(frozen=True)
class BoundingBox:
    """Rectangular lat/lon window; lon_ranges None means every longitude qualifies."""
    min_lat: float
    max_lat: float
    lon_ranges: list[tuple[float, float]] | None


def bounding_box(latitude: float, longitude: float, radius_km: float) -> BoundingBox:
    """
    Approximate a radius with a lat/lon rectangle (1 degree latitude ~ 111 km).
    Over-includes corner points: a prefilter, not a circle test.
    Near a pole the longitude bound is dropped; a window crossing +/-180 is split in two.
    """
    if radius_km <= 0:
        raise ValueError("radius_km must be greater than 0")
    if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
        raise ValueError(f"Invalid coordinates ({latitude}, {longitude})")

    lat_delta = radius_km / KM_PER_DEGREE
    min_lat = max(-90.0, latitude - lat_delta)
    max_lat = min(90.0, latitude + lat_delta)
    # Circle reaches a pole: all longitudes are within the radius there
    if min_lat <= -90.0 or max_lat >= 90.0:
        return BoundingBox(min_lat, max_lat, None)

    cos_lat = math.cos(math.radians(latitude))
    if cos_lat <= MIN_COS_LATITUDE:
        return BoundingBox(min_lat, max_lat, None)
    lon_delta = radius_km / (KM_PER_DEGREE * cos_lat)
    if lon_delta >= 180:
        return BoundingBox(min_lat, max_lat, None)

    west, east = longitude - lon_delta, longitude + lon_delta
    if west < -180:
        ranges = [(west + 360, 180.0), (-180.0, east)]
    elif east > 180:
        ranges = [(west, 180.0), (-180.0, east - 360)]
    else:
        ranges = [(west, east)]
    return BoundingBox(min_lat, max_lat, ranges)


def search_places(db: Session, filters: SearchFilters | None = None) -> list[PlaceRecord]:
    """Filter places; results ordered by rating (desc) and truncated to filters.limit."""
    filters = filters or SearchFilters()
    query = db.query(Place)
    if filters.category is not None:
        query = query.filter(Place.category == filters.category.value)
    if filters.min_rating > 0:
        query = query.filter(Place.rating >= filters.min_rating)
    if filters.max_price_level is not None and filters.max_price_level < 3:
        query = query.filter(Place.price_level <= filters.max_price_level)
    location = (filters.location or "").strip()
    if location:
        query = query.filter(Place.address.icontains(location, autoescape=True))
    if filters.latitude is not None and filters.longitude is not None and filters.radius_km:
        box = bounding_box(filters.latitude, filters.longitude, filters.radius_km)
        query = query.filter(Place.latitude.between(box.min_lat, box.max_lat))
        if box.lon_ranges is not None:
            query = query.filter(or_(*(Place.longitude.between(lo, hi) for lo, hi in box.lon_ranges)))
    query = query.order_by(Place.rating.desc(), Place.name.asc()).limit(filters.limit)
    with _store_errors(db, "search places"):
        return [to_record(r) for r in query.all()]


def get_place(db: Session, place_id: int) -> PlaceRecord | None:
    with _store_errors(db, "get place"):
        row = db.query(Place).filter(Place.id == place_id).first()
        return to_record(row) if row else None


def get_all_places(db: Session) -> list[PlaceRecord]:
    """Every place ordered by name (map display)."""
    with _store_errors(db, "fetch places"):
        return [to_record(r) for r in db.query(Place).order_by(Place.name.asc()).all()]


def add_place(db: Session, data: PlaceCreate) -> PlaceRecord:
    row = Place(
        name=data.name,
        category=data.category.value,
        latitude=data.latitude,
        longitude=data.longitude,
        rating=data.rating,
        price_level=data.price_level,
        description=data.description,
        amenities=json.dumps(data.amenities),
        hours=data.hours,
        address=data.address,
        phone=data.phone,
        website=data.website,
    )
    with _store_errors(db, "insert place"):
        db.add(row)
        db.commit()
        db.refresh(row)
        if row.id is None:
            raise StoreError("Failed to insert place")
        logger.info("Added place id=%s name=%r category=%s", row.id, row.name, row.category)
        return to_record(row)


def update_place(db: Session, place_id: int, patch: PlaceUpdate) -> PlaceRecord | None:
    """Apply only the supplied fields. Empty patch = read. None if id does not exist."""
    changes = patch.changes()
    with _store_errors(db, "update place"):
        row = db.query(Place).filter(Place.id == place_id).first()
        if not row:
            return None
        if not changes:
            return to_record(row)
        for key, value in changes.items():
            setattr(row, key, json.dumps(value) if key == "amenities" else value)
        db.commit()
        db.refresh(row)
        logger.info("Updated place id=%s fields=%s", place_id, sorted(changes))
        return to_record(row)


def delete_place(db: Session, place_id: int) -> bool:
    """Hard delete. False if the id does not exist."""
    with _store_errors(db, "delete place"):
        row = db.query(Place).filter(Place.id == place_id).first()
        if not row:
            return False
        db.delete(row)
        db.commit()
        logger.info("Deleted place id=%s", place_id)
        return True


def places_nearby(
    db: Session,
    latitude: float,
    longitude: float,
    radius_km: float,
    category: PlaceCategory | str | None = None,
    limit: int = NEARBY_DEFAULT_LIMIT,
) -> list[PlaceRecord]:
    """Places inside the bounding box around (latitude, longitude); see bounding_box."""
    filters = SearchFilters(
        latitude=latitude,
        longitude=longitude,
        radius_km=radius_km,
        category=category,
        limit=limit,
    )
    return search_places(db, filters)


def _rounded_avg(column):
    # SQL ROUND: half away from zero, on NUMERIC so Postgres accepts the precision argument
    return func.round(cast(func.avg(column), Numeric), 2, type_=Float)


def get_statistics(db: Session, category: PlaceCategory | str | None = None) -> list[CategoryStats]:
    """Count, average rating and average price level per category (largest first)."""
    count_col = func.count(Place.id)
    query = db.query(
        Place.category,
        count_col.label("count"),
        _rounded_avg(Place.rating).label("avg_rating"),
        _rounded_avg(Place.price_level).label("avg_price_level"),
    )
    if category is not None:
        query = query.filter(Place.category == PlaceCategory(category).value)
    query = query.group_by(Place.category).order_by(count_col.desc(), Place.category.asc())
    with _store_errors(db, "compute statistics"):
        rows = query.all()
    return [
        CategoryStats(
            category=r.category,
            count=int(r.count),
            avg_rating=float(r.avg_rating or 0),
            avg_price_level=float(r.avg_price_level or 0),
        )
        for r in rows
    ]


def search_by_name(db: Session, term: str, limit: int = NAME_SEARCH_DEFAULT_LIMIT) -> list[PlaceRecord]:
    """Case-insensitive partial name match, best rated first."""
    term = (term or "").strip()
    if not term:
        return []
    query = (
        db.query(Place)
        .filter(Place.name.icontains(term, autoescape=True))
        .order_by(Place.rating.desc(), Place.name.asc())
        .limit(max(1, limit))
    )
    with _store_errors(db, "search places by name"):
        return [to_record(r) for r in query.all()]
