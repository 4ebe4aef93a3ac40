"""
MCP server (stdio): the eight place operations as tools with human-readable text results.

Run: python -m local_places.mcp_server  (or the local-places-mcp script)
stdout carries the protocol; logs go to stderr.
"""
import logging
import sys
from contextlib import contextmanager
from typing import Annotated, Iterator

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field
from sqlalchemy.orm import Session

from local_places.core.constants import (
    MCP_SERVER_NAME,
    NAME_SEARCH_DEFAULT_LIMIT,
    NEARBY_DEFAULT_LIMIT,
    SEARCH_DEFAULT_LIMIT,
)
from local_places.core.errors import PlacesError
from local_places.db.session import SessionLocal
from local_places.schemas.place import (
    CategoryStats,
    PlaceCategory,
    PlaceCreate,
    PlaceRecord,
    PlaceUpdate,
    SearchFilters,
)
from local_places.services import place_service

logger = logging.getLogger(__name__)

mcp = FastMCP(MCP_SERVER_NAME)

# Replaced in tests with a factory bound to a scratch database
session_factory = SessionLocal


@contextmanager
def _tool_session(tool_name: str) -> Iterator[Session]:
    """DB session for one tool call; store and argument failures become ToolError."""
    logger.info("MCP tool call %s", tool_name)
    db = session_factory()
    try:
        yield db
    except PlacesError as e:
        raise ToolError(f"Error executing {tool_name}: {e.detail}") from e
    except ValueError as e:
        raise ToolError(f"Error executing {tool_name}: {e}") from e
    finally:
        db.close()


def _half_up(value: float) -> int:
    return int(value + 0.5)


def _num(value: float) -> str:
    return f"{value:g}"


def format_place(place: PlaceRecord) -> str:
    """Detail block for one place."""
    lines = [
        f"=== {place.name} ===",
        f"Category: {place.category}",
        f"Rating: {_num(place.rating)}/5 {'★' * _half_up(place.rating)}",
        f"Price: {'$' * (place.price_level or 1)}",
    ]
    if place.description:
        lines.append(f"Description: {place.description}")
    if place.address:
        lines.append(f"Address: {place.address}")
    if place.hours:
        lines.append(f"Hours: {place.hours}")
    if place.phone:
        lines.append(f"Phone: {place.phone}")
    if place.website:
        lines.append(f"Website: {place.website}")
    if place.amenities:
        lines.append(f"Amenities: {', '.join(place.amenities)}")
    lines.append(f"Location: {_num(place.latitude)}, {_num(place.longitude)}")
    return "\n".join(lines)


def format_list(title: str, places: list[PlaceRecord], with_address: bool = False) -> str:
    lines = [f"=== {title} ===", ""]
    for i, place in enumerate(places, start=1):
        line = f"{i}. {place.name} ({place.category}) - {_num(place.rating)}★"
        if with_address and place.address:
            line += f" - {place.address}"
        lines.append(line)
    return "\n".join(lines)


def format_statistics(stats: list[CategoryStats]) -> str:
    lines = ["=== Place Statistics ===", ""]
    for s in stats:
        lines.append(f"{s.category.upper()}:")
        lines.append(f"  • Total: {s.count} places")
        lines.append(f"  • Avg Rating: {_num(s.avg_rating)}/5")
        lines.append(f"  • Avg Price: {'$' * _half_up(s.avg_price_level)}")
        lines.append("")
    return "\n".join(lines).rstrip()


def _not_found(place_id: int) -> str:
    return f"Place with ID {place_id} not found."


Category = Annotated[PlaceCategory | None, Field(description="Filter by category")]


def search_places(
    category: Category = None,
    min_rating: Annotated[float, Field(ge=0, le=5, description="Minimum rating (0-5)")] = 0,
    max_price_level: Annotated[
        int | None, Field(ge=1, le=3, description="Maximum price level (1-3, where 1=$, 2=$$, 3=$$$)")
    ] = None,
    location: Annotated[
        str | None, Field(description='Filter by city or location name (e.g. "Chicago", "New York")')
    ] = None,
    latitude: Annotated[float | None, Field(ge=-90, le=90, description="Center latitude for radius filter")] = None,
    longitude: Annotated[float | None, Field(ge=-180, le=180, description="Center longitude for radius filter")] = None,
    radius_km: Annotated[float | None, Field(gt=0, description="Radius in kilometers around the center")] = None,
    limit: Annotated[int, Field(ge=1, le=500, description="Maximum number of results (default: 50)")] = SEARCH_DEFAULT_LIMIT,
) -> str:
    """Search for places with optional filters (category, rating, price level, location, radius around a point)."""
    with _tool_session("search_places") as db:
        filters = SearchFilters(
            category=category,
            min_rating=min_rating,
            max_price_level=max_price_level,
            location=location,
            latitude=latitude,
            longitude=longitude,
            radius_km=radius_km,
            limit=limit,
        )
        places = place_service.search_places(db, filters)
    if not places:
        return "No places found matching criteria."
    return format_list(f"Found {len(places)} places", places, with_address=True)


def get_place_details(id: Annotated[int, Field(description="Place ID")]) -> str:
    """Get full details for a specific place by ID."""
    with _tool_session("get_place_details") as db:
        place = place_service.get_place(db, id)
    return format_place(place) if place else _not_found(id)


def add_place(
    name: Annotated[str, Field(min_length=1, description="Place name")],
    category: Annotated[PlaceCategory, Field(description="Place category")],
    latitude: Annotated[float, Field(ge=-90, le=90, description="Latitude coordinate")],
    longitude: Annotated[float, Field(ge=-180, le=180, description="Longitude coordinate")],
    rating: Annotated[float, Field(ge=0, le=5, description="Rating (0-5, default: 0)")] = 0,
    price_level: Annotated[int, Field(ge=1, le=3, description="Price level (1-3, default: 2)")] = 2,
    description: str | None = None,
    amenities: Annotated[
        list[str] | None, Field(description='Amenities like ["wifi", "parking", "outdoor_seating"]')
    ] = None,
    hours: str | None = None,
    address: str | None = None,
    phone: str | None = None,
    website: str | None = None,
) -> str:
    """Add a new place to the database (CREATE operation)."""
    with _tool_session("add_place") as db:
        data = PlaceCreate(
            name=name,
            category=category,
            latitude=latitude,
            longitude=longitude,
            rating=rating,
            price_level=price_level,
            description=description,
            amenities=amenities or [],
            hours=hours,
            address=address,
            phone=phone,
            website=website,
        )
        place = place_service.add_place(db, data)
    return f'✅ Successfully added "{place.name}"!\n\n{format_place(place)}'


def update_place(
    id: Annotated[int, Field(description="Place ID to update")],
    name: str | None = None,
    category: PlaceCategory | None = None,
    latitude: Annotated[float | None, Field(ge=-90, le=90)] = None,
    longitude: Annotated[float | None, Field(ge=-180, le=180)] = None,
    rating: Annotated[float | None, Field(ge=0, le=5)] = None,
    price_level: Annotated[int | None, Field(ge=1, le=3)] = None,
    description: str | None = None,
    amenities: list[str] | None = None,
    hours: str | None = None,
    address: str | None = None,
    phone: str | None = None,
    website: str | None = None,
) -> str:
    """Update an existing place (UPDATE operation). Omitted fields are left unchanged."""
    supplied = {
        "name": name,
        "category": category,
        "latitude": latitude,
        "longitude": longitude,
        "rating": rating,
        "price_level": price_level,
        "description": description,
        "amenities": amenities,
        "hours": hours,
        "address": address,
        "phone": phone,
        "website": website,
    }
    with _tool_session("update_place") as db:
        patch = PlaceUpdate(**{k: v for k, v in supplied.items() if v is not None})
        place = place_service.update_place(db, id, patch)
    if place is None:
        return _not_found(id)
    return f'✅ Successfully updated "{place.name}"!\n\n{format_place(place)}'


def delete_place(id: Annotated[int, Field(description="Place ID to delete")]) -> str:
    """Delete a place from the database (DELETE operation)."""
    with _tool_session("delete_place") as db:
        deleted = place_service.delete_place(db, id)
    return f"✅ Successfully deleted place ID {id}." if deleted else _not_found(id)


def get_statistics(category: Category = None) -> str:
    """Get statistics about places (counts, average ratings, average price by category)."""
    with _tool_session("get_statistics") as db:
        stats = place_service.get_statistics(db, category)
    if not stats:
        return "No statistics available."
    return format_statistics(stats)


def places_nearby(
    latitude: Annotated[float, Field(ge=-90, le=90, description="Center latitude")],
    longitude: Annotated[float, Field(ge=-180, le=180, description="Center longitude")],
    radius_km: Annotated[float, Field(gt=0, description="Search radius in kilometers")],
    category: Category = None,
    limit: Annotated[int, Field(ge=1, le=500, description="Maximum results (default: 20)")] = NEARBY_DEFAULT_LIMIT,
) -> str:
    """Find places within a radius of a location."""
    with _tool_session("places_nearby") as db:
        places = place_service.places_nearby(db, latitude, longitude, radius_km, category=category, limit=limit)
    if not places:
        return f"No places found within {_num(radius_km)}km of ({_num(latitude)}, {_num(longitude)})."
    return format_list(f"{len(places)} places within {_num(radius_km)}km", places)


def search_by_name(
    search_term: Annotated[str, Field(min_length=1, description="Search term to match in place names")],
    limit: Annotated[int, Field(ge=1, le=500, description="Maximum results (default: 10)")] = NAME_SEARCH_DEFAULT_LIMIT,
) -> str:
    """Search for places by name (partial matching)."""
    with _tool_session("search_by_name") as db:
        places = place_service.search_by_name(db, search_term, limit=limit)
    if not places:
        return f'No places found matching "{search_term}".'
    return format_list(f'Search results for "{search_term}"', places)


TOOL_FUNCTIONS = (
    search_places,
    get_place_details,
    add_place,
    update_place,
    delete_place,
    get_statistics,
    places_nearby,
    search_by_name,
)

for _fn in TOOL_FUNCTIONS:
    mcp.tool(_fn)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Local Places MCP Server running on stdio")
    mcp.run()


if __name__ == "__main__":
    main()
