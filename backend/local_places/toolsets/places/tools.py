"""Places toolset: the eight database operations offered to the chat model."""
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, Field, ValidationError
from pydantic_ai.tools import ToolDefinition

from local_places.agents.deps import PlacesDeps
from local_places.core.constants import NAME_SEARCH_DEFAULT_LIMIT, NEARBY_DEFAULT_LIMIT
from local_places.core.errors import StoreError
from local_places.schemas.place import PlaceCategory, PlaceCreate, PlaceUpdate, SearchFilters
from local_places.services import place_service

logger = logging.getLogger(__name__)

MAX_LOGGED_LIST_LEN = 50

# Fields sent back to the model for list results (keeps context small)
SEARCH_SUMMARY_FIELDS = ("id", "name", "category", "rating", "price_level", "address", "amenities")
BRIEF_SUMMARY_FIELDS = ("id", "name", "category", "rating", "address")


class SearchPlacesArgs(SearchFilters):
    pass


class GetPlaceDetailsArgs(BaseModel):
    id: int = Field(..., description="Place ID")


class AddPlaceArgs(PlaceCreate):
    pass


class UpdatePlaceArgs(PlaceUpdate):
    id: int = Field(..., description="Place ID to update")


class DeletePlaceArgs(BaseModel):
    id: int = Field(..., description="Place ID to delete")


class GetStatisticsArgs(BaseModel):
    category: PlaceCategory | None = Field(default=None, description="Filter by category (optional)")


class PlacesNearbyArgs(BaseModel):
    latitude: float = Field(..., ge=-90, le=90, description="Center latitude")
    longitude: float = Field(..., ge=-180, le=180, description="Center longitude")
    radius_km: float = Field(..., gt=0, description="Search radius in kilometers")
    category: PlaceCategory | None = Field(default=None, description="Filter by category (optional)")
    limit: int = Field(default=NEARBY_DEFAULT_LIMIT, ge=1, le=500, description="Maximum results")


class SearchByNameArgs(BaseModel):
    search_term: str = Field(..., min_length=1, description="Search term (partial, case-insensitive)")
    limit: int = Field(default=NAME_SEARCH_DEFAULT_LIMIT, ge=1, le=500, description="Max results")


def _sanitize(value: Any) -> Any:
    """Truncate long lists for logging."""
    if isinstance(value, list):
        if len(value) <= MAX_LOGGED_LIST_LEN:
            return [_sanitize(v) for v in value]
        return [_sanitize(v) for v in value[:MAX_LOGGED_LIST_LEN]] + [f"... ({len(value)} total)"]
    if isinstance(value, dict):
        return {k: _sanitize(v) for k, v in value.items()}
    return value


def _log_tool(deps: PlacesDeps, tool_name: str, arguments: dict[str, Any]) -> None:
    """Log tool invocation. Call before dispatch."""
    try:
        payload = json.dumps(_sanitize(arguments), default=str)
    except (TypeError, ValueError):
        payload = str(arguments)[:2000]
    logger.info("Tool call %s session=%s args=%s", tool_name, deps.session_id, payload)


def _not_found(place_id: int) -> dict[str, Any]:
    return {"success": True, "found": False, "message": f"Place with ID {place_id} not found."}


def _listing(places: list, fields: tuple[str, ...]) -> dict[str, Any]:
    return {"success": True, "count": len(places), "data": [p.summary(*fields) for p in places]}


def search_places(deps: PlacesDeps, args: SearchPlacesArgs) -> dict[str, Any]:
    places = place_service.search_places(deps.db, args)
    return _listing(places, SEARCH_SUMMARY_FIELDS)


def get_place_details(deps: PlacesDeps, args: GetPlaceDetailsArgs) -> dict[str, Any]:
    place = place_service.get_place(deps.db, args.id)
    if place is None:
        return _not_found(args.id)
    return {"success": True, "found": True, "data": place.model_dump(mode="json")}


def add_place(deps: PlacesDeps, args: AddPlaceArgs) -> dict[str, Any]:
    place = place_service.add_place(deps.db, args)
    return {"success": True, "data": place.model_dump(mode="json")}


def update_place(deps: PlacesDeps, args: UpdatePlaceArgs) -> dict[str, Any]:
    patch = PlaceUpdate.model_validate(args.model_dump(exclude_unset=True, exclude={"id"}))
    place = place_service.update_place(deps.db, args.id, patch)
    if place is None:
        return _not_found(args.id)
    return {"success": True, "found": True, "data": place.model_dump(mode="json")}


def delete_place(deps: PlacesDeps, args: DeletePlaceArgs) -> dict[str, Any]:
    if place_service.delete_place(deps.db, args.id):
        return {"success": True, "deleted": True, "message": f"Place {args.id} deleted."}
    return {"success": True, "deleted": False, "message": f"Place with ID {args.id} not found."}


def get_statistics(deps: PlacesDeps, args: GetStatisticsArgs) -> dict[str, Any]:
    stats = place_service.get_statistics(deps.db, args.category)
    return {"success": True, "data": [s.model_dump() for s in stats]}


def places_nearby(deps: PlacesDeps, args: PlacesNearbyArgs) -> dict[str, Any]:
    places = place_service.places_nearby(
        deps.db,
        args.latitude,
        args.longitude,
        args.radius_km,
        category=args.category,
        limit=args.limit,
    )
    return _listing(places, BRIEF_SUMMARY_FIELDS)


def search_by_name(deps: PlacesDeps, args: SearchByNameArgs) -> dict[str, Any]:
    places = place_service.search_by_name(deps.db, args.search_term, limit=args.limit)
    return _listing(places, BRIEF_SUMMARY_FIELDS)


@dataclass(frozen=True)
class PlaceTool:
    name: str
    description: str
    args_model: type[BaseModel]
    handler: Callable[[PlacesDeps, Any], dict[str, Any]]

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters_json_schema=self.args_model.model_json_schema(),
        )


TOOLS: dict[str, PlaceTool] = {
    t.name: t
    for t in (
        PlaceTool(
            "search_places",
            "Search for places with optional filters like category, rating, price level, or location. "
            "Use this when users ask about finding places in a specific city or area.",
            SearchPlacesArgs,
            search_places,
        ),
        PlaceTool(
            "get_place_details",
            "Get full details for a specific place by ID.",
            GetPlaceDetailsArgs,
            get_place_details,
        ),
        PlaceTool(
            "add_place",
            "Add a new place to the database. Use when user wants to create or add a new location.",
            AddPlaceArgs,
            add_place,
        ),
        PlaceTool(
            "update_place",
            "Update an existing place. Only the fields you pass are changed. "
            "Use when user wants to modify or edit place information.",
            UpdatePlaceArgs,
            update_place,
        ),
        PlaceTool(
            "delete_place",
            "Delete a place from the database. Use when user wants to remove a location.",
            DeletePlaceArgs,
            delete_place,
        ),
        PlaceTool(
            "get_statistics",
            "Get statistics about places including counts and averages by category.",
            GetStatisticsArgs,
            get_statistics,
        ),
        PlaceTool(
            "places_nearby",
            "Find places within a certain distance (km) of coordinates.",
            PlacesNearbyArgs,
            places_nearby,
        ),
        PlaceTool(
            "search_by_name",
            "Search for places by name (partial matching).",
            SearchByNameArgs,
            search_by_name,
        ),
    )
}


def tool_names() -> list[str]:
    return list(TOOLS)


def tool_definitions() -> list[ToolDefinition]:
    """Tool definitions sent to the model with every request."""
    return [t.definition() for t in TOOLS.values()]


def _format_validation_error(e: ValidationError) -> str:
    parts = []
    for err in e.errors(include_url=False):
        loc = ".".join(str(x) for x in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def execute_tool(deps: PlacesDeps, name: str, raw_args: dict[str, Any] | None) -> dict[str, Any]:
    """
    Validate and run one tool call. Always returns a payload dict:
    failures come back as {"success": False, "error": category, "detail": text}.
    """
    arguments = raw_args or {}
    _log_tool(deps, name, arguments)
    tool = TOOLS.get(name)
    if tool is None:
        return {"success": False, "error": "unknown_operation", "detail": f"Unknown function: {name}"}
    try:
        args = tool.args_model.model_validate(arguments)
    except ValidationError as e:
        return {"success": False, "error": "invalid_arguments", "detail": _format_validation_error(e)}
    try:
        return tool.handler(deps, args)
    except StoreError as e:
        return {"success": False, "error": "store_failure", "detail": e.detail}
    except ValidationError as e:
        return {"success": False, "error": "invalid_arguments", "detail": _format_validation_error(e)}
    except Exception as e:
        logger.exception("Tool %s failed", name)
        return {"success": False, "error": "operation_failed", "detail": str(e) or e.__class__.__name__}
