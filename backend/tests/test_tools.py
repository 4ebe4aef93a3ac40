from local_places.agents.deps import PlacesDeps
from local_places.core.errors import StoreError
from local_places.services import place_service
from local_places.toolsets.places.tools import (
    BRIEF_SUMMARY_FIELDS,
    SEARCH_SUMMARY_FIELDS,
    execute_tool,
    tool_definitions,
    tool_names,
)

EXPECTED_TOOLS = [
    "search_places",
    "get_place_details",
    "add_place",
    "update_place",
    "delete_place",
    "get_statistics",
    "places_nearby",
    "search_by_name",
]


def test_registry_has_eight_tools():
    assert tool_names() == EXPECTED_TOOLS


def test_tool_definitions_expose_argument_schemas():
    defs = {d.name: d for d in tool_definitions()}
    assert set(defs) == set(EXPECTED_TOOLS)
    add_schema = defs["add_place"].parameters_json_schema
    assert set(add_schema["required"]) == {"name", "category", "latitude", "longitude"}
    assert defs["update_place"].parameters_json_schema["required"] == ["id"]
    assert set(defs["places_nearby"].parameters_json_schema["required"]) == {"latitude", "longitude", "radius_km"}
    assert defs["search_by_name"].parameters_json_schema["required"] == ["search_term"]
    assert "required" not in defs["search_places"].parameters_json_schema
    assert all(d.description for d in defs.values())


def test_search_places_payload(db, seeded):
    payload = execute_tool(PlacesDeps(db), "search_places", {"category": "cafe", "min_rating": 4})
    assert payload["success"] is True
    assert payload["count"] == 2
    assert set(payload["data"][0]) == set(SEARCH_SUMMARY_FIELDS)
    assert payload["data"][0]["name"] == "Morning Brew"


def test_get_place_details_found_and_missing(db, seeded):
    deps = PlacesDeps(db)
    found = execute_tool(deps, "get_place_details", {"id": seeded[0].id})
    assert found["success"] is True and found["found"] is True
    assert found["data"]["amenities"] == ["wifi", "outdoor_seating"]

    missing = execute_tool(deps, "get_place_details", {"id": 999})
    assert missing == {"success": True, "found": False, "message": "Place with ID 999 not found."}


def test_add_place_tool(db):
    payload = execute_tool(
        PlacesDeps(db),
        "add_place",
        {"name": "Bean There", "category": "cafe", "latitude": 41.9, "longitude": -87.6, "rating": 4.0},
    )
    assert payload["success"] is True
    assert payload["data"]["id"] > 0
    assert payload["data"]["amenities"] == []
    assert payload["data"]["price_level"] == 2


def test_update_place_tool_changes_only_supplied_fields(db, seeded):
    target = seeded[4]
    payload = execute_tool(PlacesDeps(db), "update_place", {"id": target.id, "hours": "11am-10pm"})
    assert payload["success"] is True
    assert payload["data"]["hours"] == "11am-10pm"
    assert payload["data"]["description"] == "Dim sum"
    assert payload["data"]["rating"] == target.rating


def test_update_place_tool_clears_with_null(db, seeded):
    target = seeded[4]
    payload = execute_tool(PlacesDeps(db), "update_place", {"id": target.id, "description": None})
    assert payload["data"]["description"] is None


def test_update_place_tool_missing(db):
    payload = execute_tool(PlacesDeps(db), "update_place", {"id": 404, "name": "Ghost"})
    assert payload["success"] is True and payload["found"] is False


def test_delete_place_tool_twice(db, seeded):
    deps = PlacesDeps(db)
    first = execute_tool(deps, "delete_place", {"id": seeded[0].id})
    second = execute_tool(deps, "delete_place", {"id": seeded[0].id})
    assert first["success"] is True and first["deleted"] is True
    assert second["success"] is True and second["deleted"] is False


def test_statistics_tool(db, seeded):
    payload = execute_tool(PlacesDeps(db), "get_statistics", {"category": "park"})
    assert payload["success"] is True
    assert payload["data"] == [{"category": "park", "count": 2, "avg_rating": 4.65, "avg_price_level": 1.0}]


def test_nearby_and_name_search_use_brief_summaries(db, seeded):
    deps = PlacesDeps(db)
    nearby = execute_tool(deps, "places_nearby", {"latitude": 41.9, "longitude": -87.63, "radius_km": 10})
    assert nearby["count"] == 2
    assert set(nearby["data"][0]) == set(BRIEF_SUMMARY_FIELDS)

    by_name = execute_tool(deps, "search_by_name", {"search_term": "dragon"})
    assert by_name["count"] == 1
    assert by_name["data"][0]["name"] == "Golden Dragon"


def test_unknown_tool(db):
    payload = execute_tool(PlacesDeps(db), "drop_everything", {})
    assert payload["success"] is False
    assert payload["error"] == "unknown_operation"


def test_invalid_arguments(db):
    deps = PlacesDeps(db)
    payload = execute_tool(deps, "add_place", {"name": "No coords", "category": "cafe"})
    assert payload["success"] is False
    assert payload["error"] == "invalid_arguments"
    assert "latitude" in payload["detail"]

    payload = execute_tool(deps, "search_places", {"category": "zoo"})
    assert payload["error"] == "invalid_arguments"

    payload = execute_tool(deps, "places_nearby", {"latitude": 0, "longitude": 0, "radius_km": 0})
    assert payload["error"] == "invalid_arguments"


def test_missing_arguments_treated_as_empty(db, seeded):
    payload = execute_tool(PlacesDeps(db), "search_places", None)
    assert payload["success"] is True
    assert payload["count"] == len(seeded)


def test_store_failure_becomes_payload(db, monkeypatch):
    def broken(*args, **kwargs):
        raise StoreError("Failed to search places: database is locked")

    monkeypatch.setattr(place_service, "search_places", broken)
    payload = execute_tool(PlacesDeps(db), "search_places", {})
    assert payload == {
        "success": False,
        "error": "store_failure",
        "detail": "Failed to search places: database is locked",
    }


def test_unexpected_exception_becomes_payload(db, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(place_service, "get_statistics", broken)
    payload = execute_tool(PlacesDeps(db), "get_statistics", {})
    assert payload == {"success": False, "error": "operation_failed", "detail": "boom"}
