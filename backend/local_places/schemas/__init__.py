from local_places.schemas.place import (
    CATEGORY_VALUES,
    CategoryStats,
    PlaceCategory,
    PlaceCreate,
    PlaceRecord,
    PlaceUpdate,
    SearchFilters,
)

__all__ = [
    "CATEGORY_VALUES",
    "CategoryStats",
    "PlaceCategory",
    "PlaceCreate",
    "PlaceRecord",
    "PlaceUpdate",
    "SearchFilters",
]
