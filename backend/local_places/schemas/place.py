"""Pydantic models for place records, search filters, patches and statistics."""
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PlaceCategory(str, Enum):
    """Fixed set of place categories."""
    CAFE = "cafe"
    RESTAURANT = "restaurant"
    PARK = "park"
    BOOKSTORE = "bookstore"
    GYM = "gym"
    GROCERY = "grocery"


CATEGORY_VALUES = [c.value for c in PlaceCategory]


class PlaceRecord(BaseModel):
    """A stored place as returned to callers (amenities always a list)."""
    id: int
    name: str
    category: str
    latitude: float
    longitude: float
    rating: float = 0
    price_level: int = 2
    description: str | None = None
    amenities: list[str] = []
    hours: str | None = None
    address: str | None = None
    phone: str | None = None
    website: str | None = None
    created_at: datetime | None = None

    def summary(self, *fields: str) -> dict[str, Any]:
        """Subset of fields for tool payloads (keeps model context small)."""
        data = self.model_dump(mode="json")
        return {k: data[k] for k in fields}


class PlaceCreate(BaseModel):
    """Fields for a new place. Id and created_at are assigned by the store."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=256, description="Place name")
    category: PlaceCategory = Field(..., description="Place category")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate")
    rating: float = Field(default=0, ge=0, le=5, description="Rating (0-5, default: 0)")
    price_level: int = Field(default=2, ge=1, le=3, description="Price level (1-3, where 1=$, 2=$$, 3=$$$; default: 2)")
    description: str | None = Field(default=None, description="Description")
    amenities: list[str] = Field(
        default_factory=list,
        description='Amenities like ["wifi", "parking", "outdoor_seating"]',
    )
    hours: str | None = Field(default=None, description="Business hours")
    address: str | None = Field(default=None, description="Street address")
    phone: str | None = Field(default=None, description="Phone number")
    website: str | None = Field(default=None, description="Website URL")


# Columns that may be cleared with an explicit null in a patch
NULLABLE_FIELDS = frozenset({"description", "hours", "address", "phone", "website", "amenities"})


class PlaceUpdate(BaseModel):
    """
    Partial update. Absent field = unchanged; present value = set;
    present null = cleared (nullable text fields) or reset to [] (amenities).
    Explicit null on a required column is rejected.
    """
    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=256)
    category: PlaceCategory | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    rating: float | None = Field(default=None, ge=0, le=5)
    price_level: int | None = Field(default=None, ge=1, le=3)
    description: str | None = None
    amenities: list[str] | None = None
    hours: str | None = None
    address: str | None = None
    phone: str | None = None
    website: str | None = None

    @model_validator(mode="after")
    def _reject_null_required(self) -> "PlaceUpdate":
        for name in self.model_fields_set:
            if name not in NULLABLE_FIELDS and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Explicitly supplied fields only, with enum values unwrapped and null amenities as []."""
        out: dict[str, Any] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if isinstance(value, Enum):
                value = value.value
            if name == "amenities" and value is None:
                value = []
            out[name] = value
        return out


class SearchFilters(BaseModel):
    """Filters for search_places; defaults mean 'no filter'."""
    model_config = ConfigDict(extra="ignore")

    category: PlaceCategory | None = Field(default=None, description="Filter by category")
    min_rating: float = Field(default=0, ge=0, le=5, description="Minimum rating (0-5)")
    max_price_level: int | None = Field(
        default=None, ge=1, le=3, description="Maximum price level (1-3, where 1=$, 2=$$, 3=$$$)"
    )
    location: str | None = Field(
        default=None,
        description='Filter by city or location name (e.g. "Chicago", "New York"). Searches in the address field.',
    )
    latitude: float | None = Field(default=None, ge=-90, le=90, description="Center latitude for radius filter")
    longitude: float | None = Field(default=None, ge=-180, le=180, description="Center longitude for radius filter")
    radius_km: float | None = Field(default=None, gt=0, description="Radius in kilometers around the center")
    limit: int = Field(default=50, ge=1, le=500, description="Maximum number of results (default: 50)")


class CategoryStats(BaseModel):
    category: str
    count: int
    avg_rating: float
    avg_price_level: float
