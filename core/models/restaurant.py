# =============================================================================
# core/models/restaurant.py - Restaurant Document and Schemas
# =============================================================================
# These models define the restaurant collection and the API contract for it:
# - GeoPoint: GeoJSON point, coordinates are [lng, lat]
# - Restaurant: Beanie document stored in the "restaurants" collection
# - RestaurantCreate / RestaurantUpdate: request bodies (unknown fields rejected)
# - RestaurantDistance: row shape of the distances-from aggregation
#
# Python attributes are snake_case; the stored and wire names are camelCase
# (ratingsAverage, ratingsQuantity, createdAt) via field aliases.
# =============================================================================

from datetime import datetime, timezone
from typing import Annotated, Literal

import pymongo
from beanie import Document, PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pymongo import IndexModel

RestaurantName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=60)]
Suburb = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=60)]
CuisineTag = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=40)]

DEFAULT_RATINGS_AVERAGE = 4.5


class GeoPoint(BaseModel):
    """
    GeoJSON point.

    Example:
        {"type": "Point", "coordinates": [151.207, -33.873]}
    """
    type: Literal["Point"] = "Point"
    coordinates: list[float] = Field(
        ...,
        min_length=2,
        max_length=2,
        description="[longitude, latitude]"
    )

    @field_validator("coordinates")
    @classmethod
    def check_ranges(cls, value: list[float]) -> list[float]:
        lng, lat = value
        if not -180 <= lng <= 180:
            raise ValueError(f"longitude {lng} is outside [-180, 180]")
        if not -90 <= lat <= 90:
            raise ValueError(f"latitude {lat} is outside [-90, 90]")
        return value

    @property
    def lng(self) -> float:
        return self.coordinates[0]

    @property
    def lat(self) -> float:
        return self.coordinates[1]


def _round_rating(value: float | None) -> float | None:
    return round(value, 1) if value is not None else None


class Restaurant(Document):
    """A restaurant in the directory."""

    name: RestaurantName
    suburb: Suburb
    cuisine: list[CuisineTag] = Field(..., min_length=1)
    location: GeoPoint
    address: str | None = None
    description: str | None = None
    ratings_average: float = Field(
        default=DEFAULT_RATINGS_AVERAGE,
        ge=1,
        le=5,
        alias="ratingsAverage",
    )
    ratings_quantity: int = Field(default=0, ge=0, alias="ratingsQuantity")
    owner: str | None = None
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="createdAt",
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("ratings_average")
    @classmethod
    def round_ratings_average(cls, value: float) -> float:
        return _round_rating(value)

    class Settings:
        name = "restaurants"
        indexes = [
            IndexModel([("name", pymongo.ASCENDING)], unique=True),
            IndexModel([("location", pymongo.GEOSPHERE)]),
        ]


# Fields that list queries may filter, sort or select on (stored names),
# with the type their query-string values are converted to
RESTAURANT_FIELD_TYPES = {
    "_id": "objectid",
    "name": "str",
    "suburb": "str",
    "cuisine": "str",
    "location": None,
    "address": "str",
    "description": "str",
    "ratingsAverage": "float",
    "ratingsQuantity": "int",
    "owner": "str",
    "createdAt": "datetime",
}

RESTAURANT_QUERY_FIELDS = set(RESTAURANT_FIELD_TYPES)


class RestaurantCreate(BaseModel):
    """
    Body for POST /api/restaurants.

    Example:
        {
            "name": "Fratelli Fresh",
            "suburb": "Sydney",
            "cuisine": ["Italian"],
            "location": {"type": "Point", "coordinates": [151.207, -33.873]}
        }
    """
    name: RestaurantName
    suburb: Suburb
    cuisine: list[CuisineTag] = Field(..., min_length=1)
    location: GeoPoint
    address: str | None = None
    description: str | None = None
    ratings_average: float = Field(
        default=DEFAULT_RATINGS_AVERAGE, ge=1, le=5, alias="ratingsAverage"
    )
    ratings_quantity: int = Field(default=0, ge=0, alias="ratingsQuantity")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("ratings_average")
    @classmethod
    def round_ratings_average(cls, value: float) -> float:
        return _round_rating(value)


class RestaurantUpdate(BaseModel):
    """
    Body for PATCH /api/restaurants/{id}.

    Every field is optional; only the fields sent are changed. The same
    validators as RestaurantCreate apply to each sent field. Only address
    and description may be cleared with null.
    """
    name: RestaurantName | None = None
    suburb: Suburb | None = None
    cuisine: list[CuisineTag] | None = Field(default=None, min_length=1)
    location: GeoPoint | None = None
    address: str | None = None
    description: str | None = None
    ratings_average: float | None = Field(default=None, ge=1, le=5, alias="ratingsAverage")
    ratings_quantity: int | None = Field(default=None, ge=0, alias="ratingsQuantity")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("ratings_average")
    @classmethod
    def round_ratings_average(cls, value: float | None) -> float | None:
        return _round_rating(value)

    @field_validator("name", "suburb", "cuisine", "location", "ratings_average", "ratings_quantity")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("field may not be null")
        return value

    def to_update(self) -> dict:
        """Fields that were sent, keyed by their stored (camelCase) names."""
        # nested models (location) are dumped whole, defaults included
        return self.model_dump(include=self.model_fields_set, by_alias=True)


class RestaurantDistance(BaseModel):
    """One row of the distances-from aggregation."""
    id: PydanticObjectId = Field(alias="_id")
    name: str
    distance: float
