# =============================================================================
# core/pipelines.py - Geo Filters and Aggregation Pipelines
# =============================================================================
# Pure builders for the queries the restaurant endpoints hand to MongoDB.
# Nothing here talks to the database, so every builder is testable on its own.
#
# Points are always passed to MongoDB as [lng, lat].
# =============================================================================

import math
from typing import Any

from beanie import PydanticObjectId

from app.exceptions import BadRequestError
from core.models.restaurant import DEFAULT_RATINGS_AVERAGE

# Earth radius per unit, used to turn a distance into radians for $centerSphere
EARTH_RADIUS = {
    "km": 6378.16,
    "mi": 3963.2,
}

# $geoNear returns meters; these convert to the requested unit
DISTANCE_MULTIPLIER = {
    "km": 0.001,
    "mi": 0.000621371,
}

STATS_SORT = {"numRestaurants": -1, "numRatings": -1, "avgRating": -1}


# =============================================================================
# Parameter Parsing
# =============================================================================

def parse_latlng(latlng: str) -> tuple[float, float]:
    """
    Parse a "lat,lng" path segment.

    Returns:
        (lat, lng) as floats

    Raises:
        BadRequestError: If either part is missing or not a number
    """
    parts = [part.strip() for part in latlng.split(",")]
    lat = parts[0] if parts else ""
    lng = parts[1] if len(parts) > 1 else ""

    if not lat or not lng or len(parts) > 2:
        raise BadRequestError("Please provide latitude and longitude of a point in the format lat,lng.")

    try:
        lat_value, lng_value = float(lat), float(lng)
    except ValueError:
        raise BadRequestError(f"Latitude and longitude must be numbers, got '{latlng}'.")

    if not -90 <= lat_value <= 90 or not -180 <= lng_value <= 180:
        raise BadRequestError(f"Point '{latlng}' is outside the valid latitude/longitude range.")

    return lat_value, lng_value


def validate_unit(unit: str) -> str:
    """Accept exactly 'km' or 'mi'."""
    if unit not in EARTH_RADIUS:
        raise BadRequestError("Please provide unit in km(kilometres) or mi(miles).")
    return unit


def radius_in_radians(distance: float, unit: str) -> float:
    """Convert a distance in km or mi to an angle on the sphere."""
    if not math.isfinite(distance) or distance < 0:
        raise BadRequestError(f"Distance must be a finite, non-negative number, got {distance}.")
    return distance / EARTH_RADIUS[validate_unit(unit)]


# =============================================================================
# Geo Queries
# =============================================================================

def within_radius_filter(lat: float, lng: float, radius: float) -> dict[str, Any]:
    """
    Filter for restaurants inside a spherical cap.

    Example:
        within_radius_filter(-33.873, 151.207, 0.0016)
        # {"location": {"$geoWithin": {"$centerSphere": [[151.207, -33.873], 0.0016]}}}
    """
    return {"location": {"$geoWithin": {"$centerSphere": [[lng, lat], radius]}}}


def distances_pipeline(lat: float, lng: float, unit: str) -> list[dict[str, Any]]:
    """
    Pipeline annotating every restaurant with its distance from a point.

    $geoNear must be the first stage and returns results nearest first.
    """
    return [
        {
            "$geoNear": {
                "near": {"type": "Point", "coordinates": [lng, lat]},
                "distanceField": "distance",
                "distanceMultiplier": DISTANCE_MULTIPLIER[validate_unit(unit)],
            }
        },
        {"$project": {"name": 1, "distance": 1}},
    ]


# =============================================================================
# Statistics
# =============================================================================

def group_stats_pipeline(field: str, unwind: bool = False) -> list[dict[str, Any]]:
    """
    Pipeline grouping restaurants by the uppercased value of a field.

    Args:
        field: Stored field name ("suburb", "cuisine")
        unwind: Unwind an array field first so each tag becomes its own row

    Each group carries numRestaurants, numRatings and avgRating and groups
    are ordered by those three keys, all descending.
    """
    pipeline: list[dict[str, Any]] = []
    if unwind:
        pipeline.append({"$unwind": f"${field}"})
    pipeline.extend([
        {
            "$group": {
                "_id": {"$toUpper": f"${field}"},
                "numRestaurants": {"$sum": 1},
                "numRatings": {"$sum": "$ratingsQuantity"},
                "avgRating": {"$avg": "$ratingsAverage"},
            }
        },
        {"$sort": dict(STATS_SORT)},
    ])
    return pipeline


def suburb_stats_pipeline() -> list[dict[str, Any]]:
    return group_stats_pipeline("suburb")


def cuisine_stats_pipeline() -> list[dict[str, Any]]:
    return group_stats_pipeline("cuisine", unwind=True)


def rating_summary_pipeline(restaurant_id: PydanticObjectId) -> list[dict[str, Any]]:
    """Pipeline over reviews yielding one row with nRating and avgRating."""
    return [
        {"$match": {"restaurant": restaurant_id}},
        {
            "$group": {
                "_id": "$restaurant",
                "nRating": {"$sum": 1},
                "avgRating": {"$avg": "$rating"},
            }
        },
    ]


def ratings_from_summary(rows: list[dict[str, Any]]) -> dict[str, Any]:
    """
    Restaurant fields to $set from a rating_summary_pipeline result.

    No reviews resets the restaurant to 0 ratings and the default average.
    """
    if not rows:
        return {"ratingsQuantity": 0, "ratingsAverage": DEFAULT_RATINGS_AVERAGE}
    row = rows[0]
    return {
        "ratingsQuantity": row["nRating"],
        "ratingsAverage": round(row["avgRating"], 1),
    }
