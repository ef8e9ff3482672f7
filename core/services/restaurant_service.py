# =============================================================================
# core/services/restaurant_service.py - Restaurant Business Logic
# =============================================================================
# Each method performs one database operation (or a fetch plus one write)
# and returns plain dicts in their API shape. Separates HTTP concerns from
# database logic.
# =============================================================================

import logging
from typing import Any

from beanie import UpdateResponse

from app.exceptions import NotFoundError
from core import pipelines
from core.models import (
    Restaurant,
    RestaurantCreate,
    RestaurantDistance,
    RestaurantUpdate,
    Review,
    ReviewSummary,
)
from lib.query_builder import ListQuery, build_pagination
from lib.utils import normalize_document, parse_object_id

logger = logging.getLogger(__name__)


def serialize_restaurant(restaurant: Restaurant) -> dict[str, Any]:
    """Restaurant document -> JSON-ready dict with camelCase keys and "id"."""
    data = restaurant.model_dump(mode="json", by_alias=True, exclude={"id", "revision_id"})
    return {"id": str(restaurant.id), **data}


class RestaurantService:
    """
    Service for restaurant operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    async def list_restaurants(query: ListQuery) -> dict[str, Any]:
        """
        Run a translated list query.

        Goes to the Motor collection directly so field selection stays a
        real projection.

        Returns:
            Dict with "restaurants", "count" and "pagination"
        """
        collection = Restaurant.get_motor_collection()

        cursor = collection.find(query.filter, projection=query.projection)
        if query.sort:
            cursor = cursor.sort(query.sort)
        cursor = cursor.skip(query.skip).limit(query.limit)

        documents = await cursor.to_list(length=query.limit)
        total = await collection.count_documents(query.filter)

        return {
            "restaurants": [normalize_document(doc) for doc in documents],
            "count": len(documents),
            "pagination": build_pagination(query.page, query.limit, total),
        }

    @staticmethod
    async def _get_document(restaurant_id: str) -> Restaurant:
        restaurant = await Restaurant.get(parse_object_id(restaurant_id))
        if restaurant is None:
            raise NotFoundError("restaurant", restaurant_id)
        return restaurant

    @staticmethod
    async def get_restaurant(restaurant_id: str) -> dict[str, Any]:
        """
        Get a restaurant with its reviews (review text and rating only).

        Raises:
            InvalidObjectIdError: If the id is malformed
            NotFoundError: If no restaurant has this id
        """
        restaurant = await RestaurantService._get_document(restaurant_id)

        reviews = await Review.find(
            Review.restaurant == restaurant.id,
            projection_model=ReviewSummary,
        ).to_list()

        data = serialize_restaurant(restaurant)
        data["reviews"] = [
            {"id": str(r.id), "review": r.review, "rating": r.rating}
            for r in reviews
        ]
        return data

    @staticmethod
    async def create_restaurant(payload: RestaurantCreate, owner_id: str | None = None) -> dict[str, Any]:
        """
        Insert a new restaurant.

        Raises:
            DuplicateKeyError: If the name is already taken
        """
        restaurant = Restaurant(**payload.model_dump(), owner=owner_id)
        await restaurant.insert()

        logger.info(f"Created restaurant: {restaurant.id} ({restaurant.name}) owner: {owner_id}")
        return serialize_restaurant(restaurant)

    @staticmethod
    async def update_restaurant(restaurant_id: str, payload: RestaurantUpdate) -> dict[str, Any]:
        """
        Atomically apply a partial update and return the updated document.

        The merged document is validated as a whole before anything is
        written.

        Raises:
            NotFoundError: If no restaurant has this id
            ValidationError: If the merged document is invalid
        """
        current = await RestaurantService._get_document(restaurant_id)
        changes = payload.to_update()

        if not changes:
            return serialize_restaurant(current)

        stored = current.model_dump(by_alias=True, exclude={"id", "revision_id"})
        Restaurant.model_validate({**stored, **changes})

        restaurant = await Restaurant.find_one(Restaurant.id == current.id).update(
            {"$set": changes},
            response_type=UpdateResponse.NEW_DOCUMENT,
        )
        if restaurant is None:
            raise NotFoundError("restaurant", restaurant_id)

        logger.info(f"Updated restaurant: {restaurant_id} fields: {sorted(changes)}")
        return serialize_restaurant(restaurant)

    @staticmethod
    async def delete_restaurant(restaurant_id: str) -> dict[str, Any]:
        """
        Delete a restaurant and its reviews.

        Returns:
            The deleted restaurant's data
        """
        restaurant = await RestaurantService._get_document(restaurant_id)
        data = serialize_restaurant(restaurant)

        await Review.find(Review.restaurant == restaurant.id).delete()
        await restaurant.delete()

        logger.info(f"Deleted restaurant: {restaurant_id} ({restaurant.name})")
        return data

    # -------------------------------------------------------------------------
    # Geo Queries
    # -------------------------------------------------------------------------

    @staticmethod
    async def find_within(distance: float, unit: str, latlng: str) -> list[dict[str, Any]]:
        """
        Restaurants within `distance` (km or mi) of a "lat,lng" point.

        Raises:
            BadRequestError: If the point or unit is malformed
        """
        lat, lng = pipelines.parse_latlng(latlng)
        radius = pipelines.radius_in_radians(distance, unit)

        restaurants = await Restaurant.find(pipelines.within_radius_filter(lat, lng, radius)).to_list()
        return [serialize_restaurant(r) for r in restaurants]

    @staticmethod
    async def get_distances(latlng: str, unit: str) -> list[dict[str, Any]]:
        """
        Distance from a "lat,lng" point to every restaurant, nearest first.

        Raises:
            BadRequestError: If the point or unit is malformed
        """
        lat, lng = pipelines.parse_latlng(latlng)
        pipeline = pipelines.distances_pipeline(lat, lng, unit)

        rows = await Restaurant.aggregate(pipeline, projection_model=RestaurantDistance).to_list()
        return [{"id": str(row.id), "name": row.name, "distance": row.distance} for row in rows]

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    @staticmethod
    async def stats_by_suburb() -> list[dict[str, Any]]:
        return await Restaurant.aggregate(pipelines.suburb_stats_pipeline()).to_list()

    @staticmethod
    async def stats_by_cuisine() -> list[dict[str, Any]]:
        """Per-tag statistics; a restaurant with several tags counts once per tag."""
        return await Restaurant.aggregate(pipelines.cuisine_stats_pipeline()).to_list()
