# =============================================================================
# core/services/review_service.py - Review Business Logic
# =============================================================================
# Reviews are always addressed through their restaurant. Creating a review
# recomputes the restaurant's ratingsQuantity / ratingsAverage.
# =============================================================================

import logging
from typing import Any

from beanie import PydanticObjectId

from app.exceptions import NotFoundError
from core import pipelines
from core.models import Restaurant, Review, ReviewCreate
from lib.utils import parse_object_id

logger = logging.getLogger(__name__)


def serialize_review(review: Review) -> dict[str, Any]:
    data = review.model_dump(mode="json", by_alias=True, exclude={"id", "revision_id"})
    return {"id": str(review.id), **data}


class ReviewService:
    """Service for review operations scoped to a restaurant."""

    @staticmethod
    async def _require_restaurant(restaurant_id: str) -> PydanticObjectId:
        oid = parse_object_id(restaurant_id)
        if await Restaurant.find_one(Restaurant.id == oid).count() == 0:
            raise NotFoundError("restaurant", restaurant_id)
        return oid

    @staticmethod
    async def list_reviews(restaurant_id: str) -> list[dict[str, Any]]:
        """
        All reviews of a restaurant, newest first.

        Raises:
            NotFoundError: If the restaurant doesn't exist
        """
        oid = await ReviewService._require_restaurant(restaurant_id)
        reviews = await Review.find(Review.restaurant == oid).sort("-createdAt").to_list()
        return [serialize_review(r) for r in reviews]

    @staticmethod
    async def create_review(restaurant_id: str, user_id: str, payload: ReviewCreate) -> dict[str, Any]:
        """
        Add a review and refresh the restaurant's rating figures.

        Raises:
            NotFoundError: If the restaurant doesn't exist
            DuplicateKeyError: If this user already reviewed the restaurant
        """
        oid = await ReviewService._require_restaurant(restaurant_id)

        review = Review(review=payload.review, rating=payload.rating, restaurant=oid, user=user_id)
        await review.insert()
        logger.info(f"Created review: {review.id} for restaurant: {restaurant_id} by user: {user_id}")

        await ReviewService.update_restaurant_ratings(oid)
        return serialize_review(review)

    @staticmethod
    async def update_restaurant_ratings(restaurant_id: PydanticObjectId) -> dict[str, Any]:
        """
        Recompute ratingsQuantity and ratingsAverage from the review collection.

        Returns:
            The values written to the restaurant
        """
        rows = await Review.aggregate(pipelines.rating_summary_pipeline(restaurant_id)).to_list()
        ratings = pipelines.ratings_from_summary(rows)

        await Restaurant.find_one(Restaurant.id == restaurant_id).update({"$set": ratings})
        logger.debug(f"Restaurant {restaurant_id} ratings refreshed: {ratings}")
        return ratings
