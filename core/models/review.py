# =============================================================================
# core/models/review.py - Review Document and Schemas
# =============================================================================
# A review belongs to exactly one restaurant (Review.restaurant holds its id)
# and one author. Each author may review a restaurant once.
# =============================================================================

from datetime import datetime, timezone
from typing import Annotated

import pymongo
from beanie import Document, PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pymongo import IndexModel

ReviewText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=2000)]


class Review(Document):
    """A user's review of a restaurant."""

    review: ReviewText
    rating: int = Field(..., ge=1, le=5)
    restaurant: PydanticObjectId
    user: str
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="createdAt",
    )

    model_config = ConfigDict(populate_by_name=True)

    class Settings:
        name = "reviews"
        indexes = [
            IndexModel(
                [("restaurant", pymongo.ASCENDING), ("user", pymongo.ASCENDING)],
                unique=True,
            ),
        ]


class ReviewCreate(BaseModel):
    """
    Body for POST /api/restaurants/{restaurantId}/reviews.

    Example:
        {"review": "Best carbonara in town", "rating": 5}
    """
    review: ReviewText
    rating: int = Field(..., ge=1, le=5)

    model_config = ConfigDict(extra="forbid")


class ReviewSummary(BaseModel):
    """The review fields attached to a single restaurant read."""
    id: PydanticObjectId = Field(alias="_id")
    review: str
    rating: int
