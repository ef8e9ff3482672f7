# =============================================================================
# app/routers/reviews.py - Review Endpoints
# =============================================================================
# Mounted under /api/restaurants/{restaurant_id}/reviews by the restaurant
# router.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth import AuthUser, UserRole, require_roles
from core.models import ReviewCreate
from core.services.review_service import ReviewService

router = APIRouter()

RestaurantId = Annotated[str, Path(description="Restaurant ObjectId")]


@router.get("")
async def get_reviews(restaurant_id: RestaurantId):
    """List the reviews of a restaurant, newest first."""
    reviews = await ReviewService.list_reviews(restaurant_id)

    return {
        "status": "success",
        "count": len(reviews),
        "data": reviews,
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_review(
    restaurant_id: RestaurantId,
    body: ReviewCreate,
    user: AuthUser = Depends(require_roles(UserRole.USER, UserRole.ADMIN)),
):
    """
    Review a restaurant.

    Requires role user or admin. One review per user per restaurant.
    """
    review = await ReviewService.create_review(restaurant_id, user.id, body)

    return {
        "status": "success",
        "data": review,
    }
