# =============================================================================
# app/routers/restaurants.py - Restaurant Endpoints
# =============================================================================
# CRUD, geospatial search and statistics for restaurants.
# Every success response uses the envelope {"status": "success", "data", "count"?}.
#
# Static paths (within, distances-from, stats-by-*) are declared before
# /{restaurant_id} so they are never matched as identifiers.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth import AuthUser, UserRole, require_roles
from app.dependencies import RestaurantListQueryDep
from app.routers import reviews
from core.models import RestaurantCreate, RestaurantUpdate
from core.services.restaurant_service import RestaurantService

logger = logging.getLogger(__name__)

router = APIRouter()

# Re-route /{restaurant_id}/reviews to the review router
router.include_router(reviews.router, prefix="/{restaurant_id}/reviews")

RestaurantId = Annotated[str, Path(description="Restaurant ObjectId")]
LatLng = Annotated[str, Path(description="Point as 'lat,lng'", examples=["-33.873,151.207"])]
Unit = Annotated[str, Path(description="Distance unit: 'km' or 'mi'")]

EDITOR_ROLES = (UserRole.STAFF, UserRole.OWNER, UserRole.ADMIN)
DELETE_ROLES = (UserRole.OWNER, UserRole.ADMIN)


# =============================================================================
# Geo Endpoints
# =============================================================================

@router.get("/within/{distance}/{unit}/near/{latlng}")
async def get_restaurants_within(
    distance: Annotated[float, Path(ge=0, allow_inf_nan=False, description="Search radius")],
    unit: Unit,
    latlng: LatLng,
):
    """
    Get restaurants within a distance of a point.

    Example: /api/restaurants/within/10/km/near/-33.873,151.207
    """
    restaurants = await RestaurantService.find_within(distance, unit, latlng)

    return {
        "status": "success",
        "count": len(restaurants),
        "data": restaurants,
    }


@router.get("/distances-from/{latlng}/unit/{unit}")
async def get_distances(
    latlng: LatLng,
    unit: Unit,
):
    """
    Get the distance from a point to every restaurant, nearest first.

    Example: /api/restaurants/distances-from/-33.873,151.207/unit/km
    """
    distances = await RestaurantService.get_distances(latlng, unit)

    return {
        "status": "success",
        "count": len(distances),
        "data": distances,
    }


# =============================================================================
# Statistics Endpoints
# =============================================================================

@router.get("/stats-by-suburb")
async def get_stats_by_suburb():
    """Restaurant count, rating count and average rating per suburb."""
    stats = await RestaurantService.stats_by_suburb()

    return {
        "status": "success",
        "count": len(stats),
        "data": stats,
    }


@router.get("/stats-by-cuisine")
async def get_stats_by_cuisine():
    """Restaurant count, rating count and average rating per cuisine tag."""
    stats = await RestaurantService.stats_by_cuisine()

    return {
        "status": "success",
        "count": len(stats),
        "data": stats,
    }


# =============================================================================
# CRUD Endpoints
# =============================================================================

@router.get("")
async def get_all_restaurants(query: RestaurantListQueryDep):
    """
    List restaurants.

    Query parameters:
    - field filters: `suburb=Bondi`, `ratingsAverage[gte]=4`, `cuisine[in]=Thai,Italian`
    - `sort=-ratingsAverage,name`
    - `select=name,suburb`
    - `page`, `limit`
    """
    result = await RestaurantService.list_restaurants(query)

    return {
        "status": "success",
        "count": result["count"],
        "pagination": result["pagination"],
        "data": result["restaurants"],
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    body: RestaurantCreate,
    user: AuthUser = Depends(require_roles(*EDITOR_ROLES)),
):
    """
    Create a restaurant owned by the caller.

    Requires role staff, owner or admin.
    """
    restaurant = await RestaurantService.create_restaurant(body, owner_id=user.id)

    return {
        "status": "success",
        "data": restaurant,
    }


@router.get("/{restaurant_id}")
async def get_restaurant(restaurant_id: RestaurantId):
    """Get a restaurant with its reviews."""
    restaurant = await RestaurantService.get_restaurant(restaurant_id)

    return {
        "status": "success",
        "data": restaurant,
    }


@router.patch("/{restaurant_id}")
async def update_restaurant(
    restaurant_id: RestaurantId,
    body: RestaurantUpdate,
    user: AuthUser = Depends(require_roles(*EDITOR_ROLES)),
):
    """
    Partially update a restaurant.

    Requires role staff, owner or admin.
    """
    restaurant = await RestaurantService.update_restaurant(restaurant_id, body)

    return {
        "status": "success",
        "data": restaurant,
    }


@router.delete("/{restaurant_id}")
async def delete_restaurant(
    restaurant_id: RestaurantId,
    user: AuthUser = Depends(require_roles(*DELETE_ROLES)),
):
    """
    Delete a restaurant and its reviews.

    Responds 200 with the deleted restaurant's data. Requires role owner or admin.
    """
    restaurant = await RestaurantService.delete_restaurant(restaurant_id)
    logger.info(f"Restaurant {restaurant_id} deleted by {user.id}")

    return {
        "status": "success",
        "data": restaurant,
    }
