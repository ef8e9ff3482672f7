# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .restaurant_service import RestaurantService
from .review_service import ReviewService

__all__ = [
    "RestaurantService",
    "ReviewService",
]
