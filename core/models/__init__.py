# =============================================================================
# core/models/ - Documents and Schemas
# =============================================================================
# This package contains the Beanie documents and the Pydantic request/response
# schemas built around them:
# - restaurant.py: Restaurant document, GeoJSON point, create/update bodies
# - review.py: Review document and its create body
# =============================================================================

from .restaurant import (
    DEFAULT_RATINGS_AVERAGE,
    RESTAURANT_FIELD_TYPES,
    RESTAURANT_QUERY_FIELDS,
    GeoPoint,
    Restaurant,
    RestaurantCreate,
    RestaurantDistance,
    RestaurantUpdate,
)
from .review import (
    Review,
    ReviewCreate,
    ReviewSummary,
)

# Registered with init_beanie at startup
DOCUMENT_MODELS = [Restaurant, Review]

__all__ = [
    "DEFAULT_RATINGS_AVERAGE",
    "RESTAURANT_FIELD_TYPES",
    "RESTAURANT_QUERY_FIELDS",
    "DOCUMENT_MODELS",
    "GeoPoint",
    "Restaurant",
    "RestaurantCreate",
    "RestaurantDistance",
    "RestaurantUpdate",
    "Review",
    "ReviewCreate",
    "ReviewSummary",
]
