# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - reviews.py: Review endpoints (nested under a restaurant)
# - restaurants.py: Restaurant CRUD, geo search and statistics endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import reviews
from . import restaurants

__all__ = [
    "health",
    "reviews",
    "restaurants",
]
