# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import settings
from core.models import RESTAURANT_FIELD_TYPES, RESTAURANT_QUERY_FIELDS
from lib.query_builder import ListQuery, build_list_query


def get_restaurant_list_query(request: Request) -> ListQuery:
    """
    Translate the list endpoint's query string.

    Raises:
        QueryParseError: 400 on unknown fields, operators or page values
    """
    return build_list_query(
        request.query_params.multi_items(),
        allowed_fields=RESTAURANT_QUERY_FIELDS,
        field_types=RESTAURANT_FIELD_TYPES,
        default_limit=settings.DEFAULT_PAGE_SIZE,
        max_limit=settings.MAX_PAGE_SIZE,
    )


# Type alias for dependency injection
RestaurantListQueryDep = Annotated[ListQuery, Depends(get_restaurant_list_query)]
