# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - mongo_client.py: Motor client singleton and Beanie initialization
# - query_builder.py: Query-string to Mongo filter/sort/projection translation
# - utils.py: Shared utilities (error base class, ObjectId parsing)
# =============================================================================

from lib.mongo_client import MongoClient, MongoClientError
from lib.query_builder import ListQuery, QueryParseError, build_list_query, build_pagination
from lib.utils import ApplicationError, InvalidObjectIdError, normalize_document, parse_object_id

__all__ = [
    # MongoDB
    "MongoClient",
    "MongoClientError",
    # Query translation
    "ListQuery",
    "QueryParseError",
    "build_list_query",
    "build_pagination",
    # Utils
    "ApplicationError",
    "InvalidObjectIdError",
    "normalize_document",
    "parse_object_id",
]
