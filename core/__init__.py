# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the database-facing logic:
# - models/: Beanie documents and Pydantic request/response schemas
# - pipelines.py: Geo filters and aggregation pipeline builders
# - services/: One class per collection, one method per operation
#
# Routes live in app/; code here only raises the API exception types.
# =============================================================================
