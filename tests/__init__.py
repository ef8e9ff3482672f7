# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Restaurant Directory API:
# - test_models.py: Document and request model validation
# - test_pipelines.py: Geo parsing, filters and aggregation pipelines
# - test_query_builder.py: Query-string translation and pagination
# - test_auth.py: Token handling and role checks
# - test_restaurants_api.py / test_reviews_api.py: Endpoints with mocked services
#
# Run tests with: pytest
# =============================================================================
