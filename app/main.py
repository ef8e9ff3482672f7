# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Restaurant Directory API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.exceptions import (
    RestaurantApiException,
    api_exception_handler,
    application_error_handler,
    duplicate_key_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.routers import health, restaurants
from app.auth import routes as auth_routes
from lib.mongo_client import MongoClient
from lib.utils import ApplicationError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: Connect to MongoDB and register Beanie documents
    - Shutdown: Close the client
    """
    logger.info(f"Starting Restaurant Directory API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    await MongoClient.init()

    yield

    logger.info("Shutting down Restaurant Directory API")
    MongoClient.close()


# Create FastAPI application
app = FastAPI(
    title="Restaurant Directory API",
    description="""
## Restaurant Directory API

CRUD, geospatial search and statistics for a restaurant directory.

### Quick Start

```bash
# Restaurants within 10 km of a point
curl http://localhost:8000/api/restaurants/within/10/km/near/-33.873,151.207

# Distance from a point to every restaurant
curl http://localhost:8000/api/restaurants/distances-from/-33.873,151.207/unit/km

# Create a restaurant (staff, owner or admin token)
curl -X POST http://localhost:8000/api/restaurants \\
  -H "Authorization: Bearer $TOKEN" -H "Content-Type: application/json" \\
  -d '{"name": "Fratelli Fresh", "suburb": "Sydney", "cuisine": ["Italian"],
       "location": {"type": "Point", "coordinates": [151.207, -33.873]}}'
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Inspect the identity carried by a bearer token",
        },
        {
            "name": "Restaurants",
            "description": "Restaurant CRUD, geospatial search, statistics and reviews",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(RestaurantApiException, api_exception_handler)
app.add_exception_handler(ApplicationError, application_error_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(DuplicateKeyError, duplicate_key_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    auth_routes.router,
    prefix="/api/auth",
    tags=["Auth"]
)

app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)

app.include_router(
    restaurants.router,
    prefix="/api/restaurants",
    tags=["Restaurants"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Restaurant Directory API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }
