# =============================================================================
# lib/mongo_client.py - MongoDB Client Wrapper
# =============================================================================
# Owns the single Motor client for the process and registers the Beanie
# document models against the configured database.
#
# Usage:
#   from lib.mongo_client import MongoClient
#   await MongoClient.init()         # app startup
#   ok = await MongoClient.ping()    # readiness checks
#   MongoClient.close()              # app shutdown
# =============================================================================

from __future__ import annotations

import logging

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class MongoClientError(ApplicationError):
    """Error while connecting to or initializing MongoDB."""

    def __init__(self, message: str):
        super().__init__(message, code="MONGO_CLIENT_ERROR")


class MongoClient:
    """
    Singleton wrapper around AsyncIOMotorClient.

    All methods are class methods; one client instance is shared across
    the application.
    """

    _instance: AsyncIOMotorClient | None = None

    @classmethod
    def get_client(cls) -> AsyncIOMotorClient:
        """
        Get or create the singleton Motor client.

        Creating the client does not open a connection; the first
        operation does.
        """
        if cls._instance is None:
            cls._instance = AsyncIOMotorClient(
                settings.MONGODB_URI,
                serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
                tz_aware=True,
            )
            logger.info("MongoDB client created")
        return cls._instance

    @classmethod
    def get_database(cls) -> AsyncIOMotorDatabase:
        return cls.get_client()[settings.MONGODB_DB]

    @classmethod
    async def init(cls) -> None:
        """
        Register document models with Beanie and build their indexes.

        Raises:
            MongoClientError: If the database cannot be reached
        """
        from core.models import DOCUMENT_MODELS

        try:
            await init_beanie(database=cls.get_database(), document_models=DOCUMENT_MODELS)
        except PyMongoError as e:
            raise MongoClientError(
                f"Failed to initialize MongoDB database '{settings.MONGODB_DB}': {e}. "
                "Check MONGODB_URI in your .env file."
            ) from e
        logger.info(f"Beanie initialized on database '{settings.MONGODB_DB}'")

    @classmethod
    async def ping(cls) -> bool:
        """Return True if the server answers a ping."""
        try:
            await cls.get_client().admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    @classmethod
    def close(cls) -> None:
        if cls._instance is not None:
            cls._instance.close()
            cls._instance = None
            logger.info("MongoDB client closed")
