"""
storefront/db/mongo.py

Purpose: MongoDB connection setup

- Initializes Motor client with connection pooling
- Collections: users (embedded cart and favorites), sessions
- Health checks and retry logic
- Connection lifecycle is owned by the caller (see AppContext)
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError
import asyncio

from storefront.core.config import Settings
from storefront.core.context import AppContext
from storefront.core.logging import get_logger

logger = get_logger(__name__)


async def connect_to_mongo(config: Settings) -> AsyncIOMotorClient:
    """
    Establishes connection to MongoDB with retry logic.
    Called during application startup.

    Returns:
        Connected AsyncIOMotorClient

    Raises:
        ConnectionError: If every attempt fails
    """
    max_retries = 3
    retry_delay = 2

    for attempt in range(1, max_retries + 1):
        try:
            logger.info(
                f"Attempting to connect to MongoDB (attempt {attempt}/{max_retries})"
            )

            client = AsyncIOMotorClient(
                config.MONGODB_URL,
                maxPoolSize=50,
                minPoolSize=5,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=10000,
                retryWrites=True,
                retryReads=True,
            )

            # Verify connection
            await client.admin.command("ping")

            logger.info(
                f"✅ Successfully connected to MongoDB: {config.MONGODB_DB_NAME}"
            )
            return client

        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(
                f"Failed to connect to MongoDB (attempt {attempt}/{max_retries}): {e}"
            )

            if attempt < max_retries:
                logger.info(f"Retrying in {retry_delay} seconds...")
                await asyncio.sleep(retry_delay)
                retry_delay *= 2  # Exponential backoff
            else:
                logger.critical("Failed to connect to MongoDB after all retries")
                raise ConnectionError("Could not establish MongoDB connection") from e


async def create_app_context(config: Settings) -> AppContext:
    """
    Connects to MongoDB and bundles the handle with settings.
    """
    client = await connect_to_mongo(config)
    return AppContext(
        settings=config,
        database=client[config.MONGODB_DB_NAME],
        client=client,
    )


async def close_mongo_connection(context: AppContext):
    """
    Closes the MongoDB connection held by the context, if it owns one.
    Called during application shutdown.
    """
    if context.client is not None:
        logger.info("Closing MongoDB connection")
        context.client.close()
        context.client = None
        logger.info("MongoDB connection closed")


async def check_database_health(database: AsyncIOMotorDatabase) -> bool:
    """
    Checks if the database connection is healthy.

    Returns:
        True if connection is healthy, False otherwise
    """
    try:
        await database.command("ping")
        return True

    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        return False
