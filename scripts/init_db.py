"""
Database initialization script

Run once per environment to create collections and indexes:
    python scripts/init_db.py
"""

import asyncio
import logging

from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from storefront.core.config import Settings, validate_settings
from storefront.db.indexes import create_indexes
from storefront.db.mongo import create_app_context, close_mongo_connection

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


async def init_db():
    config = Settings()
    validate_settings(config)

    logger.info(f"🔌 Connecting to MongoDB: {config.MONGODB_DB_NAME}")
    context = await create_app_context(config)

    try:
        await create_indexes(context)

        user_indexes = await context.users.index_information()
        session_indexes = await context.sessions.index_information()
        logger.info(f"  users: {sorted(user_indexes)}")
        logger.info(f"  sessions: {sorted(session_indexes)}")
        logger.info("✅ Database initialized")
    finally:
        await close_mongo_connection(context)


if __name__ == "__main__":
    asyncio.run(init_db())
