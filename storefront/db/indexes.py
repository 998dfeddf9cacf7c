"""
storefront/db/indexes.py

Purpose: Database index management

- Unique mobile number per account
- Unique session ids and per-user session lookups
- TTL index so expired sessions are purged by MongoDB
"""

from storefront.core.context import AppContext
from storefront.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes(context: AppContext):
    """
    Creates all necessary database indexes.
    This function is idempotent - safe to run multiple times.
    """
    users = context.users
    sessions = context.sessions

    logger.info("Creating database indexes...")

    # ==============================================
    # USERS COLLECTION INDEXES
    # ==============================================

    # Signin looks accounts up by mobile; duplicates are a signup error
    await users.create_index("mobile", unique=True, name="mobile_unique")
    logger.debug("Created unique index on users.mobile")

    await users.create_index("created_at", name="created_at_idx")
    logger.debug("Created index on users.created_at")

    # ==============================================
    # SESSIONS COLLECTION INDEXES
    # ==============================================

    await sessions.create_index("session_id", unique=True, name="session_id_unique")
    logger.debug("Created unique index on sessions.session_id")

    await sessions.create_index("user_id", name="session_user_idx")
    logger.debug("Created index on sessions.user_id")

    # Delete when expires_at is reached; resolve() also checks expiry itself
    await sessions.create_index(
        "expires_at",
        expireAfterSeconds=0,
        name="session_expiry_ttl_idx"
    )
    logger.debug("Created TTL index on sessions.expires_at")

    logger.info("✅ All database indexes created successfully")
