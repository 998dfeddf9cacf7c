"""
storefront/services/session_service.py

Purpose: Cookie session management

- Creates server-side session records at signin
- Resolves signed cookie tokens to an AuthContext (fails closed)
- Destroys sessions at logout (idempotent)
- Expiry is evaluated lazily on resolve; a TTL index purges old records
"""

import secrets
from typing import Optional

from itsdangerous import Signer, BadSignature

from storefront.core.context import AppContext, AuthContext
from storefront.core.exceptions import UnauthenticatedError
from storefront.core.logging import get_logger
from storefront.services.user_repository import store_errors
from storefront.utils.constants import NOT_LOGGED_IN_MESSAGE
from storefront.utils.time_utils import utcnow, calculate_session_expiry, is_session_expired

logger = get_logger(__name__)

SIGNER_SALT = "storefront.session"


def _signer(ctx: AppContext) -> Signer:
    return Signer(ctx.settings.SECRET_KEY, salt=SIGNER_SALT)


def _unsign(ctx: AppContext, token: Optional[str]) -> Optional[str]:
    """
    Returns the session id inside a cookie token, or None if the token is
    missing or its signature does not check out.
    """
    if not token:
        return None
    try:
        return _signer(ctx).unsign(token).decode("utf-8")
    except (BadSignature, UnicodeDecodeError):
        return None


async def create(ctx: AppContext, user_id: str) -> str:
    """
    Persists a new session for the user.

    Returns:
        Signed token to be placed in the session cookie
    """
    session_id = secrets.token_urlsafe(32)
    now = utcnow()

    with store_errors("create session"):
        await ctx.sessions.insert_one({
            "session_id": session_id,
            "user_id": user_id,
            "created_at": now,
            "expires_at": calculate_session_expiry(now, ctx.settings.SESSION_TTL_HOURS),
        })

    logger.info("Session created", extra={"user_id": user_id})
    return _signer(ctx).sign(session_id).decode("utf-8")


async def resolve(ctx: AppContext, token: Optional[str]) -> AuthContext:
    """
    Maps a cookie token to the signed-in user.

    Raises:
        UnauthenticatedError: Missing, tampered, unknown or expired token
    """
    session_id = _unsign(ctx, token)
    if session_id is None:
        raise UnauthenticatedError(NOT_LOGGED_IN_MESSAGE)

    with store_errors("resolve session"):
        session = await ctx.sessions.find_one({"session_id": session_id})

    if not session or not session.get("user_id"):
        raise UnauthenticatedError(NOT_LOGGED_IN_MESSAGE)

    if is_session_expired(session.get("expires_at")):
        logger.info("Session expired", extra={"user_id": session["user_id"]})
        with store_errors("delete expired session"):
            await ctx.sessions.delete_one({"session_id": session_id})
        raise UnauthenticatedError(NOT_LOGGED_IN_MESSAGE)

    return AuthContext(user_id=session["user_id"], session_id=session_id)


async def destroy(ctx: AppContext, token: Optional[str]) -> None:
    """
    Removes the session behind a token. Invalid or already-destroyed
    tokens are ignored.
    """
    session_id = _unsign(ctx, token)
    if session_id is None:
        return

    with store_errors("destroy session"):
        result = await ctx.sessions.delete_one({"session_id": session_id})

    if result.deleted_count:
        logger.info("Session destroyed")


async def destroy_all_for_user(ctx: AppContext, user_id: str, keep_session_id: Optional[str] = None) -> int:
    """
    Signs a user out everywhere, optionally keeping the current session.
    Used after a password change.

    Returns:
        Number of sessions removed
    """
    query = {"user_id": user_id}
    if keep_session_id:
        query["session_id"] = {"$ne": keep_session_id}

    with store_errors("destroy user sessions"):
        result = await ctx.sessions.delete_many(query)

    if result.deleted_count:
        logger.info(f"Revoked {result.deleted_count} other session(s)", extra={"user_id": user_id})
    return result.deleted_count
