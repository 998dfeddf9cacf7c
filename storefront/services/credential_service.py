"""
storefront/services/credential_service.py

Purpose: Account registration and credential checks

- Register users keyed by mobile number
- bcrypt hashing and verification (off the event loop)
- Profile updates (name, password)
"""

import asyncio
from typing import Optional

import bcrypt
from pymongo.errors import DuplicateKeyError

from storefront.core.context import AppContext
from storefront.core.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidInputError,
    ResourceNotFoundError,
)
from storefront.core.logging import get_logger, LogContext
from storefront.models.user import UserAccount
from storefront.services import user_repository
from storefront.utils.constants import (
    USER_EXISTS_MESSAGE,
    USER_NOT_FOUND_MESSAGE,
    INVALID_CREDENTIALS_MESSAGE,
    INVALID_MOBILE_MESSAGE,
    INVALID_PASSWORD_MESSAGE,
    INVALID_NAME_MESSAGE,
)
from storefront.utils.validation_utils import normalize_mobile_number, validate_password, sanitize_input

logger = get_logger(__name__)


def hash_password(password: str, rounds: int = 10) -> str:
    """
    Hashes a plain-text password with a fresh salt.
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """
    Verifies a plain-text password against a stored bcrypt hash.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash, or the input is over bcrypt's limit
        return False


def _require_mobile(mobile: str) -> str:
    normalized = normalize_mobile_number(mobile)
    if normalized is None:
        raise InvalidInputError(INVALID_MOBILE_MESSAGE)
    return normalized


def _require_password(password: str) -> str:
    if not validate_password(password):
        raise InvalidInputError(INVALID_PASSWORD_MESSAGE)
    return password


def _require_name(name: str) -> str:
    cleaned = sanitize_input(name or "")
    if not cleaned:
        raise InvalidInputError(INVALID_NAME_MESSAGE)
    return cleaned


async def register(ctx: AppContext, name: str, mobile: str, password: str) -> UserAccount:
    """
    Creates a new account with an empty cart and favorites.

    Raises:
        InvalidInputError: Bad name, mobile or password
        DuplicateUserError: Mobile already registered
    """
    name = _require_name(name)
    mobile = _require_mobile(mobile)
    password = _require_password(password)

    with LogContext(mobile=mobile):
        if await user_repository.find_by_mobile(ctx, mobile):
            logger.info("Signup rejected, mobile already registered")
            raise DuplicateUserError(USER_EXISTS_MESSAGE)

        password_hash = await asyncio.to_thread(hash_password, password, ctx.settings.BCRYPT_ROUNDS)

        try:
            account = await user_repository.insert(
                ctx,
                {"name": name, "mobile": mobile, "password_hash": password_hash},
            )
        except DuplicateKeyError:
            # Lost a race with a concurrent signup for the same number
            logger.info("Signup rejected by unique index")
            raise DuplicateUserError(USER_EXISTS_MESSAGE)

        logger.info("New user registered", extra={"user_id": account.id})
        return account


async def verify(ctx: AppContext, mobile: str, password: str) -> UserAccount:
    """
    Checks a mobile/password pair.

    Raises:
        ResourceNotFoundError: No account for this mobile
        InvalidCredentialsError: Password does not match
    """
    normalized = normalize_mobile_number(mobile)
    account = await user_repository.find_by_mobile(ctx, normalized) if normalized else None

    if account is None:
        raise ResourceNotFoundError(USER_NOT_FOUND_MESSAGE)

    matches = await asyncio.to_thread(check_password, password or "", account.password_hash)
    if not matches:
        logger.info("Signin rejected, wrong password", extra={"user_id": account.id})
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    return account


async def update_profile(
    ctx: AppContext,
    user_id: str,
    name: Optional[str] = None,
    password: Optional[str] = None,
) -> UserAccount:
    """
    Updates display name and/or password.

    A name that is not None replaces the current one, even when it is
    empty. A password is
    re-hashed only when it is non-blank; otherwise the old hash stays.
    """
    new_name = sanitize_input(name) if name is not None else None

    new_hash = None
    if password is not None and password.strip():
        _require_password(password)
        new_hash = await asyncio.to_thread(hash_password, password, ctx.settings.BCRYPT_ROUNDS)

    def apply(account: UserAccount) -> bool:
        changed = False
        if new_name is not None:
            account.name = new_name
            changed = True
        if new_hash is not None:
            account.password_hash = new_hash
            changed = True
        return changed

    with LogContext(user_id=user_id):
        account = await user_repository.mutate(ctx, user_id, apply)
        logger.info(
            "Profile updated",
            extra={"name_changed": new_name is not None, "password_changed": new_hash is not None}
        )
        return account
