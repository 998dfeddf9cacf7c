"""
storefront/services/user_repository.py

Purpose: User aggregate persistence

- Load / find / insert user documents
- Full-document save guarded by a revision counter
- Load-mutate-save cycles retried on concurrent modification
- Store failures surfaced as PersistenceError
"""

from contextlib import contextmanager
from typing import Callable, Optional, Dict, Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError, DuplicateKeyError

from storefront.core.context import AppContext
from storefront.core.exceptions import ResourceNotFoundError, WriteConflictError, PersistenceError
from storefront.core.logging import get_logger
from storefront.models.user import UserAccount
from storefront.utils.constants import USER_NOT_FOUND_MESSAGE
from storefront.utils.time_utils import utcnow

logger = get_logger(__name__)

# Returns True when it changed the account and a write is needed
Mutation = Callable[[UserAccount], bool]


@contextmanager
def store_errors(operation: str):
    """
    Wraps driver failures in PersistenceError.
    Duplicate-key errors pass through for callers that handle them.
    """
    try:
        yield
    except DuplicateKeyError:
        raise
    except PyMongoError as e:
        logger.error(f"MongoDB {operation} failed: {e}")
        raise PersistenceError(f"Storage operation failed: {operation}") from e


def _object_id(user_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError):
        return None


async def load(ctx: AppContext, user_id: str) -> UserAccount:
    """
    Loads a user aggregate by id.

    Raises:
        ResourceNotFoundError: If the id is malformed or unknown
    """
    oid = _object_id(user_id)
    if oid is None:
        raise ResourceNotFoundError(USER_NOT_FOUND_MESSAGE)

    with store_errors("load user"):
        document = await ctx.users.find_one({"_id": oid})

    if not document:
        raise ResourceNotFoundError(USER_NOT_FOUND_MESSAGE)

    return UserAccount.from_document(document)


async def find_by_mobile(ctx: AppContext, mobile: str) -> Optional[UserAccount]:
    with store_errors("find user by mobile"):
        document = await ctx.users.find_one({"mobile": mobile})
    return UserAccount.from_document(document) if document else None


async def insert(ctx: AppContext, fields: Dict[str, Any]) -> UserAccount:
    """
    Inserts a new user document with empty cart and favorites.

    Raises:
        DuplicateKeyError: If the mobile number is already registered
    """
    now = utcnow()
    document = {
        "name": fields["name"],
        "mobile": fields["mobile"],
        "password": fields["password_hash"],
        "cart": [],
        "favorites": [],
        "revision": 0,
        "created_at": now,
        "updated_at": now,
    }

    with store_errors("insert user"):
        result = await ctx.users.insert_one(document)

    document["_id"] = result.inserted_id
    return UserAccount.from_document(document)


def _revision_filter(oid: ObjectId, revision: int) -> Dict[str, Any]:
    # Documents written before revisions existed count as revision 0
    if revision == 0:
        return {"_id": oid, "$or": [{"revision": 0}, {"revision": {"$exists": False}}]}
    return {"_id": oid, "revision": revision}


async def save(ctx: AppContext, account: UserAccount) -> UserAccount:
    """
    Replaces the stored document if nobody saved it since it was loaded.

    Returns:
        The account as persisted (revision bumped)

    Raises:
        WriteConflictError: If the stored revision moved on (or the user vanished)
    """
    updated = account.model_copy(update={"revision": account.revision + 1, "updated_at": utcnow()})
    document = updated.to_document()

    with store_errors("save user"):
        result = await ctx.users.replace_one(
            _revision_filter(document["_id"], account.revision),
            document,
        )

    if result.matched_count == 0:
        raise WriteConflictError()

    return updated


async def mutate(ctx: AppContext, user_id: str, mutation: Mutation) -> UserAccount:
    """
    Runs load -> mutation -> save, reloading and re-applying the mutation
    when another request saved the same account in between.

    The mutation must only touch the account it is given; it may run
    more than once.

    Raises:
        ResourceNotFoundError: If the user does not exist
        WriteConflictError: If every attempt lost the race
    """
    attempts = ctx.settings.MAX_WRITE_RETRIES

    for attempt in range(1, attempts + 1):
        account = await load(ctx, user_id)
        if not mutation(account):
            return account
        try:
            return await save(ctx, account)
        except WriteConflictError:
            logger.warning(f"Write conflict on user document (attempt {attempt}/{attempts})")
            if attempt == attempts:
                raise

    raise WriteConflictError()
