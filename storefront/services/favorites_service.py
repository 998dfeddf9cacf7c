"""
storefront/services/favorites_service.py

Purpose: Favorites list on the user aggregate (set semantics by productId)
"""

from typing import List, Optional

from storefront.core.context import AppContext, AuthContext
from storefront.core.exceptions import InvalidInputError
from storefront.core.logging import get_logger, LogContext
from storefront.models.user import UserAccount, FavoriteEntry
from storefront.services import user_repository
from storefront.utils.constants import INVALID_FAVORITE_DATA_MESSAGE

logger = get_logger(__name__)


async def list_items(ctx: AppContext, auth: AuthContext) -> List[FavoriteEntry]:
    account = await user_repository.load(ctx, auth.user_id)
    return account.favorites


async def contains(ctx: AppContext, auth: AuthContext, product_id: str) -> bool:
    account = await user_repository.load(ctx, auth.user_id)
    return account.has_favorite(product_id)


async def add(
    ctx: AppContext,
    auth: AuthContext,
    product_id: str,
    name: str,
    price: Optional[float] = None,
    image: Optional[str] = None,
    desc: Optional[str] = None,
) -> None:
    """
    Adds a product to favorites; a product already present is left as is.
    """
    if not product_id or not name:
        raise InvalidInputError(INVALID_FAVORITE_DATA_MESSAGE)

    entry = FavoriteEntry(product_id=product_id, name=name, price=price, image=image, desc=desc)

    def apply(account: UserAccount) -> bool:
        if account.has_favorite(product_id):
            return False
        account.favorites.append(entry.model_copy())
        return True

    with LogContext(user_id=auth.user_id, product_id=product_id):
        await user_repository.mutate(ctx, auth.user_id, apply)
        logger.info("Favorite added")


async def remove(ctx: AppContext, auth: AuthContext, product_id: str) -> List[FavoriteEntry]:
    """
    Removes a product from favorites. Absent products are a no-op.
    """
    if not product_id:
        raise InvalidInputError(INVALID_FAVORITE_DATA_MESSAGE)

    def apply(account: UserAccount) -> bool:
        remaining = [entry for entry in account.favorites if entry.product_id != product_id]
        if len(remaining) == len(account.favorites):
            return False
        account.favorites = remaining
        return True

    with LogContext(user_id=auth.user_id, product_id=product_id):
        account = await user_repository.mutate(ctx, auth.user_id, apply)
        logger.debug("Favorite removal processed")
        return account.favorites
