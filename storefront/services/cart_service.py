"""
storefront/services/cart_service.py

Purpose: Cart line mutations on the user aggregate

- add: new line, or increment an existing line's quantity
- set_quantity: replace quantity; zero or negative removes the line
- remove: idempotent line removal
- list_items: current lines (empty list for an empty cart)
"""

from typing import List, Optional

from storefront.core.context import AppContext, AuthContext
from storefront.core.exceptions import InvalidInputError, ResourceNotFoundError
from storefront.core.logging import get_logger, LogContext
from storefront.models.user import UserAccount, CartLine
from storefront.services import user_repository
from storefront.utils.constants import (
    INVALID_CART_DATA_MESSAGE,
    INVALID_QUANTITY_MESSAGE,
    QUANTITY_LIMIT_MESSAGE,
    CART_ITEM_NOT_FOUND_MESSAGE,
    MAX_LINE_QUANTITY,
)

logger = get_logger(__name__)


def _require_quantity(qty) -> int:
    # bool is an int subclass; "true" is not a count
    if isinstance(qty, bool) or not isinstance(qty, int):
        raise InvalidInputError(INVALID_QUANTITY_MESSAGE)
    if qty > MAX_LINE_QUANTITY:
        raise InvalidInputError(QUANTITY_LIMIT_MESSAGE)
    return qty


async def list_items(ctx: AppContext, auth: AuthContext) -> List[CartLine]:
    account = await user_repository.load(ctx, auth.user_id)
    return account.cart


async def add(
    ctx: AppContext,
    auth: AuthContext,
    product_id: str,
    name: str,
    qty: int,
    price: Optional[float] = None,
    image: Optional[str] = None,
    desc: Optional[str] = None,
) -> List[CartLine]:
    """
    Adds qty of a product to the cart.

    An existing line for the product has its quantity incremented;
    its name/price/image/desc are left as first added.

    Raises:
        InvalidInputError: productId, name or a positive qty missing, or
            the line would exceed MAX_LINE_QUANTITY
    """
    if not product_id or not name or not qty:
        raise InvalidInputError(INVALID_CART_DATA_MESSAGE)
    qty = _require_quantity(qty)
    if qty <= 0:
        raise InvalidInputError(INVALID_QUANTITY_MESSAGE)

    new_line = CartLine(product_id=product_id, name=name, qty=qty, price=price, image=image, desc=desc)

    def apply(account: UserAccount) -> bool:
        line = account.find_cart_line(product_id)
        if line is not None:
            if line.qty + qty > MAX_LINE_QUANTITY:
                raise InvalidInputError(QUANTITY_LIMIT_MESSAGE)
            line.qty += qty
        else:
            account.cart.append(new_line.model_copy())
        return True

    with LogContext(user_id=auth.user_id, product_id=product_id):
        account = await user_repository.mutate(ctx, auth.user_id, apply)
        logger.info(f"Added {qty} to cart")
        return account.cart


async def set_quantity(ctx: AppContext, auth: AuthContext, product_id: str, qty: int) -> List[CartLine]:
    """
    Sets the quantity of an existing line. qty <= 0 removes the line.

    Raises:
        InvalidInputError: productId missing, qty not an integer or
            above MAX_LINE_QUANTITY
        ResourceNotFoundError: No line for this product
    """
    if not product_id:
        raise InvalidInputError(INVALID_CART_DATA_MESSAGE)
    qty = _require_quantity(qty)

    def apply(account: UserAccount) -> bool:
        line = account.find_cart_line(product_id)
        if line is None:
            raise ResourceNotFoundError(CART_ITEM_NOT_FOUND_MESSAGE)
        if qty <= 0:
            account.cart = [item for item in account.cart if item.product_id != product_id]
        else:
            line.qty = qty
        return True

    with LogContext(user_id=auth.user_id, product_id=product_id):
        account = await user_repository.mutate(ctx, auth.user_id, apply)
        if qty <= 0:
            logger.info("Cart line removed by zero quantity")
        else:
            logger.info(f"Cart quantity set to {qty}")
        return account.cart


async def remove(ctx: AppContext, auth: AuthContext, product_id: str) -> List[CartLine]:
    """
    Removes a product's line. Removing an absent line succeeds without a write.
    """
    if not product_id:
        raise InvalidInputError(INVALID_CART_DATA_MESSAGE)

    def apply(account: UserAccount) -> bool:
        remaining = [item for item in account.cart if item.product_id != product_id]
        if len(remaining) == len(account.cart):
            return False
        account.cart = remaining
        return True

    with LogContext(user_id=auth.user_id, product_id=product_id):
        account = await user_repository.mutate(ctx, auth.user_id, apply)
        logger.debug("Cart line removal processed")
        return account.cart
