"""
storefront/services/menu_service.py

Purpose: Read-only menu catalogue

- Lists catalogue items in display order
- Case-insensitive substring search on item names
- Item detail lookup by productId
"""

import re
from typing import List, Optional

from storefront.core.exceptions import ResourceNotFoundError
from storefront.schemas.menu import MenuItem
from storefront.utils.constants import MENU_ITEMS, MENU_ITEM_NOT_FOUND_MESSAGE


def make_product_id(name: str) -> str:
    """
    Product ids are item names with whitespace runs replaced by underscores.
    """
    return re.sub(r"\s+", "_", name.strip())


def _to_item(name: str) -> MenuItem:
    data = MENU_ITEMS[name]
    return MenuItem(
        product_id=make_product_id(name),
        name=name,
        price=data["price"],
        desc=data["desc"],
        image=data["image"],
    )


def list_items(query: Optional[str] = None) -> List[MenuItem]:
    """
    Returns catalogue items whose name contains the query (case-insensitive).
    A blank or missing query returns the whole catalogue.
    """
    needle = (query or "").strip().lower()
    return [_to_item(name) for name in MENU_ITEMS if needle in name.lower()]


def get_item(product_id: str) -> MenuItem:
    """
    Raises:
        ResourceNotFoundError: Unknown productId
    """
    for name in MENU_ITEMS:
        if make_product_id(name) == product_id:
            return _to_item(name)
    raise ResourceNotFoundError(MENU_ITEM_NOT_FOUND_MESSAGE)
