"""
storefront/schemas/cart.py

Purpose: Cart request and response bodies (camelCase on the wire)
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from storefront.models.user import CartLine
from storefront.utils.constants import MAX_LINE_QUANTITY


class AddCartItemRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId", min_length=1)
    name: str = Field(..., min_length=1)
    qty: int = Field(..., le=MAX_LINE_QUANTITY)
    price: Optional[float] = None
    image: Optional[str] = None
    desc: Optional[str] = None


class UpdateCartItemRequest(BaseModel):
    """qty <= 0 removes the line."""
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId", min_length=1)
    qty: int = Field(..., le=MAX_LINE_QUANTITY)


class RemoveItemRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId", min_length=1)


class CartItemsResponse(BaseModel):
    items: List[CartLine]


class CartResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    cart: List[CartLine]
