"""
storefront/api/cart.py

Purpose: Cart endpoints (session required)
"""

from fastapi import APIRouter, Depends

from storefront.api.deps import get_app_context, get_auth_context
from storefront.core.context import AppContext, AuthContext
from storefront.schemas.cart import (
    AddCartItemRequest,
    UpdateCartItemRequest,
    RemoveItemRequest,
    CartItemsResponse,
    CartResponse,
)
from storefront.services import cart_service
from storefront.utils.constants import CART_ITEM_REMOVED_MESSAGE

router = APIRouter()


@router.get("", response_model=CartItemsResponse)
async def get_cart(
    auth: AuthContext = Depends(get_auth_context),
    ctx: AppContext = Depends(get_app_context),
):
    return {"items": await cart_service.list_items(ctx, auth)}


@router.post("", response_model=CartResponse)
async def add_to_cart(
    payload: AddCartItemRequest,
    auth: AuthContext = Depends(get_auth_context),
    ctx: AppContext = Depends(get_app_context),
):
    cart = await cart_service.add(
        ctx,
        auth,
        product_id=payload.product_id,
        name=payload.name,
        qty=payload.qty,
        price=payload.price,
        image=payload.image,
        desc=payload.desc,
    )
    return {"success": True, "cart": cart}


@router.put("", response_model=CartResponse)
async def update_cart_quantity(
    payload: UpdateCartItemRequest,
    auth: AuthContext = Depends(get_auth_context),
    ctx: AppContext = Depends(get_app_context),
):
    cart = await cart_service.set_quantity(ctx, auth, payload.product_id, payload.qty)
    return {"success": True, "cart": cart}


@router.delete("", response_model=CartResponse)
async def remove_from_cart(
    payload: RemoveItemRequest,
    auth: AuthContext = Depends(get_auth_context),
    ctx: AppContext = Depends(get_app_context),
):
    cart = await cart_service.remove(ctx, auth, payload.product_id)
    return {"success": True, "message": CART_ITEM_REMOVED_MESSAGE, "cart": cart}
