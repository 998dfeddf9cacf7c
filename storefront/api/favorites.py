"""
storefront/api/favorites.py

Purpose: Favorites endpoints (session required)
"""

from fastapi import APIRouter, Depends

from storefront.api.deps import get_app_context, get_auth_context
from storefront.core.context import AppContext, AuthContext
from storefront.schemas.cart import RemoveItemRequest
from storefront.schemas.favorites import (
    AddFavoriteRequest,
    FavoriteItemsResponse,
    FavoriteStatusResponse,
    FavoritesResponse,
)
from storefront.schemas.response import MessageResponse
from storefront.services import favorites_service
from storefront.utils.constants import FAVORITE_REMOVED_MESSAGE

router = APIRouter()


@router.get("", response_model=FavoriteItemsResponse)
async def get_favorites(
    auth: AuthContext = Depends(get_auth_context),
    ctx: AppContext = Depends(get_app_context),
):
    return {"items": await favorites_service.list_items(ctx, auth)}


@router.get("/{product_id}", response_model=FavoriteStatusResponse)
async def get_favorite_status(
    product_id: str,
    auth: AuthContext = Depends(get_auth_context),
    ctx: AppContext = Depends(get_app_context),
):
    """Drives the add/remove toggle on the item page."""
    favorite = await favorites_service.contains(ctx, auth, product_id)
    return {"productId": product_id, "favorite": favorite}


@router.post("", response_model=MessageResponse)
async def add_favorite(
    payload: AddFavoriteRequest,
    auth: AuthContext = Depends(get_auth_context),
    ctx: AppContext = Depends(get_app_context),
):
    await favorites_service.add(
        ctx,
        auth,
        product_id=payload.product_id,
        name=payload.name,
        price=payload.price,
        image=payload.image,
        desc=payload.desc,
    )
    return MessageResponse()


@router.delete("", response_model=FavoritesResponse)
async def remove_favorite(
    payload: RemoveItemRequest,
    auth: AuthContext = Depends(get_auth_context),
    ctx: AppContext = Depends(get_app_context),
):
    favorites = await favorites_service.remove(ctx, auth, payload.product_id)
    return {"success": True, "message": FAVORITE_REMOVED_MESSAGE, "favorites": favorites}
