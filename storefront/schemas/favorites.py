"""
storefront/schemas/favorites.py

Purpose: Favorites request and response bodies
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from storefront.models.user import FavoriteEntry


class AddFavoriteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId", min_length=1)
    name: str = Field(..., min_length=1)
    price: Optional[float] = None
    image: Optional[str] = None
    desc: Optional[str] = None


class FavoriteItemsResponse(BaseModel):
    items: List[FavoriteEntry]


class FavoriteStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId")
    favorite: bool


class FavoritesResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    favorites: List[FavoriteEntry]
