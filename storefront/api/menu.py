"""
storefront/api/menu.py

Purpose: Public menu catalogue and search
"""

from fastapi import APIRouter, Query
from typing import Optional

from storefront.schemas.menu import MenuResponse, MenuItemResponse
from storefront.services import menu_service

router = APIRouter()


@router.get("", response_model=MenuResponse)
async def get_menu(q: Optional[str] = Query(None, max_length=100, description="Substring of the item name")):
    return {"items": menu_service.list_items(q)}


@router.get("/{product_id}", response_model=MenuItemResponse)
async def get_menu_item(product_id: str):
    return {"item": menu_service.get_item(product_id)}
