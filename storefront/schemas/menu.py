from pydantic import BaseModel, ConfigDict, Field
from typing import List


class MenuItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId")
    name: str
    price: float
    desc: str
    image: str


class MenuResponse(BaseModel):
    items: List[MenuItem]


class MenuItemResponse(BaseModel):
    item: MenuItem
