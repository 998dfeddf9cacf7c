"""
storefront/models/user.py

Purpose: User document model

- Account identity (mobile is the natural key)
- bcrypt password hash (never leaves the server)
- Embedded cart lines and favorites
- Revision counter for optimistic concurrency
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from typing import Optional, List, Dict, Any
from datetime import datetime

from bson import ObjectId

from storefront.core.exceptions import PersistenceError
from storefront.utils.constants import MAX_LINE_QUANTITY


class CartLine(BaseModel):
    """
    One cart entry; at most one per productId.
    """
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId", min_length=1)
    name: str = Field(..., min_length=1)
    qty: int = Field(..., gt=0, le=MAX_LINE_QUANTITY)
    price: Optional[float] = None
    image: Optional[str] = None
    desc: Optional[str] = None


class FavoriteEntry(BaseModel):
    """
    One favorited product; set semantics by productId.
    """
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId", min_length=1)
    name: str = Field(..., min_length=1)
    price: Optional[float] = None
    image: Optional[str] = None
    desc: Optional[str] = None


class UserAccount(BaseModel):
    """
    The user aggregate as stored in the `users` collection.

    Stored field names:
    - _id: ObjectId (exposed as `id`)
    - name, mobile
    - password: bcrypt hash (`password_hash` in Python)
    - cart: list[CartLine] (camelCase keys: productId, qty)
    - favorites: list[FavoriteEntry]
    - revision: int, bumped on every save (absent on documents
      written before revisions existed, read as 0)
    - created_at, updated_at: naive UTC datetimes
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    mobile: str
    password_hash: str = Field(..., alias="password")
    cart: List[CartLine] = Field(default_factory=list)
    favorites: List[FavoriteEntry] = Field(default_factory=list)
    revision: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "UserAccount":
        data = {key: value for key, value in document.items() if key != "_id"}
        try:
            return cls(id=str(document["_id"]), **data)
        except ValidationError as e:
            fields = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
            raise PersistenceError(
                "Stored user document is malformed",
                details={"user_id": str(document.get("_id")), "fields": fields},
            ) from e

    def to_document(self) -> Dict[str, Any]:
        document = self.model_dump(by_alias=True, exclude={"id"})
        document["_id"] = ObjectId(self.id)
        return document

    def find_cart_line(self, product_id: str) -> Optional[CartLine]:
        return next((line for line in self.cart if line.product_id == product_id), None)

    def has_favorite(self, product_id: str) -> bool:
        return any(entry.product_id == product_id for entry in self.favorites)

    def public_view(self) -> Dict[str, Any]:
        """Profile payload; everything except the password hash."""
        return {
            "id": self.id,
            "name": self.name,
            "mobile": self.mobile,
            "cart": [line.model_dump(by_alias=True) for line in self.cart],
            "favorites": [entry.model_dump(by_alias=True) for entry in self.favorites],
            "created_at": self.created_at,
        }
