"""
storefront/schemas/auth.py

Purpose: Request/response bodies for signup, signin and profile routes
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from storefront.models.user import CartLine, FavoriteEntry


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Display name")
    mobile: str = Field(..., min_length=1, description="Mobile number, used to sign in")
    password: str = Field(..., min_length=1)

    model_config = {
        "json_schema_extra": {
            "example": {"name": "Asha", "mobile": "9876543210", "password": "idli-lover"}
        }
    }


class SigninRequest(BaseModel):
    mobile: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UpdateProfileRequest(BaseModel):
    """Both fields optional; absent or blank password keeps the old one."""
    name: Optional[str] = None
    password: Optional[str] = None


class UserSummary(BaseModel):
    name: str
    mobile: str


class SigninResponse(BaseModel):
    success: bool = True
    message: str
    user: UserSummary


class UserProfile(BaseModel):
    id: str
    name: str
    mobile: str
    cart: List[CartLine] = Field(default_factory=list)
    favorites: List[FavoriteEntry] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class ProfileResponse(BaseModel):
    user: UserProfile


class UpdateProfileResponse(BaseModel):
    success: bool = True
    message: str
    user: UserProfile
