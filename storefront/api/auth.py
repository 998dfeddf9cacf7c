"""
storefront/api/auth.py

Purpose: Account and session endpoints

- Signup / signin (sets the session cookie)
- Profile read and update
- Logout (clears the cookie, always succeeds)
"""

from fastapi import APIRouter, Depends, Response, status

from storefront.api.deps import get_app_context, get_auth_context, get_session_token
from storefront.core.config import Settings
from storefront.core.context import AppContext, AuthContext
from storefront.core.logging import get_logger
from storefront.schemas.auth import (
    SignupRequest,
    SigninRequest,
    UpdateProfileRequest,
    SigninResponse,
    ProfileResponse,
    UpdateProfileResponse,
)
from storefront.schemas.response import MessageResponse
from storefront.services import credential_service, session_service, user_repository
from storefront.utils.constants import (
    SIGNUP_SUCCESS_MESSAGE,
    SIGNIN_SUCCESS_MESSAGE,
    PROFILE_UPDATED_MESSAGE,
    LOGOUT_MESSAGE,
)

logger = get_logger(__name__)
router = APIRouter()
session_router = APIRouter()


def set_session_cookie(response: Response, settings: Settings, token: str):
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings):
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupRequest, ctx: AppContext = Depends(get_app_context)):
    await credential_service.register(ctx, payload.name, payload.mobile, payload.password)
    return MessageResponse(message=SIGNUP_SUCCESS_MESSAGE)


@router.post("/signin", response_model=SigninResponse)
async def signin(
    payload: SigninRequest,
    response: Response,
    ctx: AppContext = Depends(get_app_context),
    current_token=Depends(get_session_token),
):
    """
    Verifies credentials and starts a new session. Any session the
    browser already carried is dropped first.
    """
    account = await credential_service.verify(ctx, payload.mobile, payload.password)

    await session_service.destroy(ctx, current_token)
    token = await session_service.create(ctx, account.id)
    set_session_cookie(response, ctx.settings, token)
    logger.info("User signed in", extra={"user_id": account.id})

    return {
        "success": True,
        "message": SIGNIN_SUCCESS_MESSAGE,
        "user": {"name": account.name, "mobile": account.mobile},
    }


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    auth: AuthContext = Depends(get_auth_context),
    ctx: AppContext = Depends(get_app_context),
):
    account = await user_repository.load(ctx, auth.user_id)
    return {"user": account.public_view()}


@router.put("/profile/update", response_model=UpdateProfileResponse)
async def update_profile(
    payload: UpdateProfileRequest,
    auth: AuthContext = Depends(get_auth_context),
    ctx: AppContext = Depends(get_app_context),
):
    account = await credential_service.update_profile(
        ctx, auth.user_id, name=payload.name, password=payload.password
    )

    if payload.password and payload.password.strip():
        await session_service.destroy_all_for_user(ctx, auth.user_id, keep_session_id=auth.session_id)

    return {"success": True, "message": PROFILE_UPDATED_MESSAGE, "user": account.public_view()}


@session_router.get("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    ctx: AppContext = Depends(get_app_context),
    token=Depends(get_session_token),
):
    await session_service.destroy(ctx, token)
    clear_session_cookie(response, ctx.settings)
    return MessageResponse(message=LOGOUT_MESSAGE)
