"""
storefront/api/deps.py

Purpose: FastAPI dependencies

- AppContext from app.state (built at startup)
- AuthContext from the session cookie; rejects with 401 before any
  handler touches the user document
"""

from fastapi import Depends, Request

from storefront.core.context import AppContext, AuthContext
from storefront.services import session_service


def get_app_context(request: Request) -> AppContext:
    return request.app.state.context


def get_session_token(request: Request, ctx: AppContext = Depends(get_app_context)):
    return request.cookies.get(ctx.settings.SESSION_COOKIE_NAME)


async def get_auth_context(
    token=Depends(get_session_token),
    ctx: AppContext = Depends(get_app_context),
) -> AuthContext:
    return await session_service.resolve(ctx, token)
