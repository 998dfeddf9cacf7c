from datetime import timedelta

import pytest

from storefront.core.exceptions import UnauthenticatedError
from storefront.services import session_service
from storefront.utils.time_utils import utcnow

USER_ID = "65f1c0ffee0000000000abcd"


@pytest.mark.asyncio
async def test_create_and_resolve(app_context):
    token = await session_service.create(app_context, USER_ID)

    auth = await session_service.resolve(app_context, token)

    assert auth.user_id == USER_ID
    session = await app_context.sessions.find_one({"session_id": auth.session_id})
    assert session["expires_at"] - session["created_at"] == timedelta(hours=24)


@pytest.mark.asyncio
async def test_token_is_signed_not_raw_session_id(app_context):
    token = await session_service.create(app_context, USER_ID)
    auth = await session_service.resolve(app_context, token)

    assert token != auth.session_id
    with pytest.raises(UnauthenticatedError):
        await session_service.resolve(app_context, auth.session_id)


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, "", "garbage", "abc.def"])
async def test_missing_or_malformed_token(app_context, token):
    with pytest.raises(UnauthenticatedError):
        await session_service.resolve(app_context, token)


@pytest.mark.asyncio
async def test_tampered_token(app_context):
    token = await session_service.create(app_context, USER_ID)
    session_id, signature = token.rsplit(".", 1)
    forged = f"{session_id}x.{signature}"

    with pytest.raises(UnauthenticatedError):
        await session_service.resolve(app_context, forged)


@pytest.mark.asyncio
async def test_token_signed_with_other_secret(app_context, test_settings):
    token = await session_service.create(app_context, USER_ID)
    app_context.settings = test_settings.model_copy(update={"SECRET_KEY": "rotated"})

    with pytest.raises(UnauthenticatedError):
        await session_service.resolve(app_context, token)


@pytest.mark.asyncio
async def test_expired_session_fails_closed(app_context):
    token = await session_service.create(app_context, USER_ID)
    auth = await session_service.resolve(app_context, token)

    await app_context.sessions.update_one(
        {"session_id": auth.session_id},
        {"$set": {"expires_at": utcnow() - timedelta(seconds=1)}},
    )

    with pytest.raises(UnauthenticatedError):
        await session_service.resolve(app_context, token)
    assert await app_context.sessions.count_documents({"session_id": auth.session_id}) == 0


@pytest.mark.asyncio
async def test_resolve_after_destroy(app_context):
    token = await session_service.create(app_context, USER_ID)

    await session_service.destroy(app_context, token)

    with pytest.raises(UnauthenticatedError):
        await session_service.resolve(app_context, token)


@pytest.mark.asyncio
async def test_destroy_is_idempotent(app_context):
    token = await session_service.create(app_context, USER_ID)

    await session_service.destroy(app_context, token)
    await session_service.destroy(app_context, token)
    await session_service.destroy(app_context, "garbage")
    await session_service.destroy(app_context, None)


@pytest.mark.asyncio
async def test_destroy_all_keeps_current(app_context):
    current = await session_service.resolve(app_context, await session_service.create(app_context, USER_ID))
    other_token = await session_service.create(app_context, USER_ID)

    removed = await session_service.destroy_all_for_user(app_context, USER_ID, keep_session_id=current.session_id)

    assert removed == 1
    with pytest.raises(UnauthenticatedError):
        await session_service.resolve(app_context, other_token)
    assert await app_context.sessions.count_documents({"user_id": USER_ID}) == 1
