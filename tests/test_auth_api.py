"""
API tests for signup, signin, profile and logout.
"""

import asyncio

from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from storefront.core.config import Settings
from storefront.core.context import AppContext
from storefront.main import create_app
from storefront.services import credential_service

TEST_USER = {"name": "Asha", "mobile": "9876543210", "password": "idli-lover"}
SIGNIN = {"mobile": TEST_USER["mobile"], "password": TEST_USER["password"]}


class TestSignup:

    def test_signup_creates_account(self, client):
        response = client.post("/api/auth/signup", json=TEST_USER)

        assert response.status_code == 201
        assert response.json() == {"success": True, "message": "Signup successful!"}

    def test_duplicate_mobile_rejected(self, client):
        client.post("/api/auth/signup", json=TEST_USER)

        response = client.post("/api/auth/signup", json={**TEST_USER, "name": "Someone Else"})

        assert response.status_code == 400
        assert response.json()["code"] == "DUPLICATE_USER"

    def test_duplicate_detected_across_mobile_formats(self, client):
        client.post("/api/auth/signup", json=TEST_USER)

        response = client.post("/api/auth/signup", json={**TEST_USER, "mobile": "+91 98765-43210"})

        assert response.status_code == 400
        assert response.json()["code"] == "DUPLICATE_USER"

    def test_missing_fields_are_invalid_input(self, client):
        response = client.post("/api/auth/signup", json={"name": "Asha"})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    def test_bad_mobile_is_invalid_input(self, client):
        response = client.post("/api/auth/signup", json={**TEST_USER, "mobile": "12345"})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"


class TestSignin:

    def test_signin_sets_http_only_cookie(self, client):
        client.post("/api/auth/signup", json=TEST_USER)

        response = client.post("/api/auth/signin", json=SIGNIN)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["user"] == {"name": "Asha", "mobile": "9876543210"}
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("storefront_sid=")
        assert "HttpOnly" in set_cookie
        assert "Max-Age=86400" in set_cookie
        assert "Secure" not in set_cookie

    def test_unknown_mobile_is_404(self, client):
        response = client.post("/api/auth/signin", json=SIGNIN)

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_wrong_password_is_401(self, client):
        client.post("/api/auth/signup", json=TEST_USER)

        response = client.post("/api/auth/signin", json={**SIGNIN, "password": "dosa-lover"})

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIALS"
        assert "storefront_sid" not in client.cookies

    def test_signin_with_original_document_layout(self, client, app_context):
        asyncio.run(app_context.users.insert_one({
            "name": "Asha",
            "mobile": "9876543210",
            "password": credential_service.hash_password("idli-lover", rounds=4),
            "cart": [],
            "favorites": [],
            "__v": 0,
        }))

        response = client.post("/api/auth/signin", json=SIGNIN)

        assert response.status_code == 200
        assert client.post("/api/cart", json={"productId": "Idli", "name": "Idli", "qty": 1}).status_code == 200
        assert client.get("/api/auth/profile").json()["user"]["cart"][0]["qty"] == 1

    def test_secure_cookie_in_production(self):
        production = Settings(
            ENVIRONMENT="production",
            SECRET_KEY="production-secret-key",
            MONGODB_DB_NAME="storefront_test",
            BCRYPT_ROUNDS=4,
        )
        context = AppContext(settings=production, database=AsyncMongoMockClient()["storefront_test"])

        with TestClient(create_app(context)) as client:
            client.post("/api/auth/signup", json=TEST_USER)
            response = client.post("/api/auth/signin", json=SIGNIN)

        assert response.status_code == 200
        set_cookie = response.headers["set-cookie"]
        assert "Secure" in set_cookie
        assert "HttpOnly" in set_cookie
        assert "samesite=lax" in set_cookie.lower()


class TestProfile:

    def test_profile_requires_session(self, client):
        response = client.get("/api/auth/profile")

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHENTICATED"

    def test_profile_hides_password(self, signed_in_client):
        response = signed_in_client.get("/api/auth/profile")

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["name"] == "Asha"
        assert user["mobile"] == "9876543210"
        assert user["cart"] == []
        assert user["favorites"] == []
        assert "password" not in user
        assert "password_hash" not in user

    def test_update_name_keeps_password(self, signed_in_client):
        response = signed_in_client.put("/api/auth/profile/update", json={"name": "Asha R"})

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Asha R"

        signed_in_client.get("/logout")
        response = signed_in_client.post("/api/auth/signin", json=SIGNIN)
        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Asha R"

    def test_empty_name_replaces_name(self, signed_in_client):
        response = signed_in_client.put("/api/auth/profile/update", json={"name": ""})

        assert response.status_code == 200
        assert response.json()["user"]["name"] == ""
        assert signed_in_client.get("/api/auth/profile").json()["user"]["name"] == ""

    def test_blank_password_is_ignored(self, signed_in_client):
        response = signed_in_client.put("/api/auth/profile/update", json={"password": "   "})
        assert response.status_code == 200

        signed_in_client.get("/logout")
        assert signed_in_client.post("/api/auth/signin", json=SIGNIN).status_code == 200

    def test_password_change(self, signed_in_client):
        response = signed_in_client.put("/api/auth/profile/update", json={"password": "vada-lover"})
        assert response.status_code == 200

        # Current session survives the change
        assert signed_in_client.get("/api/auth/profile").status_code == 200

        signed_in_client.get("/logout")
        assert signed_in_client.post("/api/auth/signin", json=SIGNIN).status_code == 401
        response = signed_in_client.post("/api/auth/signin", json={**SIGNIN, "password": "vada-lover"})
        assert response.status_code == 200

    def test_update_requires_session(self, client):
        response = client.put("/api/auth/profile/update", json={"name": "Mallory"})

        assert response.status_code == 401


class TestLogout:

    def test_logout_clears_session(self, signed_in_client):
        response = signed_in_client.get("/logout")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert "storefront_sid" not in signed_in_client.cookies
        assert signed_in_client.get("/api/auth/profile").status_code == 401

    def test_logout_without_session_succeeds(self, client):
        response = client.get("/logout")

        assert response.status_code == 200
        assert response.json()["message"] == "Logged out"

    def test_signin_replaces_existing_session(self, signed_in_client, app_context):
        signed_in_client.post("/api/auth/signin", json=SIGNIN)

        assert signed_in_client.get("/api/auth/profile").status_code == 200
        assert asyncio.run(app_context.sessions.count_documents({})) == 1
