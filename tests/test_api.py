"""
HTTP-level tests for the user routes.
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.exc import OperationalError

from auth.dependencies import user_store
from auth.jwt import verify_token
from auth.store import UserStore

USER = {"name": "A", "email": "a@x.com", "password": "secret1"}


def _register(client, body=None):
    return client.post("/user/register", json=body or USER)


class TestRegisterEndpoint:
    def test_register_returns_user_id(self, client):
        response = _register(client)

        assert response.status_code == 200
        assert uuid.UUID(response.json()["userId"])

    def test_duplicate_email_is_400(self, client):
        _register(client)
        response = _register(client)

        assert response.status_code == 400
        assert response.text == "Email already exists"
        assert response.headers["content-type"].startswith("text/plain")

    def test_validation_failure_is_400_with_message(self, client):
        response = _register(client, {"name": "A", "email": "a@x.com"})

        assert response.status_code == 400
        assert response.text == "password: Field required"

    def test_non_json_body_is_400(self, client):
        response = client.post(
            "/user/register",
            content=b"not json",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400

    def test_array_body_is_400(self, client):
        response = client.post("/user/register", json=["a@x.com"])
        assert response.status_code == 400

    def test_store_failure_is_400_without_driver_details(self, client):
        session = MagicMock()
        session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("disk I/O error at /var/db"))
        )
        client.app.dependency_overrides[user_store] = lambda: UserStore(session)
        try:
            response = _register(client)
        finally:
            client.app.dependency_overrides.clear()

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Could not look up user"
        assert "disk I/O" not in response.text

    def test_insert_failure_is_400(self, client):
        session = MagicMock()
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        session.execute = AsyncMock(return_value=result)
        session.flush = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("database is locked")))
        session.rollback = AsyncMock()
        client.app.dependency_overrides[user_store] = lambda: UserStore(session)
        try:
            response = _register(client)
        finally:
            client.app.dependency_overrides.clear()

        assert response.status_code == 400
        assert response.text == "Could not save user"
        session.rollback.assert_awaited_once()

    def test_malformed_json_message(self, client):
        response = client.post(
            "/user/register",
            content=b"not json",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400
        assert response.text == "body: JSON decode error"

    def test_array_body_message(self, client):
        response = client.post("/user/register", json=["a@x.com"])
        assert response.status_code == 400
        assert response.text.startswith("body: ")

    def test_unknown_field_message(self, client):
        response = _register(client, {**USER, "is_admin": True})
        assert response.status_code == 400
        assert response.text == "is_admin: Extra inputs are not permitted"


class TestLoginEndpoint:
    def test_login_returns_token_in_body_and_header(self, client, settings):
        user_id = _register(client).json()["userId"]

        response = client.post("/user/login", json={"email": "a@x.com", "password": "secret1"})

        assert response.status_code == 200
        token = response.text
        assert token
        assert response.headers["auth-token"] == token
        assert verify_token(token, settings.token_secret) == user_id

    def test_wrong_password_is_400_without_token(self, client):
        _register(client)

        response = client.post("/user/login", json={"email": "a@x.com", "password": "wrong"})

        assert response.status_code == 400
        assert response.text == "Invalid password"
        assert "auth-token" not in response.headers

    def test_unknown_email_is_400(self, client):
        response = client.post("/user/login", json={"email": "nobody@x.com", "password": "secret1"})

        assert response.status_code == 400
        assert response.text == "Email does not exist"

    def test_invalid_email_is_400(self, client):
        response = client.post("/user/login", json={"email": "nope", "password": "secret1"})

        assert response.status_code == 400
        assert response.text.startswith("email:")


class TestAppWiring:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_process_time_header(self, client):
        assert "x-process-time" in client.get("/health").headers

    def test_api_prefix(self, settings, session_factory):
        from fastapi.testclient import TestClient

        from main import create_app

        settings.api_prefix = "/api"
        app = create_app(settings=settings, session_factory=session_factory)
        with TestClient(app) as client:
            assert client.post("/api/user/register", json=USER).status_code == 200
            assert client.post("/user/register", json=USER).status_code == 404

    def test_openapi_documents_request_models(self, client):
        schemas = client.get("/openapi.json").json()["components"]["schemas"]
        assert set(schemas["RegisterRequest"]["properties"]) == {"name", "email", "password"}
        assert set(schemas["LoginRequest"]["properties"]) == {"email", "password"}
