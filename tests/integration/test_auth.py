"""Integration tests for SimpleJWT authentication.

Validates:
  - /health is public (plain Django view, no DRF).
  - A token pair can be obtained and used on protected endpoints.
  - Protected DRF endpoints return 401 without or with a bad token.
"""

import pytest
from django.contrib.auth import get_user_model

pytestmark = pytest.mark.integration

PROTECTED = "/api/v1/orders/"


@pytest.fixture()
def credentials():
    get_user_model().objects.create_user(username="jwtuser", password="testpass123")
    return {"username": "jwtuser", "password": "testpass123"}


class TestTokenFlow:
    def test_obtain_and_use_token(self, api_client, credentials):
        response = api_client.post("/api/v1/auth/token/", credentials, format="json")
        assert response.status_code == 200
        access = response.json()["access"]

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        assert api_client.get(PROTECTED).status_code == 200

    def test_refresh(self, api_client, credentials):
        refresh = api_client.post("/api/v1/auth/token/", credentials, format="json").json()[
            "refresh"
        ]
        response = api_client.post("/api/v1/auth/token/refresh/", {"refresh": refresh}, format="json")
        assert response.status_code == 200
        assert "access" in response.json()

    def test_wrong_password(self, api_client, credentials):
        response = api_client.post(
            "/api/v1/auth/token/",
            {"username": "jwtuser", "password": "wrong"},
            format="json",
        )
        assert response.status_code == 401
        assert response.json()["type"] == "client_error"


class TestProtectedEndpoints:
    """All DRF endpoints require a valid JWT by default."""

    def test_health_is_public(self, client):
        response = client.get("/health")
        assert response.status_code == 200

    def test_no_token_returns_401(self, api_client):
        assert api_client.get(PROTECTED).status_code == 401

    def test_invalid_token_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer invalid.token.here")
        assert api_client.get(PROTECTED).status_code == 401

    def test_malformed_auth_header_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Token some-token")
        assert api_client.get(PROTECTED).status_code == 401

    def test_401_includes_www_authenticate_header(self, api_client):
        response = api_client.get(PROTECTED)
        assert response.status_code == 401
        assert "Bearer" in response.get("WWW-Authenticate", "")
