"""
API tests for account endpoints.

Tests cover:
- Sign up (success + validation errors)
- List accounts
- Get single account
- Error responses (400, 404, 422)
"""

from decimal import Decimal

from fastapi.testclient import TestClient


# =============================================================================
# SIGN UP TESTS
# =============================================================================


class TestSignUpAPI:
    """Tests for POST /accounts endpoint."""

    def test_sign_up_success(self, client: TestClient):
        """
        GIVEN no accounts exist
        WHEN I POST /accounts with a valid email
        THEN response is 201 with a zero-balance account
        """
        response = client.post("/accounts/", json={
            "email": "Investor@Example.com",
            "full_name": "Asha Rao",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["user_id"]
        assert data["email"] == "investor@example.com"
        assert data["full_name"] == "Asha Rao"
        assert Decimal(data["cash_balance"]) == Decimal("0")

    def test_sign_up_duplicate_email(self, client: TestClient):
        """
        GIVEN an account with an email exists
        WHEN I sign up again with the same email
        THEN response is 400 VALIDATION_ERROR
        """
        client.post("/accounts/", json={"email": "investor@example.com"})

        response = client.post("/accounts/", json={"email": "investor@example.com"})

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_sign_up_invalid_email(self, client: TestClient):
        response = client.post("/accounts/", json={"email": "not-an-email"})

        assert response.status_code == 400

    def test_sign_up_missing_email(self, client: TestClient):
        """
        GIVEN a request without email
        WHEN I POST /accounts
        THEN response is 422 in the application error shape
        """
        response = client.post("/accounts/", json={"full_name": "Nobody"})

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "VALIDATION_ERROR"
        assert "email" in data["message"]


# =============================================================================
# LIST / GET TESTS
# =============================================================================


class TestGetAccountAPI:
    """Tests for GET /accounts endpoints."""

    def test_list_accounts(self, client: TestClient):
        client.post("/accounts/", json={"email": "first@example.com"})
        client.post("/accounts/", json={"email": "second@example.com"})

        response = client.get("/accounts/")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert {a["email"] for a in data["accounts"]} == {"first@example.com", "second@example.com"}

    def test_get_account(self, client: TestClient):
        user_id = client.post("/accounts/", json={"email": "investor@example.com"}).json()["user_id"]

        response = client.get(f"/accounts/{user_id}")

        assert response.status_code == 200
        assert response.json()["user_id"] == user_id

    def test_get_unknown_account(self, client: TestClient):
        """
        GIVEN no such account
        WHEN I GET /accounts/{user_id}
        THEN response is 404 NOT_FOUND
        """
        response = client.get("/accounts/missing-user")

        assert response.status_code == 404
        assert response.json() == {
            "error": "NOT_FOUND",
            "message": "Account not found: missing-user",
        }


class TestServiceEndpoints:
    """Tests for health and root endpoints."""

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, client: TestClient):
        data = client.get("/").json()

        assert data["docs"] == "/docs"
        assert "version" in data
