"""
API tests for market endpoints.

Tests cover:
- Upserting and browsing listings
- Symbol search
- Quote lookup
"""

from decimal import Decimal

from fastapi.testclient import TestClient


class TestListingsAPI:
    """Tests for /market/listings endpoints."""

    def test_upsert_and_get(self, client: TestClient):
        """
        GIVEN no listings
        WHEN I PUT /market/listings/{symbol}
        THEN the listing is stored under the normalized symbol
        """
        response = client.put("/market/listings/goi2033", json={
            "name": "GOI 7.26% 2033",
            "asset_type": "bond",
            "price": "1012.50",
            "risk_level": "LOW",
            "minimum_investment": "1000",
        })

        assert response.status_code == 200
        assert response.json()["symbol"] == "GOI2033"

        data = client.get("/market/listings/GOI2033").json()
        assert data["asset_type"] == "bond"
        assert data["risk_level"] == "LOW"
        assert Decimal(data["price"]) == Decimal("1012.50")

    def test_upsert_requires_asset_type(self, client: TestClient):
        response = client.put("/market/listings/XYZ", json={"name": "XYZ", "price": "10"})

        assert response.status_code == 422

    def test_upsert_rejects_non_positive_price(self, client: TestClient):
        response = client.put("/market/listings/XYZ", json={
            "name": "XYZ",
            "asset_type": "stock",
            "price": "0",
        })

        assert response.status_code == 400

    def test_list_filtered_by_asset_type(self, listed_client: TestClient):
        everything = listed_client.get("/market/listings").json()
        funds = listed_client.get("/market/listings", params={"asset_type": "mutual_fund"}).json()

        assert everything["count"] == 2
        assert [l["symbol"] for l in funds["listings"]] == ["FUNDY"]

    def test_get_unknown_listing(self, client: TestClient):
        response = client.get("/market/listings/NOPE")

        assert response.status_code == 404


class TestSearchAPI:
    """Tests for GET /market/search."""

    def test_search(self, listed_client: TestClient):
        response = listed_client.get("/market/search", params={"q": "fun"})

        assert response.status_code == 200
        assert [l["symbol"] for l in response.json()["listings"]] == ["FUNDY"]

    def test_search_requires_query(self, client: TestClient):
        assert client.get("/market/search").status_code == 422


class TestQuoteAPI:
    """Tests for GET /market/quote/{symbol}."""

    def test_quote_from_listing(self, listed_client: TestClient):
        response = listed_client.get("/market/quote/xyz")

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "XYZ"
        assert Decimal(data["price"]) == Decimal("100")
        assert data["asset_type"] == "stock"

    def test_quote_unknown_symbol(self, listed_client: TestClient):
        response = listed_client.get("/market/quote/NOPE")

        assert response.status_code == 404
        assert response.json()["error"] == "SYMBOL_NOT_FOUND"
