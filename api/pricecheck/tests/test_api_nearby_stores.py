"""Tests for the nearby stores endpoint."""
from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

URL = "/api/nearby-stores"

EXPECTED_OFFSETS = {
    "Walmart Supercenter": (0.01, 0.01),
    "Target": (-0.01, -0.005),
    "Safeway": (-0.005, 0.008),
    "Costco Wholesale": (0.03, -0.02),
    "Whole Foods Market": (-0.02, 0.015),
}


class TestNearbyStoresValidation:
    """Tests for GET /nearby-stores parameter validation."""

    def test_requires_latitude_and_longitude(self, client: TestClient):
        """Both coordinates are required."""
        response = client.get(URL)
        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Missing required parameters: latitude and longitude"

    def test_missing_longitude(self, client: TestClient):
        """Longitude alone missing is rejected."""
        response = client.get(URL, params={"latitude": "40"})
        assert response.status_code == 400

    def test_non_numeric_latitude(self, client: TestClient):
        """latitude=abc should be rejected."""
        response = client.get(URL, params={"latitude": "abc", "longitude": "-75"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid coordinates: latitude and longitude must be numbers"

    def test_digit_separator_latitude(self, client: TestClient):
        """Underscored numbers are not coordinates."""
        response = client.get(URL, params={"latitude": "1_0", "longitude": "-75"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid coordinates: latitude and longitude must be numbers"

    def test_non_finite_longitude(self, client: TestClient):
        """NaN coordinates are not numbers we can offset."""
        response = client.get(URL, params={"latitude": "40", "longitude": "nan"})
        assert response.status_code == 400

    def test_items_not_json(self, client: TestClient):
        """Items present but not JSON should be rejected."""
        response = client.get(URL, params={"latitude": "40", "longitude": "-75", "items": "apples,"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid items format. Expected JSON array."


class TestNearbyStoresCatalog:
    """Tests for the stores returned by GET /nearby-stores."""

    def test_returns_five_stores(self, client: TestClient):
        """Without items every store in the catalog is returned."""
        response = client.get(URL, params={"latitude": "40", "longitude": "-75"})
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert [store["name"] for store in data["stores"]] == list(EXPECTED_OFFSETS)

    def test_coordinates_offset_from_caller(self, client: TestClient):
        """Each store sits at a fixed offset from the given point."""
        response = client.get(URL, params={"latitude": "40", "longitude": "-75"})
        for store in response.json()["stores"]:
            lat_offset, lon_offset = EXPECTED_OFFSETS[store["name"]]
            assert store["latitude"] == pytest.approx(40 + lat_offset)
            assert store["longitude"] == pytest.approx(-75 + lon_offset)

    def test_store_structure(self, client: TestClient):
        """Stores carry distance and a sample basket from the store database."""
        response = client.get(URL, params={"latitude": "40", "longitude": "-75"})
        walmart = response.json()["stores"][0]
        assert walmart["distance"] == 2.4
        assert walmart["items"]["apples"] == {"price": "3.97", "source": "store-database"}
        assert set(walmart["items"]) == {"apples", "milk", "bread", "eggs", "chicken"}

    def test_results_are_deterministic(self, client: TestClient):
        """Identical inputs give identical results."""
        params = {"latitude": "40.7128", "longitude": "-74.006"}
        assert client.get(URL, params=params).json() == client.get(URL, params=params).json()


class TestNearbyStoresFiltering:
    """Tests for item filtering on GET /nearby-stores."""

    def test_filter_known_items_keeps_all(self, client: TestClient):
        """Every store carries the base items."""
        response = client.get(
            URL, params={"latitude": "40", "longitude": "-75", "items": json.dumps(["apples", "milk"])}
        )
        assert response.status_code == 200
        assert len(response.json()["stores"]) == 5

    def test_filter_is_case_insensitive(self, client: TestClient):
        """Requested item names are matched ignoring case."""
        response = client.get(
            URL, params={"latitude": "40", "longitude": "-75", "items": json.dumps(["Eggs", "CHICKEN"])}
        )
        assert len(response.json()["stores"]) == 5

    def test_filter_unknown_item_empties_list(self, client: TestClient):
        """No store carries an unknown item."""
        response = client.get(
            URL, params={"latitude": "40", "longitude": "-75", "items": json.dumps(["nonexistent"])}
        )
        assert response.status_code == 200
        assert response.json() == {"success": True, "stores": []}

    def test_empty_items_array_does_not_filter(self, client: TestClient):
        """An empty list means no filtering."""
        response = client.get(URL, params={"latitude": "40", "longitude": "-75", "items": "[]"})
        assert len(response.json()["stores"]) == 5

    def test_non_array_items_does_not_filter(self, client: TestClient):
        """A JSON value that is not an array is ignored."""
        response = client.get(URL, params={"latitude": "40", "longitude": "-75", "items": '"apples"'})
        assert response.status_code == 200
        assert len(response.json()["stores"]) == 5

    def test_non_string_item_rejected(self, client: TestClient):
        """Arrays used for filtering must hold item names."""
        response = client.get(URL, params={"latitude": "40", "longitude": "-75", "items": "[1]"})
        assert response.status_code == 400
        assert response.json()["error"] == "Items must be an array of strings"

    def test_repeated_items_parameter(self, client: TestClient):
        """Repeating the items key filters without JSON encoding."""
        response = client.get(
            URL,
            params=[("latitude", "40"), ("longitude", "-75"), ("items", "bread"), ("items", "caviar")],
        )
        assert response.json()["stores"] == []


class TestNearbyStoresErrors:
    """Tests for unexpected failures."""

    def test_unexpected_error_returns_generic_500(self, unsafe_client: TestClient):
        """Internal failures should not leak details."""
        with patch("pricecheck.routes.prices.get_popular_stores", side_effect=KeyError("catalog")):
            response = unsafe_client.get(URL, params={"latitude": "40", "longitude": "-75"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Internal server error"}

    def test_error_response_keeps_headers(self, unsafe_client: TestClient):
        """A 500 still carries the request id and security headers."""
        with patch("pricecheck.routes.prices.get_popular_stores", side_effect=KeyError("catalog")):
            response = unsafe_client.get(
                URL, params={"latitude": "40", "longitude": "-75"}, headers={"x-request-id": "req-500"}
            )

        assert response.status_code == 500
        assert response.headers["x-request-id"] == "req-500"
        assert response.headers.get("X-Content-Type-Options") == "nosniff"
        assert response.headers.get("Cache-Control") == "no-store"

    def test_error_response_keeps_cors(self, unsafe_client: TestClient):
        """Browsers on the dev frontend can read 500 bodies."""
        with patch("pricecheck.routes.prices.get_popular_stores", side_effect=KeyError("catalog")):
            response = unsafe_client.get(
                URL,
                params={"latitude": "40", "longitude": "-75"},
                headers={"Origin": "http://localhost:5173"},
            )

        assert response.status_code == 500
        assert response.headers.get("access-control-allow-origin") == "http://localhost:5173"
