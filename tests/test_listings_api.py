"""Tests for the listing API endpoints.

Endpoints:
- GET /categories - category slugs
- GET /listings/all - unfiltered listings
- POST /listings/filter - filtered listings for one category
- POST /listings/comprehensive - all categories, user filter only
- POST /listings/classify - classify a caller-supplied batch

The pipeline service is overridden with one whose fetcher is offline, so
every endpoint serves the seed batch.
"""

import random
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from listing_scout.api.app import app
from listing_scout.api.routers.listings import get_pipeline_service
from listing_scout.services import BestsellerFetcher, BestsellerFetchError, PipelineService


@pytest.fixture
def offline_service():
    """Override the pipeline service with a seed-only one."""
    fetcher = AsyncMock(spec=BestsellerFetcher)
    fetcher.fetch_category.side_effect = BestsellerFetchError("offline")
    fetcher.fetch_categories.side_effect = BestsellerFetchError("offline")

    app.dependency_overrides[get_pipeline_service] = lambda: PipelineService(
        fetcher, rng=random.Random(3)
    )
    yield fetcher
    app.dependency_overrides.clear()


class TestHealth:
    """Tests for GET /health."""

    @pytest.mark.asyncio
    async def test_health(self) -> None:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCategories:
    """Tests for GET /categories."""

    @pytest.mark.asyncio
    async def test_lists_slugs(self) -> None:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            response = await client.get("/api/categories")

        assert response.status_code == 200
        categories = response.json()["categories"]
        assert categories[0] == "all"
        assert "home-kitchen" in categories
        assert len(categories) == 10


class TestListAll:
    """Tests for GET /listings/all."""

    @pytest.mark.asyncio
    async def test_returns_unfiltered_seed(self, offline_service) -> None:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            response = await client.get("/api/listings/all")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["count"] == 15
        assert data["mode"] == "raw"
        assert data["source"] == "seed"
        assert data["counts"]["received"] == 15
        for listing in data["listings"]:
            assert 0 <= listing["opportunity_score"] <= 100

    @pytest.mark.asyncio
    async def test_category(self, offline_service) -> None:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            response = await client.get("/api/listings/all", params={"category": "electronics"})

        assert response.status_code == 200
        assert response.json()["count"] == 2

    @pytest.mark.asyncio
    async def test_unknown_category(self, offline_service) -> None:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            response = await client.get("/api/listings/all", params={"category": "gadgets"})

        assert response.status_code == 404
        assert "gadgets" in response.json()["detail"]


class TestFilterListings:
    """Tests for POST /listings/filter."""

    @pytest.mark.asyncio
    async def test_default_mode_applies_core(self, offline_service) -> None:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            response = await client.post("/api/listings/filter", json={})

        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "core_user"
        assert data["count"] == 0

    @pytest.mark.asyncio
    async def test_user_filter_only(self, offline_service) -> None:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            response = await client.post(
                "/api/listings/filter",
                params={"mode": "comprehensive"},
                json={"max_price": 700},
            )

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 12
        assert data["filters"]["max_price"] == 700
        assert all(listing["price"] <= 700 for listing in data["listings"])

    @pytest.mark.asyncio
    async def test_inverted_range_rejected(self, offline_service) -> None:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            response = await client.post(
                "/api/listings/filter",
                json={"min_price": 2000, "max_price": 500},
            )

        assert response.status_code == 422
        offline_service.fetch_category.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_mode_rejected(self, offline_service) -> None:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            response = await client.post(
                "/api/listings/filter", params={"mode": "strict"}, json={}
            )

        assert response.status_code == 422


class TestComprehensive:
    """Tests for POST /listings/comprehensive."""

    @pytest.mark.asyncio
    async def test_user_filter_over_all_categories(self, offline_service) -> None:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            response = await client.post(
                "/api/listings/comprehensive",
                json={"min_price": 300, "max_price": 2500},
            )

        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "comprehensive"
        assert data["source"] == "seed"
        assert data["count"] == 6


class TestClassify:
    """Tests for POST /listings/classify."""

    @pytest.mark.asyncio
    async def test_classifies_batch(self) -> None:
        batch = [
            {
                "title": "Bamboo Desk Organizer Tray Set",
                "price_text": "₹1,200",
                "review_text": "150 ratings",
                "rank_badge_text": "#300",
                "category_hint": "Office Products",
                "weight_kg": 0.5,
            },
            {"title": "Short"},
        ]

        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            response = await client.post("/api/listings/classify", json=batch)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["counts"]["invalid"] == 1
        listing = data["listings"][0]
        assert listing["opportunity_score"] == 88
        assert listing["opportunity_tier"] == "GOOD"
        assert listing["branding_potential"] == "High"
        assert listing["url"].endswith("/s?k=Bamboo+Desk+Organizer+Tray+Set")

    @pytest.mark.asyncio
    async def test_keeps_duplicate_names(self) -> None:
        """Classification enriches every valid record; it does not deduplicate."""
        batch = [
            {"title": "Bamboo Desk Organizer Tray Set", "price_text": "₹1,200"},
            {"title": "bamboo desk organizer tray set", "price_text": "₹900"},
        ]

        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            response = await client.post("/api/listings/classify", json=batch)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert data["mode"] == "raw"
        assert data["counts"]["deduped"] == 2
        assert [listing["price"] for listing in data["listings"]] == [1200, 900]

    @pytest.mark.asyncio
    async def test_rejects_non_list_body(self) -> None:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            response = await client.post("/api/listings/classify", json={"title": "x"})

        assert response.status_code == 422
