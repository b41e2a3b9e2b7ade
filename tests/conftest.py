"""Shared fixtures for listing tests."""

import random
from collections.abc import Callable
from datetime import date
from typing import Any

import pytest

from listing_scout.scoring.classifier import classify_listing
from listing_scout.scoring.models import ClassifiedListing, RawListing


# Fixed reference date so expiry checks are stable
TODAY = date(2026, 1, 15)


@pytest.fixture
def today() -> date:
    """Reference date for expiry checks."""
    return TODAY


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for fallback values."""
    return random.Random(42)


@pytest.fixture
def ideal_raw() -> RawListing:
    """A raw listing with every numeric field present and no negative flags.

    price 1200, reviews 150, rank 300, weight 0.5 → opportunity score 88.
    """
    return RawListing(
        title="Bamboo Desk Organizer Tray Set",
        price_text="₹1,200",
        review_text="150 ratings",
        rank_badge_text="#300",
        category_hint="Office Products",
        weight_kg=0.5,
    )


@pytest.fixture
def make_listing(rng: random.Random, today: date) -> Callable[..., ClassifiedListing]:
    """Factory: classify a raw listing built from the ideal defaults plus overrides."""

    def _make(position: int = 0, **overrides: Any) -> ClassifiedListing:
        fields: dict[str, Any] = {
            "title": "Bamboo Desk Organizer Tray Set",
            "price_text": "₹1,200",
            "review_text": "150 ratings",
            "rank_badge_text": "#300",
            "category_hint": "Office Products",
            "weight_kg": 0.5,
        }
        fields.update(overrides)
        listing = classify_listing(
            RawListing(**fields),
            position=position,
            rng=rng,
            today=today,
        )
        assert listing is not None
        return listing

    return _make


@pytest.fixture
def ideal_listing(make_listing: Callable[..., ClassifiedListing]) -> ClassifiedListing:
    """Classified listing that passes the core filter."""
    return make_listing()
