"""Pipeline orchestration and data sources."""

from listing_scout.services.bestsellers import (
    BestsellerFetcher,
    BestsellerFetchError,
    parse_bestseller_page,
)
from listing_scout.services.pipeline import (
    InvalidBatchError,
    PipelineService,
    classify_and_score,
    deduplicate,
    run_pipeline,
)
from listing_scout.services.seed import SEED_LISTINGS, seed_listings

__all__ = [
    # Bestsellers
    "BestsellerFetcher",
    "BestsellerFetchError",
    "parse_bestseller_page",
    # Pipeline
    "InvalidBatchError",
    "PipelineService",
    "classify_and_score",
    "deduplicate",
    "run_pipeline",
    # Seed
    "SEED_LISTINGS",
    "seed_listings",
]
