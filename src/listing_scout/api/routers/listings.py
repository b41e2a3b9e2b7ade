"""Listing research API endpoints.

Endpoints:
- GET /categories - marketplace category slugs
- GET /listings/all - every classified listing, unfiltered
- POST /listings/filter - listings filtered by core and/or user rules
- POST /listings/comprehensive - all categories, user rules only
- POST /listings/classify - classify and score a caller-supplied batch
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from listing_scout.config import get_settings
from listing_scout.scoring.keywords import MARKETPLACE_CATEGORIES
from listing_scout.scoring.models import (
    ClassifiedListing,
    FilterConfiguration,
    PipelineCounts,
    PipelineMode,
    PipelineResult,
    RawListing,
)
from listing_scout.services.bestsellers import BestsellerFetcher
from listing_scout.services.pipeline import PipelineService, classify_and_score

logger = logging.getLogger(__name__)

router = APIRouter(tags=["listings"])


# --- Response Models ---


class ListingBatchResponse(BaseModel):
    """Response for any endpoint returning a listing batch."""

    success: bool = True
    count: int
    counts: PipelineCounts
    mode: PipelineMode
    source: str
    filters: FilterConfiguration | None = None
    listings: list[ClassifiedListing]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CategoryListResponse(BaseModel):
    """Response for the category list."""

    success: bool = True
    categories: list[str]


def _batch_response(
    result: PipelineResult,
    filters: FilterConfiguration | None = None,
) -> ListingBatchResponse:
    return ListingBatchResponse(
        count=len(result.results),
        counts=result.counts,
        mode=result.mode,
        source=result.source,
        filters=filters,
        listings=result.results,
    )


# --- Dependencies ---


def get_pipeline_service() -> PipelineService:
    """Dependency for the pipeline service backed by live bestseller pages."""
    settings = get_settings()
    return PipelineService(
        BestsellerFetcher(settings),
        base_url=settings.marketplace_base_url,
    )


# --- Endpoints ---


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories() -> CategoryListResponse:
    """List the marketplace category slugs accepted by the listing endpoints."""
    return CategoryListResponse(categories=["all", *MARKETPLACE_CATEGORIES])


def _check_category(category: str) -> None:
    if category != "all" and category not in MARKETPLACE_CATEGORIES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown category: {category}",
        )


@router.get("/listings/all", response_model=ListingBatchResponse)
async def list_all_listings(
    category: str = Query("all", description="Marketplace category slug"),
    service: PipelineService = Depends(get_pipeline_service),
) -> ListingBatchResponse:
    """Return every valid, deduplicated listing without filtering."""
    _check_category(category)
    result = await service.run(category=category, mode=PipelineMode.RAW)
    return _batch_response(result)


@router.post("/listings/filter", response_model=ListingBatchResponse)
async def filter_listings(
    filters: FilterConfiguration,
    category: str = Query("all", description="Marketplace category slug"),
    mode: PipelineMode = Query(
        PipelineMode.CORE_USER,
        description="raw, core, core_user or comprehensive",
    ),
    service: PipelineService = Depends(get_pipeline_service),
) -> ListingBatchResponse:
    """Return listings for one category, filtered per the selected mode."""
    _check_category(category)
    result = await service.run(category=category, config=filters, mode=mode)
    return _batch_response(result, filters)


@router.post("/listings/comprehensive", response_model=ListingBatchResponse)
async def comprehensive_listings(
    filters: FilterConfiguration,
    service: PipelineService = Depends(get_pipeline_service),
) -> ListingBatchResponse:
    """Aggregate every category and apply only the user filter."""
    result = await service.run_comprehensive(config=filters)
    return _batch_response(result, filters)


@router.post("/listings/classify", response_model=ListingBatchResponse)
async def classify_listings(
    batch: list[RawListing],
) -> ListingBatchResponse:
    """Classify and score a caller-supplied batch.

    Pure enrichment: no fetching, no deduplication, no filtering. Only
    invalid (non-product) entries are dropped.
    """
    listings = classify_and_score(
        batch,
        base_url=get_settings().marketplace_base_url,
    )
    counts = PipelineCounts(
        received=len(batch),
        invalid=len(batch) - len(listings),
        total=len(listings),
        deduped=len(listings),
        filtered=len(listings),
    )
    return _batch_response(
        PipelineResult(results=listings, counts=counts, mode=PipelineMode.RAW)
    )
