"""
Recipe Ingest API Routes
========================

Endpoints:
  - GET  /health
  - POST /recipes/normalize   raw record -> canonical recipe
  - POST /recipes/extract     page HTML -> schema recipe or AI text + images
  - POST /recipes/import      page URL -> recipe (schema or AI) + images
  - POST /recipes/review      AI-proposed improvement + change set
  - POST /recipes/diff        original vs candidate change set
  - POST /recipes/apply       accept a reviewed candidate
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import BaseModel, Field

from ..core.config import get_settings
from ..core.exceptions import ExtractionError, PageFetchError
from ..data.normalizer import normalize
from ..extraction.images import extract_image_candidates
from ..extraction.pipeline import process_for_extraction
from ..llm.recipe_extractor import RecipeExtractor
from ..review.diff import apply_changes, diff_recipes
from ..schemas.canonical import Recipe
from ..schemas.extraction import ExtractionResult, ImportResult
from ..schemas.review import RecipeDiff
from ..services.importer import RecipeImporter
from ..services.page_fetcher import PageFetcher

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recipes"])


@lru_cache()
def get_extractor() -> RecipeExtractor:
    return RecipeExtractor()


@lru_cache()
def get_importer() -> RecipeImporter:
    """Importer wired with the configured fetcher and extractor."""
    return RecipeImporter(fetcher=PageFetcher(), extractor=get_extractor())


class ExtractRequest(BaseModel):
    html: str
    base_url: Optional[str] = None


class ExtractResponse(BaseModel):
    result: ExtractionResult
    image_candidates: List[str] = Field(default_factory=list)


class ImportRequest(BaseModel):
    url: str = Field(min_length=1)


class DiffRequest(BaseModel):
    original: Dict[str, Any] = Field(default_factory=dict)
    candidate: Dict[str, Any] = Field(default_factory=dict)


class DiffResponse(BaseModel):
    changes: RecipeDiff
    is_empty: bool
    has_modifications: bool
    summary: List[str]


class ApplyRequest(DiffRequest):
    identity_key: str = "id"


class ReviewRequest(BaseModel):
    recipe: Dict[str, Any]
    source_text: str = ""


class ReviewResponse(BaseModel):
    candidate: Recipe
    changes: RecipeDiff
    has_modifications: bool
    summary: List[str]


@router.get("/health")
async def health():
    """Health check endpoint."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "ai_extraction": "openai" if settings.openai_api_key else "disabled",
    }


@router.post("/recipes/normalize", response_model=Recipe)
async def normalize_recipe(raw: Dict[str, Any] = Body(...)):
    return normalize(raw)


@router.post("/recipes/extract", response_model=ExtractResponse)
def extract_recipe(request: ExtractRequest):
    result = process_for_extraction(request.html)
    images = extract_image_candidates(request.html, request.base_url)
    return ExtractResponse(result=result, image_candidates=images)


@router.post("/recipes/import", response_model=ImportResult)
async def import_recipe(request: ImportRequest, importer: RecipeImporter = Depends(get_importer)):
    try:
        return await importer.import_url(request.url)
    except PageFetchError as e:
        logger.warning("Import failed, page unavailable: %s", e.url)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.to_dict())
    except ExtractionError as e:
        logger.error("Import failed for %s: %s", request.url, e.message)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.to_dict())


@router.post("/recipes/review", response_model=ReviewResponse)
async def review_recipe(request: ReviewRequest, extractor: RecipeExtractor = Depends(get_extractor)):
    """Ask the AI for an improved version and diff it against the stored recipe."""
    try:
        candidate = await extractor.review_recipe(request.recipe, request.source_text)
    except ExtractionError as e:
        logger.error("Review failed: %s", e.message)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.to_dict())

    changes = diff_recipes(request.recipe, candidate)
    return ReviewResponse(
        candidate=candidate,
        changes=changes,
        has_modifications=changes.has_modifications,
        summary=changes.summary(),
    )


@router.post("/recipes/diff", response_model=DiffResponse)
async def diff_recipe(request: DiffRequest):
    changes = diff_recipes(request.original, request.candidate)
    return DiffResponse(
        changes=changes,
        is_empty=changes.is_empty,
        has_modifications=changes.has_modifications,
        summary=changes.summary(),
    )


@router.post("/recipes/apply")
async def apply_recipe(request: ApplyRequest):
    merged = apply_changes(request.original, request.candidate, identity_key=request.identity_key)
    return {"recipe": merged}
