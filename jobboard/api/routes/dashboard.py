"""Candidate dashboard routes: listings, search, profile tasks and stats."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from jobboard.api.dependencies import dashboard_service, listing_service
from jobboard.core.dashboard import DashboardService
from jobboard.core.listing import ListingService
from jobboard.utils.constants import ListingMode

router = APIRouter(tags=["dashboard"])


@router.get("/recommended/{candidate_id}")
async def recommended_jobs(
    candidate_id: str,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: ListingService = Depends(listing_service),
) -> dict[str, Any]:
    """Active jobs matching at least two criteria, best score first."""
    result = await service.list_jobs(candidate_id, ListingMode.RECOMMENDED, page=page, limit=limit)
    return result.to_response()


@router.get("/saved-job/{candidate_id}")
async def saved_jobs(
    candidate_id: str,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: ListingService = Depends(listing_service),
) -> dict[str, Any]:
    result = await service.list_jobs(candidate_id, ListingMode.SAVED, page=page, limit=limit)
    return result.to_response()


@router.get("/applied-job/{candidate_id}")
async def applied_jobs(
    candidate_id: str,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: ListingService = Depends(listing_service),
) -> dict[str, Any]:
    result = await service.list_jobs(candidate_id, ListingMode.APPLIED, page=page, limit=limit)
    return result.to_response()


@router.get("/search/{candidate_id}")
async def search_jobs(
    candidate_id: str,
    search: Optional[str] = None,
    listing_type: Optional[str] = Query(None, alias="type"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: ListingService = Depends(listing_service),
) -> dict[str, Any]:
    """Search within the recommended, saved or applied listing."""
    result = await service.list_jobs(candidate_id, listing_type, search=search, page=page, limit=limit)
    return result.to_response()


@router.get("/profile-tasks/{candidate_id}")
async def profile_tasks(
    candidate_id: str,
    service: DashboardService = Depends(dashboard_service),
) -> dict[str, Any]:
    report = await service.profile_tasks(candidate_id)
    return report.model_dump(by_alias=True)


@router.get("/candidate-stats/{candidate_id}")
async def candidate_stats(
    candidate_id: str,
    service: DashboardService = Depends(dashboard_service),
) -> dict[str, Any]:
    stats = await service.candidate_stats(candidate_id)
    return stats.model_dump(by_alias=True)
