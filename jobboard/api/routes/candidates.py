"""Candidate routes: recruiter list, profile reads and updates, account status."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from jobboard.api.dependencies import candidate_service
from jobboard.core.candidates import CandidateService
from jobboard.core.listing import CandidateBrowseFilters, public_document
from jobboard.data.models import CandidateStatusUpdate, CandidateUpdate
from jobboard.utils.constants import CandidateStatus

router = APIRouter(prefix="/candidates", tags=["candidates"])


@router.get("")
async def browse_candidates(
    search: Optional[str] = None,
    skills: Optional[list[str]] = Query(None),
    city: Optional[list[str]] = Query(None),
    state: Optional[list[str]] = Query(None),
    job_type: Optional[list[str]] = Query(None, alias="jobType"),
    experience: Optional[list[str]] = Query(None),
    salary: Optional[list[str]] = Query(None),
    status: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: CandidateService = Depends(candidate_service),
) -> dict[str, Any]:
    """Candidates matching the recruiter filters. Repeat a parameter to select several values."""
    filters = CandidateBrowseFilters.from_params(
        search=search,
        skills=skills,
        city=city,
        state=state,
        job_type=job_type,
        experience=experience,
        salary=salary,
        status=status,
    )
    result = await service.browse(filters, page=page, limit=limit)
    return {"message": "Candidates retrieved successfully", **result.to_response()}


@router.get("/{candidate_id}")
async def get_candidate(
    candidate_id: str,
    service: CandidateService = Depends(candidate_service),
) -> dict[str, Any]:
    return public_document(await service.get(candidate_id))


@router.put("/{candidate_id}")
async def update_candidate(
    candidate_id: str,
    body: CandidateUpdate,
    service: CandidateService = Depends(candidate_service),
) -> dict[str, Any]:
    candidate = await service.update_profile(candidate_id, body)
    return {"message": "Profile updated successfully", "candidate": public_document(candidate)}


@router.patch("/{candidate_id}/status")
async def update_candidate_status(
    candidate_id: str,
    body: CandidateStatusUpdate,
    service: CandidateService = Depends(candidate_service),
) -> dict[str, Any]:
    candidate = await service.set_status(candidate_id, body.status)
    verb = "activated" if candidate.status == CandidateStatus.ACTIVE else "deactivated"
    return {"message": f"Candidate {verb} successfully", "candidate": public_document(candidate)}
