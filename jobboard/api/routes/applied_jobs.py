"""Job application routes."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, status

from jobboard.api.dependencies import relation_service
from jobboard.core.listing import public_document
from jobboard.core.relations import RelationService
from jobboard.data.models import ApplicationStatusUpdate, RelationRequest

router = APIRouter(prefix="/apply-job", tags=["applications"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def apply_job(
    body: RelationRequest,
    service: RelationService = Depends(relation_service),
) -> dict[str, Any]:
    applied = await service.apply_job(body.candidate_id, body.job_id)
    return {"message": "Job applied successfully", "application": public_document(applied)}


@router.get("/applications")
async def list_applications(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: RelationService = Depends(relation_service),
) -> dict[str, Any]:
    """Every application, newest first, with applicant and job details."""
    result = await service.applications(page=page, limit=limit)
    return result.to_response()


@router.get("/status/{candidate_id}/{job_id}")
async def applied_status(
    candidate_id: str,
    job_id: str,
    service: RelationService = Depends(relation_service),
) -> dict[str, int]:
    return {"applied": int(await service.is_applied(candidate_id, job_id))}


@router.patch("/{candidate_id}/{job_id}/status")
async def update_application_status(
    candidate_id: str,
    job_id: str,
    body: ApplicationStatusUpdate,
    service: RelationService = Depends(relation_service),
) -> dict[str, Any]:
    """Overwrite the status of an application."""
    applied = await service.update_application_status(candidate_id, job_id, body.status)
    return {"message": "Application status updated", "application": public_document(applied)}
