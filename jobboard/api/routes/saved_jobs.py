"""Saved-job routes."""

from typing import Any

from fastapi import APIRouter, Depends, status

from jobboard.api.dependencies import relation_service
from jobboard.core.listing import public_document
from jobboard.core.relations import RelationService
from jobboard.data.models import RelationRequest

router = APIRouter(prefix="/save-jobs", tags=["saved-jobs"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def save_job(
    body: RelationRequest,
    service: RelationService = Depends(relation_service),
) -> dict[str, Any]:
    saved = await service.save_job(body.candidate_id, body.job_id)
    return {"message": "Job saved successfully", "savedJob": public_document(saved)}


@router.delete("/{candidate_id}/{job_id}")
async def unsave_job(
    candidate_id: str,
    job_id: str,
    service: RelationService = Depends(relation_service),
) -> dict[str, Any]:
    await service.unsave_job(candidate_id, job_id)
    return {"message": "Job removed from saved jobs"}


@router.get("/status/{candidate_id}/{job_id}")
async def saved_status(
    candidate_id: str,
    job_id: str,
    service: RelationService = Depends(relation_service),
) -> dict[str, int]:
    return {"saved": int(await service.is_saved(candidate_id, job_id))}
