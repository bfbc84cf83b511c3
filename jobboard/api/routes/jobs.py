"""Job posting routes: browse, facets, admin panels, industry stats and CRUD."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status

from jobboard.api.dependencies import job_service
from jobboard.core.jobs import JobService
from jobboard.core.listing import JobBrowseFilters, camel_keys, public_job
from jobboard.data.models import JobCreate, JobStatusUpdate, JobUpdate
from jobboard.utils.constants import JobStatus

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("")
async def browse_jobs(
    title: Optional[str] = None,
    company_name: Optional[str] = Query(None, alias="companyName"),
    location: Optional[str] = None,
    industry_type: Optional[str] = Query(None, alias="industryType"),
    category: Optional[str] = None,
    job_type: Optional[str] = Query(None, alias="jobType"),
    min_max_exp: Optional[str] = Query(None, alias="minMaxExp"),
    key_skills: Optional[str] = Query(None, alias="keySkills"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: JobService = Depends(job_service),
) -> dict[str, Any]:
    """Active jobs matching the query-string filters, most recently updated first."""
    filters = JobBrowseFilters.from_params(
        title=title,
        company_name=company_name,
        location=location,
        industry_type=industry_type,
        category=category,
        job_type=job_type,
        min_max_exp=min_max_exp,
        key_skills=key_skills,
    )
    result = await service.browse(filters, page=page, limit=limit)
    return result.to_response()


@router.get("/filters")
async def filter_options(service: JobService = Depends(job_service)) -> dict[str, Any]:
    return camel_keys(await service.filter_options())


@router.get("/admin-panel")
async def admin_panel(
    job_status: JobStatus = Query(JobStatus.ACTIVE, alias="status"),
    offset: Optional[str] = None,
    limit: Optional[str] = None,
    service: JobService = Depends(job_service),
) -> dict[str, Any]:
    """Infinite-scroll chunk of Active or In-Active postings for the admin panel."""
    chunk = await service.admin_panel(job_status, offset=offset, limit=limit)
    return {"message": "Jobs fetched successfully", **chunk.to_response()}


@router.get("/industry-stats")
async def industry_stats(service: JobService = Depends(job_service)) -> list[dict[str, Any]]:
    return camel_keys(await service.industry_stats())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_job(
    body: JobCreate,
    service: JobService = Depends(job_service),
) -> dict[str, Any]:
    job = await service.create(body)
    return {"message": "Job created successfully", "job": public_job(job)}


@router.get("/{job_id}")
async def get_job(job_id: str, service: JobService = Depends(job_service)) -> dict[str, Any]:
    return public_job(await service.get(job_id))


@router.put("/{job_id}")
async def update_job(
    job_id: str,
    body: JobUpdate,
    service: JobService = Depends(job_service),
) -> dict[str, Any]:
    job = await service.update(job_id, body)
    return {"message": "Job updated successfully", "job": public_job(job)}


@router.patch("/{job_id}/status")
async def update_job_status(
    job_id: str,
    body: JobStatusUpdate,
    service: JobService = Depends(job_service),
) -> dict[str, Any]:
    job = await service.set_status(job_id, body.status)
    verb = "activated" if job.status == JobStatus.ACTIVE.value else "deactivated"
    return {"message": f"Job {verb} successfully", "job": public_job(job)}


@router.delete("/{job_id}")
async def delete_job(job_id: str, service: JobService = Depends(job_service)) -> dict[str, Any]:
    """Soft delete: the posting is marked In-Active."""
    job = await service.deactivate(job_id)
    return {"message": "Job marked as In-Active", "job": public_job(job)}
