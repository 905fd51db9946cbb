"""
Job Routes

GET /jobs - List open jobs with search, filters and pagination
GET /jobs/my-jobs - Recruiter's own jobs
POST /jobs - Create job posting (recruiter only)
GET /jobs/{job_id} - Get job details
PATCH /jobs/{job_id} - Update job (owning recruiter)
DELETE /jobs/{job_id} - Delete job and its applications (owning recruiter)
GET /jobs/{job_id}/applications - Applications grouped by status (owning recruiter)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from jobboard.api.deps import get_application_service, get_job_service
from jobboard.core.auth import get_current_recruiter
from jobboard.schemas.schemas import (
    ApplicationsByStatusResponse, JobCreate, JobEnvelope, JobItems,
    JobListResponse, JobSort, JobUpdate
)
from jobboard.services.application_service import ApplicationService
from jobboard.services.job_service import JobService

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.get("", response_model=JobListResponse)
async def list_jobs(
    q: Optional[str] = Query(None, description="Search in title and description"),
    location: Optional[str] = Query(None),
    sort: JobSort = Query(JobSort.created_desc),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    experience: Optional[float] = Query(None, ge=0, description="Applicant's years of experience"),
    jobs: JobService = Depends(get_job_service),
):
    """List open job postings (deadline still ahead) with filters and pagination."""
    return jobs.list(
        q=q, location=location, sort=sort, page=page, page_size=page_size, experience=experience
    )


@router.get("/my-jobs", response_model=JobItems)
async def my_jobs(recruiter: dict = Depends(get_current_recruiter), jobs: JobService = Depends(get_job_service)):
    """All jobs posted by the calling recruiter, newest first."""
    return {"items": jobs.list_by_recruiter(recruiter["id"])}


@router.post("", response_model=JobEnvelope, status_code=201)
async def create_job(
    job: JobCreate,
    recruiter: dict = Depends(get_current_recruiter),
    jobs: JobService = Depends(get_job_service),
):
    """Create a new job posting. Only recruiters can create jobs."""
    return {"job": jobs.create(job, recruiter["id"])}


@router.get("/{job_id}", response_model=JobEnvelope)
async def get_job(job_id: str, jobs: JobService = Depends(get_job_service)):
    """Get details of a specific job."""
    return {"job": jobs.get_by_id(job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
async def update_job(
    job_id: str,
    update: JobUpdate,
    recruiter: dict = Depends(get_current_recruiter),
    jobs: JobService = Depends(get_job_service),
):
    """Update a job posting. Only the owning recruiter can update."""
    return {"job": jobs.update(job_id, update, recruiter["id"])}


@router.delete("/{job_id}", status_code=204, response_class=Response)
async def delete_job(
    job_id: str,
    recruiter: dict = Depends(get_current_recruiter),
    jobs: JobService = Depends(get_job_service),
):
    """Delete a job posting. Cascades to applications."""
    jobs.delete(job_id, recruiter["id"])
    return Response(status_code=204)


@router.get("/{job_id}/applications", response_model=ApplicationsByStatusResponse)
async def job_applications(
    job_id: str,
    recruiter: dict = Depends(get_current_recruiter),
    applications: ApplicationService = Depends(get_application_service),
):
    """Applications for one of the recruiter's jobs, grouped by status."""
    return {"byStatus": applications.list_by_job_grouped(job_id, recruiter["id"])}
