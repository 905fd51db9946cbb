"""
Application Routes

POST /applications - Apply to a job with optional PDF resume (applicant only)
GET /applications/me - Own applications, paginated (applicant only)
GET /applications/{id} - Single application (owner or owning recruiter)
PATCH /applications/{id} - Update status/notes (owning recruiter)
GET /applications/{id}/resume - Download resume (token via header, cookie or ?token=)
"""

from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile

from jobboard.api.deps import get_app_settings, get_application_service
from jobboard.core.auth import get_current_applicant, get_current_recruiter, get_current_user, get_download_user
from jobboard.core.config import Settings
from jobboard.schemas.schemas import (
    ApplicationEnvelope, ApplicationListResponse, ApplicationUpdate
)
from jobboard.services.application_service import ApplicationService
from jobboard.utils.file_upload import RESUME_CONTENT_TYPE, read_resume

router = APIRouter(prefix="/applications", tags=["Applications"])


def content_disposition(filename: str) -> str:
    """attachment header with an ASCII fallback plus the RFC 5987 UTF-8 name."""
    fallback = filename.encode("ascii", "ignore").decode().replace('"', "").replace("\\", "") or "resume.pdf"
    return f'attachment; filename="{fallback}"; filename*=UTF-8\'\'{quote(filename)}'


@router.post("", response_model=ApplicationEnvelope, status_code=201)
async def create_application(
    job_id: Optional[str] = Form(None, alias="jobId"),
    applicant_name: Optional[str] = Form(None, alias="applicantName"),
    applicant_email: Optional[str] = Form(None, alias="applicantEmail"),
    applicant_phone: Optional[str] = Form(None, alias="applicantPhone"),
    years_of_experience: Optional[str] = Form(None, alias="yearsOfExperience"),
    current_role: Optional[str] = Form(None, alias="currentRole"),
    cover_letter: Optional[str] = Form(None, alias="coverLetter"),
    resume: Optional[UploadFile] = File(None),
    applicant: dict = Depends(get_current_applicant),
    applications: ApplicationService = Depends(get_application_service),
    settings: Settings = Depends(get_app_settings),
):
    """Apply to a job. Applicants only. Cannot apply twice to the same job."""
    attachment = await read_resume(resume, settings.max_resume_size_bytes)

    form = {
        "jobId": job_id,
        "applicantName": applicant_name,
        "applicantEmail": applicant_email,
        "applicantPhone": applicant_phone,
        "yearsOfExperience": years_of_experience,
        "currentRole": current_role or None,
        "coverLetter": cover_letter or None,
    }
    return {"application": applications.create(form, applicant["id"], attachment)}


@router.get("/me", response_model=ApplicationListResponse)
async def my_applications(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    applicant: dict = Depends(get_current_applicant),
    applications: ApplicationService = Depends(get_application_service),
):
    """The caller's applications, newest first, with job details."""
    return applications.list_mine(applicant["id"], page=page, page_size=page_size)


@router.get("/{application_id}", response_model=ApplicationEnvelope)
async def get_application(
    application_id: str,
    user: dict = Depends(get_current_user),
    applications: ApplicationService = Depends(get_application_service),
):
    return {"application": applications.get_by_id(application_id, user)}


@router.patch("/{application_id}", response_model=ApplicationEnvelope)
async def update_application(
    application_id: str,
    update: ApplicationUpdate,
    recruiter: dict = Depends(get_current_recruiter),
    applications: ApplicationService = Depends(get_application_service),
):
    """Move an application to another status and/or set recruiter notes."""
    return {"application": applications.update(application_id, update, recruiter["id"])}


@router.get("/{application_id}/resume", response_class=Response)
async def download_resume(
    application_id: str,
    user: dict = Depends(get_download_user),
    applications: ApplicationService = Depends(get_application_service),
):
    """
    Stream the stored resume.

    Accepts ?token=... so the file can be opened from a plain link.
    """
    content, filename = applications.fetch_attachment(application_id, user)
    return Response(
        content=content,
        media_type=RESUME_CONTENT_TYPE,
        headers={"Content-Disposition": content_disposition(filename)},
    )
