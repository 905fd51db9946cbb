"""
Application Service - submissions against jobs, with resumes.

Rules enforced here:
- one application per (job, applicant); the unique index on
  (jobId, applicantId) is the real guard, the pre-check just gives a
  friendlier path in the common case
- applicant-supplied fields are frozen at submission; the recruiter who
  owns the job may only change `status` and `notes`
- resume bytes are stored inline but left out of every read except
  fetch_attachment()

Status changes are not validated against a transition table: any
status may replace any other.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from bson import Binary
from pydantic import ValidationError as PydanticValidationError
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from jobboard.core.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
    validation_details,
)
from jobboard.db.mongodb import get_collection
from jobboard.schemas.schemas import (
    ApplicationCreate,
    ApplicationStatus,
    ApplicationUpdate,
    UserRole,
)
from jobboard.services.job_service import JobService
from jobboard.services.mongo_service import (
    page_window,
    serialize_doc,
    to_object_id,
    utcnow,
)
from jobboard.services.user_service import UserService

logger = logging.getLogger(__name__)

# Resume content is only loaded when explicitly asked for
DEFAULT_PROJECTION = {"resumeData": 0}
ATTACHMENT_PROJECTION = {"resumeData": 1, "resumeFileName": 1, "jobId": 1, "applicantId": 1}

REQUIRED_FIELDS = ("jobId", "applicantName", "applicantEmail", "applicantPhone", "yearsOfExperience")
DUPLICATE_MESSAGE = "You have already applied to this job"


def present(doc: dict, job: Optional[dict] = None, applicant: Optional[dict] = None) -> dict:
    """Serialize an application, never including resume bytes."""
    out = serialize_doc(doc)
    out.pop("resumeData", None)
    out["hasResume"] = bool(out.get("resumeFileName"))
    if job is not None:
        out["job"] = serialize_doc(job)
    if applicant is not None:
        out["applicant"] = applicant
    return out


class ApplicationService:
    """Handles the applications collection."""

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "applications")
        self.jobs = JobService(db)
        self.users = UserService(db)

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    def _jobs_by_id(self, job_ids: Iterable) -> Dict[str, dict]:
        ids = list(set(job_ids))
        if not ids:
            return {}
        return {str(job["_id"]): job for job in self.jobs.collection.find({"_id": {"$in": ids}})}

    def _get_raw(self, application_id, projection: Optional[dict] = None) -> dict:
        doc = self.collection.find_one({"_id": to_object_id(application_id)}, projection or DEFAULT_PROJECTION)
        if not doc:
            raise NotFoundError("Application not found")
        return doc

    def _authorize_read(self, application: dict, caller: dict, subject: str) -> Optional[dict]:
        """
        Applicants may read their own applications; recruiters those
        against jobs they own. Returns the parent job when it was loaded.
        """
        role = caller.get("role")
        if role == UserRole.applicant.value:
            if str(application["applicantId"]) != str(caller["id"]):
                raise AuthorizationError(f"You can only view your own {subject}")
            return None

        if role == UserRole.recruiter.value:
            job = self.jobs.collection.find_one({"_id": application["jobId"]})
            if not job or str(job["recruiterId"]) != str(caller["id"]):
                raise AuthorizationError(f"You can only view {subject} for your own jobs")
            return job

        raise AuthorizationError("Forbidden: Insufficient permissions")

    def _parse_submission(self, form: dict) -> ApplicationCreate:
        form = {key: value.strip() if isinstance(value, str) else value for key, value in form.items()}
        if any(form.get(field) in (None, "") for field in REQUIRED_FIELDS):
            raise ValidationError("Missing required fields")
        try:
            return ApplicationCreate.model_validate(form)
        except PydanticValidationError as e:
            raise ValidationError("Validation error", details=validation_details(e.errors()))

    # ------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------

    def create(self, form: dict, applicant_id: str, resume: Optional[Tuple[bytes, str]] = None) -> dict:
        """
        Submit an application.

        Args:
            form: camelCase submission fields (multipart form values)
            applicant_id: authenticated applicant
            resume: (content, filename) already checked by read_resume()

        Raises:
            ValidationError for missing/invalid fields or a passed deadline
            NotFoundError if the job doesn't exist
            ConflictError if the applicant already applied
        """
        data = self._parse_submission(form)

        job = self.jobs.get_raw(data.job_id)
        if utcnow() > job["deadline"]:
            raise ValidationError("Job application deadline has passed")

        applicant_oid = to_object_id(applicant_id)
        if self.collection.find_one({"jobId": job["_id"], "applicantId": applicant_oid}, {"_id": 1}):
            raise ConflictError(DUPLICATE_MESSAGE)

        now = utcnow()
        doc = data.model_dump(by_alias=True, exclude_none=True, exclude={"job_id"})
        doc.update({
            "jobId": job["_id"],
            "applicantId": applicant_oid,
            "status": ApplicationStatus.APPLIED.value,
            "createdAt": now,
            "updatedAt": now,
        })
        if resume is not None:
            content, filename = resume
            doc["resumeData"] = Binary(content)
            doc["resumeFileName"] = filename

        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.warning("Duplicate application race for job %s by %s", job["_id"], applicant_id)
            raise ConflictError(DUPLICATE_MESSAGE)

        doc["_id"] = result.inserted_id
        logger.info("Application %s submitted for job %s", doc["_id"], job["_id"])
        return present(doc, job=job, applicant=self.users.get_summary(applicant_oid))

    def list_mine(self, applicant_id: str, page: int = 1, page_size: int = 10) -> dict:
        """Caller's own applications, newest first, with the job joined in."""
        query = {"applicantId": to_object_id(applicant_id)}
        skip, limit = page_window(page, page_size)

        total = self.collection.count_documents(query)
        docs = list(
            self.collection.find(query, DEFAULT_PROJECTION)
            .sort("createdAt", -1)
            .skip(skip)
            .limit(limit)
        )
        jobs = self._jobs_by_id(doc["jobId"] for doc in docs)

        return {
            "items": [present(doc, job=jobs.get(str(doc["jobId"]))) for doc in docs],
            "page": page,
            "pageSize": page_size,
            "total": total,
        }

    def get_by_id(self, application_id: str, caller: dict) -> dict:
        doc = self._get_raw(application_id)
        job = self._authorize_read(doc, caller, "applications")
        if job is None:
            job = self.jobs.collection.find_one({"_id": doc["jobId"]})
        return present(doc, job=job, applicant=self.users.get_summary(doc["applicantId"]))

    def update(self, application_id: str, data: ApplicationUpdate, caller_id: str) -> dict:
        """Recruiter-side update of status and/or notes."""
        doc = self._get_raw(application_id)

        job = self.jobs.collection.find_one({"_id": doc["jobId"]})
        if not job or str(job["recruiterId"]) != str(caller_id):
            raise AuthorizationError("You can only update applications for your own jobs")

        updates = {"updatedAt": utcnow()}
        if data.status is not None:
            updates["status"] = data.status.value
        if data.notes is not None:
            updates["notes"] = data.notes

        self.collection.update_one({"_id": doc["_id"]}, {"$set": updates})
        if "status" in updates and updates["status"] != doc.get("status"):
            logger.info(
                "Application %s moved %s -> %s", doc["_id"], doc.get("status"), updates["status"]
            )

        refreshed = self._get_raw(doc["_id"])
        return present(refreshed, job=job, applicant=self.users.get_summary(refreshed["applicantId"]))

    def fetch_attachment(self, application_id: str, caller: dict) -> Tuple[bytes, str]:
        """
        Raw resume bytes and original filename.

        Raises:
            NotFoundError if the application or its resume is missing
            AuthorizationError under the same rules as get_by_id()
        """
        doc = self._get_raw(application_id, ATTACHMENT_PROJECTION)
        self._authorize_read(doc, caller, "resumes")

        if not doc.get("resumeData") or not doc.get("resumeFileName"):
            raise NotFoundError("No resume found for this application")
        return bytes(doc["resumeData"]), doc["resumeFileName"]

    def list_by_job_grouped(self, job_id: str, caller_id: str) -> Dict[str, List[dict]]:
        """
        A job's applications bucketed by status, buckets in enumeration
        order, each newest first.
        """
        job = self.jobs.get_owned(job_id, caller_id, "view applications for")

        docs = list(self.collection.find({"jobId": job["_id"]}, DEFAULT_PROJECTION).sort("createdAt", -1))
        applicants = self.users.get_summaries(doc["applicantId"] for doc in docs)

        by_status = {status.value: [] for status in ApplicationStatus}
        for doc in docs:
            bucket = by_status.get(doc.get("status"))
            if bucket is None:
                logger.warning("Application %s has unknown status %r", doc["_id"], doc.get("status"))
                continue
            bucket.append(present(doc, applicant=applicants.get(str(doc["applicantId"]))))
        return by_status

    def purge_orphans(self) -> int:
        """
        Delete applications whose job no longer exists.

        Safe to run repeatedly; cleans up after a job delete that stopped
        between its two steps.
        """
        job_ids = self.collection.distinct("jobId")
        if not job_ids:
            return 0

        existing = set(self.jobs.collection.distinct("_id", {"_id": {"$in": job_ids}}))
        orphaned = [job_id for job_id in job_ids if job_id not in existing]
        if not orphaned:
            return 0

        result = self.collection.delete_many({"jobId": {"$in": orphaned}})
        logger.info(
            "Purged %d orphaned applications across %d missing jobs",
            result.deleted_count, len(orphaned),
        )
        return result.deleted_count
