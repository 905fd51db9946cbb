"""
Job Service - CRUD, search and pagination over job postings.

A job belongs to the recruiter who created it; only that recruiter may
change or delete it. Public listings only ever show jobs whose deadline
has not passed yet.
"""

import logging
import re
from typing import List, Optional

from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from jobboard.core.errors import AuthorizationError, NotFoundError
from jobboard.db.mongodb import get_collection
from jobboard.schemas.schemas import JobCreate, JobSort, JobUpdate
from jobboard.services.mongo_service import (
    page_window,
    serialize_doc,
    serialize_docs,
    to_object_id,
    utcnow,
)
from jobboard.services.user_service import UserService
from jobboard.utils.experience import matches_experience

logger = logging.getLogger(__name__)


def _contains(text: str) -> dict:
    """Case-insensitive literal substring match."""
    return {"$regex": re.escape(text), "$options": "i"}


class JobService:
    """Handles the jobs collection (and the cascade into applications)."""

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "jobs")
        self.applications: Collection = get_collection(db, "applications")
        self.users = UserService(db)

    def create(self, data: JobCreate, recruiter_id: str) -> dict:
        """Insert a job owned by recruiter_id; the deadline was validated by JobCreate."""
        doc = data.model_dump(by_alias=True, exclude_none=True)
        doc["recruiterId"] = to_object_id(recruiter_id)
        doc["createdAt"] = utcnow()

        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("Job %s created by recruiter %s", doc["_id"], recruiter_id)
        return serialize_doc(doc)

    def build_search_query(self, q: Optional[str] = None, location: Optional[str] = None) -> dict:
        query = {"deadline": {"$gt": utcnow()}}
        if q:
            query["$or"] = [{"title": _contains(q)}, {"description": _contains(q)}]
        if location:
            query["location"] = _contains(location)
        return query

    def list(
        self,
        q: Optional[str] = None,
        location: Optional[str] = None,
        sort: JobSort = JobSort.created_desc,
        page: int = 1,
        page_size: int = 10,
        experience: Optional[float] = None,
    ) -> dict:
        """
        Search open jobs.

        Returns:
            {"items", "page", "pageSize", "total"} where total counts every
            match, not just the returned page.
        """
        query = self.build_search_query(q, location)
        skip, limit = page_window(page, page_size)

        if experience is None:
            total = self.collection.count_documents(query)
            docs = list(self.collection.find(query).sort(sort.mongo_sort).skip(skip).limit(limit))
        else:
            # The experience range lives in free text, so this filter
            # runs here rather than in the query.
            matching = [
                doc for doc in self.collection.find(query).sort(sort.mongo_sort)
                if matches_experience(doc.get("requirements"), experience)
            ]
            total = len(matching)
            docs = matching[skip:skip + limit]

        return {
            "items": serialize_docs(docs),
            "page": page,
            "pageSize": page_size,
            "total": total,
        }

    def list_by_recruiter(self, recruiter_id: str) -> List[dict]:
        """All of a recruiter's jobs, newest first, expired ones included."""
        cursor = self.collection.find({"recruiterId": to_object_id(recruiter_id)}).sort("createdAt", -1)
        return serialize_docs(cursor)

    def get_raw(self, job_id) -> dict:
        job = self.collection.find_one({"_id": to_object_id(job_id)})
        if not job:
            raise NotFoundError("Job not found")
        return job

    def get_by_id(self, job_id: str) -> dict:
        """Single job with the recruiter's public profile under `recruiter`."""
        job = serialize_doc(self.get_raw(job_id))
        job["recruiter"] = self.users.get_summary(job["recruiterId"])
        return job

    def get_owned(self, job_id, caller_id: str, action: str = "manage") -> dict:
        """
        Fetch a job the caller owns.

        Raises:
            NotFoundError if the job doesn't exist
            AuthorizationError if the caller isn't its recruiter
        """
        job = self.get_raw(job_id)
        if str(job["recruiterId"]) != str(caller_id):
            raise AuthorizationError(f"You can only {action} your own jobs")
        return job

    def update(self, job_id: str, data: JobUpdate, caller_id: str) -> dict:
        job = self.get_owned(job_id, caller_id, "update")

        updates = data.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
        if not updates:
            return serialize_doc(job)

        updated = self.collection.find_one_and_update(
            {"_id": job["_id"]},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            # Deleted between the ownership check and the update
            raise NotFoundError("Job not found")
        return serialize_doc(updated)

    def delete(self, job_id: str, caller_id: str) -> None:
        """
        Delete a job and every application against it.

        Applications go first: if the second step never happens we are
        left with orphaned applications (see ApplicationService.purge_orphans),
        never with applications pointing at a job that was half-deleted.
        """
        job = self.get_owned(job_id, caller_id, "delete")

        removed = self.applications.delete_many({"jobId": job["_id"]})
        self.collection.delete_one({"_id": job["_id"]})
        logger.info(
            "Job %s deleted by recruiter %s (%d applications removed)",
            job["_id"], caller_id, removed.deleted_count,
        )
