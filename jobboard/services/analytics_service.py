"""
Analytics Service - recruiter dashboard rollups.

Every figure is computed over applications to the calling recruiter's
own jobs; nothing here ever reads across recruiters.
"""

import logging

from pymongo.collection import Collection
from pymongo.database import Database

from jobboard.db.mongodb import COLLECTIONS, get_collection
from jobboard.schemas.schemas import ApplicationStatus
from jobboard.services.mongo_service import serialize_docs, to_object_id

logger = logging.getLogger(__name__)


def _join_job_title() -> list:
    """Pipeline stages that attach the job title to a {_id: jobId} group."""
    return [
        {
            "$lookup": {
                "from": COLLECTIONS["jobs"],
                "localField": "_id",
                "foreignField": "_id",
                "as": "job",
            }
        },
        {"$unwind": "$job"},
    ]


class AnalyticsService:
    """Read-only aggregations over the applications collection."""

    def __init__(self, db: Database):
        self.jobs: Collection = get_collection(db, "jobs")
        self.applications: Collection = get_collection(db, "applications")

    def per_job_counts(self, match: dict) -> list:
        pipeline = [
            {"$match": match},
            {"$group": {"_id": "$jobId", "count": {"$sum": 1}}},
            *_join_job_title(),
            {"$project": {"_id": 0, "jobId": "$_id", "title": "$job.title", "count": 1}},
            {"$sort": {"count": -1}},
        ]
        return serialize_docs(self.applications.aggregate(pipeline))

    def status_distribution(self, match: dict) -> dict:
        """Count per status, with every status present (zero-filled)."""
        pipeline = [
            {"$match": match},
            {"$group": {"_id": "$status", "count": {"$sum": 1}}},
        ]
        distribution = {status.value: 0 for status in ApplicationStatus}
        for row in self.applications.aggregate(pipeline):
            if row["_id"] in distribution:
                distribution[row["_id"]] = row["count"]
        return distribution

    def experience_per_job(self, match: dict) -> list:
        pipeline = [
            {"$match": match},
            {
                "$group": {
                    "_id": "$jobId",
                    "avgExperience": {"$avg": "$yearsOfExperience"},
                    "minExperience": {"$min": "$yearsOfExperience"},
                    "maxExperience": {"$max": "$yearsOfExperience"},
                }
            },
            *_join_job_title(),
            {
                "$project": {
                    "_id": 0,
                    "jobId": "$_id",
                    "title": "$job.title",
                    "avgExperience": {"$round": ["$avgExperience", 1]},
                    "minExperience": 1,
                    "maxExperience": 1,
                }
            },
            {"$sort": {"avgExperience": -1}},
        ]
        return serialize_docs(self.applications.aggregate(pipeline))

    def summary(self, recruiter_id: str) -> dict:
        job_ids = self.jobs.distinct("_id", {"recruiterId": to_object_id(recruiter_id)})
        match = {"jobId": {"$in": job_ids}}

        total_applicants = len(self.applications.distinct("applicantId", match))
        logger.debug("Analytics for recruiter %s over %d jobs", recruiter_id, len(job_ids))

        return {
            "totalApplicants": total_applicants,
            "perJobCounts": self.per_job_counts(match),
            "statusDistribution": self.status_distribution(match),
            "avgExperiencePerJob": self.experience_per_job(match),
        }
