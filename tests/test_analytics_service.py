"""Tests for AnalyticsService; aggregation results are mocked."""

import pytest
from bson import ObjectId

from jobboard.services.analytics_service import AnalyticsService


@pytest.fixture
def service(mock_db):
    return AnalyticsService(mock_db)


def test_summary_scoped_to_recruiter_jobs(service, mock_db, recruiter_id):
    job_a, job_b = ObjectId(), ObjectId()
    jobs, applications = mock_db["jobs"], mock_db["applications"]
    jobs.distinct.return_value = [job_a, job_b]
    applications.distinct.return_value = [ObjectId(), ObjectId(), ObjectId()]
    applications.aggregate.side_effect = [
        # per-job counts
        [{"jobId": job_a, "title": "A", "count": 3}, {"jobId": job_b, "title": "B", "count": 1}],
        # status distribution
        [{"_id": "APPLIED", "count": 2}, {"_id": "OFFER", "count": 2}],
        # experience per job
        [{"jobId": job_a, "title": "A", "avgExperience": 4.3, "minExperience": 2, "maxExperience": 7}],
    ]

    summary = service.summary(recruiter_id)

    jobs.distinct.assert_called_once_with("_id", {"recruiterId": ObjectId(recruiter_id)})
    applications.distinct.assert_called_once_with("applicantId", {"jobId": {"$in": [job_a, job_b]}})
    for call_ in applications.aggregate.call_args_list:
        assert call_[0][0][0] == {"$match": {"jobId": {"$in": [job_a, job_b]}}}

    assert summary["totalApplicants"] == 3
    assert summary["perJobCounts"] == [
        {"jobId": str(job_a), "title": "A", "count": 3},
        {"jobId": str(job_b), "title": "B", "count": 1},
    ]
    assert summary["statusDistribution"] == {
        "APPLIED": 2, "UNDER_REVIEW": 0, "INTERVIEW": 0, "OFFER": 2, "REJECTED": 0,
    }
    assert summary["avgExperiencePerJob"][0]["avgExperience"] == 4.3


def test_recruiter_without_jobs(service, mock_db, recruiter_id):
    mock_db["jobs"].distinct.return_value = []
    mock_db["applications"].distinct.return_value = []
    mock_db["applications"].aggregate.side_effect = lambda pipeline: iter([])

    summary = service.summary(recruiter_id)

    assert summary["totalApplicants"] == 0
    assert summary["perJobCounts"] == []
    assert summary["avgExperiencePerJob"] == []
    assert set(summary["statusDistribution"].values()) == {0}


def test_status_distribution_ignores_unknown_status(service, mock_db):
    mock_db["applications"].aggregate.return_value = [{"_id": "ARCHIVED", "count": 9}]

    distribution = service.status_distribution({})

    assert "ARCHIVED" not in distribution
    assert sum(distribution.values()) == 0


def test_experience_average_rounded_in_pipeline(service, mock_db):
    mock_db["applications"].aggregate.return_value = []

    service.experience_per_job({})

    pipeline = mock_db["applications"].aggregate.call_args[0][0]
    project = next(stage["$project"] for stage in pipeline if "$project" in stage)
    assert project["avgExperience"] == {"$round": ["$avgExperience", 1]}
    assert project["_id"] == 0
