"""Tests for JobService against mocked collections."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, call

import pytest
from bson import ObjectId

from jobboard.core.errors import AuthorizationError, NotFoundError
from jobboard.schemas.schemas import JobCreate, JobSort, JobUpdate
from jobboard.services.job_service import JobService


def in_days(days: float) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)


@pytest.fixture
def service(mock_db):
    return JobService(mock_db)


@pytest.fixture
def jobs(mock_db):
    return mock_db["jobs"]


def make_job(title, requirements=None, **extra):
    doc = {
        "_id": ObjectId(),
        "title": title,
        "description": f"{title} role",
        "requirements": requirements,
        "deadline": in_days(10),
        "recruiterId": ObjectId(),
        "createdAt": in_days(-1),
    }
    doc.update(extra)
    return doc


class TestCreate:

    def test_owner_comes_from_caller(self, service, jobs, recruiter_id):
        jobs.insert_one.return_value = MagicMock(inserted_id=ObjectId())
        data = JobCreate(title=" Engineer ", description="Build things", deadline=in_days(5))

        job = service.create(data, recruiter_id)

        stored = jobs.insert_one.call_args[0][0]
        assert stored["recruiterId"] == ObjectId(recruiter_id)
        assert stored["title"] == "Engineer"
        assert "createdAt" in stored
        assert job["recruiterId"] == recruiter_id
        assert isinstance(job["_id"], str)


class TestSearchQuery:

    def test_only_open_jobs(self, service):
        before = datetime.now(timezone.utc)
        query = service.build_search_query()
        assert set(query) == {"deadline"}
        assert query["deadline"]["$gt"] >= before

    def test_keyword_matches_title_or_description(self, service):
        query = service.build_search_query(q="python")
        assert query["$or"] == [
            {"title": {"$regex": "python", "$options": "i"}},
            {"description": {"$regex": "python", "$options": "i"}},
        ]

    def test_keyword_is_literal(self, service):
        query = service.build_search_query(q="c++ (senior)")
        assert query["$or"][0]["title"]["$regex"] == r"c\+\+\ \(senior\)"

    def test_location_filter(self, service):
        query = service.build_search_query(location="Pune")
        assert query["location"] == {"$regex": "Pune", "$options": "i"}


class TestList:

    def test_paginates_in_database(self, service, jobs, make_cursor):
        docs = [make_job("A"), make_job("B")]
        cursor = make_cursor(docs)
        jobs.find.return_value = cursor
        jobs.count_documents.return_value = 12

        result = service.list(sort=JobSort.title_asc, page=2, page_size=5)

        cursor.sort.assert_called_once_with([("title", 1)])
        cursor.skip.assert_called_once_with(5)
        cursor.limit.assert_called_once_with(5)
        assert result["total"] == 12
        assert result["page"] == 2
        assert result["pageSize"] == 5
        assert [item["title"] for item in result["items"]] == ["A", "B"]
        assert all(isinstance(item["_id"], str) for item in result["items"])

    def test_experience_filter(self, service, jobs, make_cursor):
        docs = [
            make_job("Senior", "5+ years"),
            make_job("Mid", "3-5 years"),
            make_job("Open", "Curiosity"),
            make_job("Junior", "0-1 years"),
        ]
        jobs.find.return_value = make_cursor(docs)

        result = service.list(experience=4)

        assert [item["title"] for item in result["items"]] == ["Mid", "Open"]
        assert result["total"] == 2
        jobs.count_documents.assert_not_called()

    def test_experience_filter_paginates_after_filtering(self, service, jobs, make_cursor):
        docs = [make_job(f"Job {i}", "2+ years") for i in range(5)]
        jobs.find.return_value = make_cursor(docs)

        result = service.list(experience=3, page=2, page_size=2)

        assert [item["title"] for item in result["items"]] == ["Job 2", "Job 3"]
        assert result["total"] == 5


class TestOwnership:

    def test_get_by_id_adds_recruiter(self, service, jobs, mock_db):
        job = make_job("A")
        jobs.find_one.return_value = job
        mock_db["users"].find.return_value = [
            {"_id": job["recruiterId"], "name": "Rita", "email": "rita@example.com"}
        ]

        result = service.get_by_id(str(job["_id"]))

        assert result["recruiterId"] == str(job["recruiterId"])
        assert result["recruiter"]["name"] == "Rita"

    def test_missing_job(self, service, jobs):
        jobs.find_one.return_value = None
        with pytest.raises(NotFoundError) as exc:
            service.get_by_id(str(ObjectId()))
        assert exc.value.message == "Job not found"

    def test_update_by_other_recruiter_forbidden(self, service, jobs):
        jobs.find_one.return_value = make_job("A")

        with pytest.raises(AuthorizationError) as exc:
            service.update(str(ObjectId()), JobUpdate(title="B"), str(ObjectId()))
        assert exc.value.message == "You can only update your own jobs"
        jobs.find_one_and_update.assert_not_called()

    def test_update_sets_only_given_fields(self, service, jobs):
        job = make_job("A")
        jobs.find_one.return_value = job
        jobs.find_one_and_update.return_value = {**job, "title": "B"}

        result = service.update(str(job["_id"]), JobUpdate(title="B"), str(job["recruiterId"]))

        args, _ = jobs.find_one_and_update.call_args
        assert args[0] == {"_id": job["_id"]}
        assert args[1] == {"$set": {"title": "B"}}
        assert result["title"] == "B"

    def test_update_after_concurrent_delete(self, service, jobs):
        job = make_job("A")
        jobs.find_one.return_value = job
        jobs.find_one_and_update.return_value = None

        with pytest.raises(NotFoundError):
            service.update(str(job["_id"]), JobUpdate(title="B"), str(job["recruiterId"]))


class TestDelete:

    def test_removes_applications_before_job(self, service, jobs, mock_db):
        job = make_job("A")
        jobs.find_one.return_value = job
        applications = mock_db["applications"]
        applications.delete_many.return_value = MagicMock(deleted_count=3)

        manager = MagicMock()
        manager.attach_mock(applications.delete_many, "delete_applications")
        manager.attach_mock(jobs.delete_one, "delete_job")

        service.delete(str(job["_id"]), str(job["recruiterId"]))

        assert manager.mock_calls == [
            call.delete_applications({"jobId": job["_id"]}),
            call.delete_job({"_id": job["_id"]}),
        ]

    def test_delete_by_other_recruiter_forbidden(self, service, jobs, mock_db):
        jobs.find_one.return_value = make_job("A")

        with pytest.raises(AuthorizationError) as exc:
            service.delete(str(ObjectId()), str(ObjectId()))
        assert exc.value.message == "You can only delete your own jobs"
        mock_db["applications"].delete_many.assert_not_called()
        jobs.delete_one.assert_not_called()


def test_list_by_recruiter(service, jobs, make_cursor, recruiter_id):
    cursor = make_cursor([make_job("A", recruiterId=ObjectId(recruiter_id), deadline=in_days(-3))])
    jobs.find.return_value = cursor

    items = service.list_by_recruiter(recruiter_id)

    jobs.find.assert_called_once_with({"recruiterId": ObjectId(recruiter_id)})
    cursor.sort.assert_called_once_with("createdAt", -1)
    assert len(items) == 1
