"""
Shared fixtures for all tests.

No test talks to a real MongoDB: services get a MagicMock database whose
collections are MagicMocks, and route tests swap whole services through
app.dependency_overrides.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from jobboard.api import deps
from jobboard.core.config import Settings
from jobboard.db.mongodb import COLLECTIONS
from jobboard.main import create_app


@pytest.fixture
def settings():
    """Test settings, ignoring any local .env file."""
    return Settings(
        _env_file=None,
        mongodb_uri="mongodb://localhost:27017",
        mongodb_db="jobboard_test",
        mongodb_timeout_ms=100,
        jwt_secret_key="test-jwt-secret-key-min-32-chars-long",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Create test client (server errors come back as 500 responses)."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def token_service(app):
    return app.state.token_service


@pytest.fixture
def recruiter_id():
    return str(ObjectId())


@pytest.fixture
def applicant_id():
    return str(ObjectId())


@pytest.fixture
def recruiter_headers(token_service, recruiter_id):
    return {"Authorization": f"Bearer {token_service.issue(recruiter_id, 'recruiter')}"}


@pytest.fixture
def applicant_headers(token_service, applicant_id):
    return {"Authorization": f"Bearer {token_service.issue(applicant_id, 'applicant')}"}


# ============================================================
# Service overrides for route tests
# ============================================================

@pytest.fixture
def user_service(app):
    service = MagicMock()
    app.dependency_overrides[deps.get_user_service] = lambda: service
    yield service
    app.dependency_overrides.pop(deps.get_user_service, None)


@pytest.fixture
def job_service(app):
    service = MagicMock()
    app.dependency_overrides[deps.get_job_service] = lambda: service
    yield service
    app.dependency_overrides.pop(deps.get_job_service, None)


@pytest.fixture
def application_service(app):
    service = MagicMock()
    app.dependency_overrides[deps.get_application_service] = lambda: service
    yield service
    app.dependency_overrides.pop(deps.get_application_service, None)


@pytest.fixture
def analytics_service(app):
    service = MagicMock()
    app.dependency_overrides[deps.get_analytics_service] = lambda: service
    yield service
    app.dependency_overrides.pop(deps.get_analytics_service, None)


# ============================================================
# Mock MongoDB for service tests
# ============================================================

@pytest.fixture
def mock_db():
    """MagicMock database; mock_db["jobs"] etc. return stable collection mocks."""
    collections = {name: MagicMock(name=name) for name in COLLECTIONS.values()}
    db = MagicMock()
    db.__getitem__.side_effect = collections.__getitem__
    return db


@pytest.fixture
def make_cursor():
    """Build a cursor mock supporting sort/skip/limit chaining and iteration."""
    def _make(docs):
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.skip.return_value = cursor
        cursor.limit.return_value = cursor
        cursor.__iter__.side_effect = lambda: iter(list(docs))
        return cursor
    return _make


def utc(days: float = 0) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)


@pytest.fixture
def job_doc(recruiter_id):
    """A stored job document, still open."""
    return {
        "_id": ObjectId(),
        "title": "Backend Engineer",
        "description": "Build APIs",
        "requirements": "3-5 years of experience",
        "location": "Remote",
        "deadline": utc(30),
        "recruiterId": ObjectId(recruiter_id),
        "createdAt": utc(-1),
    }


@pytest.fixture
def application_doc(job_doc, applicant_id):
    """A stored application document (without resume bytes)."""
    return {
        "_id": ObjectId(),
        "jobId": job_doc["_id"],
        "applicantId": ObjectId(applicant_id),
        "status": "APPLIED",
        "applicantName": "Ada Lovelace",
        "applicantEmail": "ada@example.com",
        "applicantPhone": "+44 20 7946 0958",
        "yearsOfExperience": 4,
        "createdAt": utc(-1),
        "updatedAt": utc(-1),
    }
