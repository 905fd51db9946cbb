"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Attributes are snake_case; the wire format (and the MongoDB documents)
are camelCase, with `_id` for document ids.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    applicant = "applicant"
    recruiter = "recruiter"


class ApplicationStatus(str, Enum):
    APPLIED = "APPLIED"
    UNDER_REVIEW = "UNDER_REVIEW"
    INTERVIEW = "INTERVIEW"
    OFFER = "OFFER"
    REJECTED = "REJECTED"


class JobSort(str, Enum):
    created_desc = "createdAt:desc"
    created_asc = "createdAt:asc"
    title_asc = "title:asc"
    title_desc = "title:desc"

    @property
    def mongo_sort(self) -> list:
        field, order = self.value.split(":")
        return [(field, -1 if order == "desc" else 1)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def ensure_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def required_text(value: Optional[str], message: str) -> Optional[str]:
    """Trim a text field; blank after trimming is an error. None passes through."""
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError(message)
    return value


def ensure_future(value: datetime) -> datetime:
    value = ensure_utc(value)
    if value <= datetime.now(timezone.utc):
        raise ValueError("Deadline must be in the future")
    return value


# ============================================================
# AUTH / USER SCHEMAS
# ============================================================

class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    # bcrypt only looks at the first 72 bytes
    password: str = Field(..., min_length=6, max_length=72)
    role: UserRole

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return required_text(v, "Name is required")


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        return required_text(v, "Name is required")


class UserSummary(CamelModel):
    id: str = Field(alias="_id")
    name: str
    email: str


class UserResponse(UserSummary):
    role: UserRole
    created_at: Optional[datetime] = None


class UserEnvelope(CamelModel):
    user: UserResponse


class TokenResponse(CamelModel):
    token: str
    user: UserResponse


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    requirements: Optional[str] = Field(None, max_length=3000)
    location: Optional[str] = Field(None, max_length=100)
    deadline: datetime

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return required_text(v, "Title is required")

    @field_validator("deadline")
    @classmethod
    def deadline_in_future(cls, v: datetime) -> datetime:
        return ensure_future(v)


class JobUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=5000)
    requirements: Optional[str] = Field(None, max_length=3000)
    location: Optional[str] = Field(None, max_length=100)
    deadline: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        return required_text(v, "Title is required")

    @field_validator("deadline")
    @classmethod
    def deadline_in_future(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_future(v) if v is not None else v


class JobResponse(CamelModel):
    id: str = Field(alias="_id")
    title: str
    description: str
    requirements: Optional[str] = None
    location: Optional[str] = None
    deadline: datetime
    recruiter_id: str
    created_at: datetime
    recruiter: Optional[UserSummary] = None


class JobEnvelope(CamelModel):
    job: JobResponse


class JobItems(CamelModel):
    items: List[JobResponse]


class JobListResponse(CamelModel):
    items: List[JobResponse]
    page: int
    page_size: int
    total: int


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(CamelModel):
    job_id: str
    applicant_name: str = Field(..., min_length=1, max_length=100)
    applicant_email: EmailStr
    applicant_phone: str = Field(..., pattern=r"^[+]?[\d\s\-().]+$")
    years_of_experience: float = Field(..., ge=0, le=50)
    current_role: Optional[str] = Field(None, max_length=100)
    cover_letter: Optional[str] = Field(None, max_length=3000)


class ApplicationUpdate(CamelModel):
    status: Optional[ApplicationStatus] = None
    notes: Optional[str] = Field(None, max_length=2000)


class ApplicationResponse(CamelModel):
    id: str = Field(alias="_id")
    job_id: str
    applicant_id: str
    status: ApplicationStatus
    applicant_name: str
    applicant_email: str
    applicant_phone: str
    years_of_experience: float
    current_role: Optional[str] = None
    cover_letter: Optional[str] = None
    notes: Optional[str] = None
    resume_file_name: Optional[str] = None
    has_resume: bool = False
    created_at: datetime
    updated_at: datetime
    job: Optional[JobResponse] = None
    applicant: Optional[UserSummary] = None


class ApplicationEnvelope(CamelModel):
    application: ApplicationResponse


class ApplicationListResponse(CamelModel):
    items: List[ApplicationResponse]
    page: int
    page_size: int
    total: int


class ApplicationsByStatusResponse(CamelModel):
    by_status: Dict[str, List[ApplicationResponse]]


# ============================================================
# ANALYTICS SCHEMAS
# ============================================================

class PerJobCount(CamelModel):
    job_id: str
    title: str
    count: int


class JobExperienceStats(CamelModel):
    job_id: str
    title: str
    avg_experience: float
    min_experience: float
    max_experience: float


class AnalyticsSummaryResponse(CamelModel):
    total_applicants: int
    per_job_counts: List[PerJobCount]
    status_distribution: Dict[str, int]
    avg_experience_per_job: List[JobExperienceStats]


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(CamelModel):
    message: str


class HealthResponse(CamelModel):
    status: str
    timestamp: datetime
    mongodb: str


class ErrorResponse(CamelModel):
    error: str
