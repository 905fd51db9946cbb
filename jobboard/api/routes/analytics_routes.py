"""
Analytics Routes

GET /analytics/summary - Recruiter dashboard figures over own jobs
"""

from fastapi import APIRouter, Depends

from jobboard.api.deps import get_analytics_service
from jobboard.core.auth import get_current_recruiter
from jobboard.schemas.schemas import AnalyticsSummaryResponse
from jobboard.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("/summary", response_model=AnalyticsSummaryResponse)
async def summary(
    recruiter: dict = Depends(get_current_recruiter),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """
    Totals for the calling recruiter's jobs:
    distinct applicants, applications per job, status distribution,
    and years of experience per job.
    """
    return analytics.summary(recruiter["id"])
