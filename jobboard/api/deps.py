"""
API Dependencies
Services are built per request from the database the app factory
opened (request.app.state), so tests can swap any of them through
app.dependency_overrides.
"""

from fastapi import Depends, Request
from pymongo.database import Database

from jobboard.core.config import Settings
from jobboard.services.analytics_service import AnalyticsService
from jobboard.services.application_service import ApplicationService
from jobboard.services.job_service import JobService
from jobboard.services.user_service import UserService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_user_service(db: Database = Depends(get_db)) -> UserService:
    return UserService(db)


def get_job_service(db: Database = Depends(get_db)) -> JobService:
    return JobService(db)


def get_application_service(db: Database = Depends(get_db)) -> ApplicationService:
    return ApplicationService(db)


def get_analytics_service(db: Database = Depends(get_db)) -> AnalyticsService:
    return AnalyticsService(db)
