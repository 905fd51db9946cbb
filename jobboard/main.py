"""
Job Board - Main Application

FastAPI backend with:
- MongoDB for users, jobs and applications (resumes stored inline)
- JWT authentication (bearer header or HttpOnly cookie)
- Recruiter analytics via aggregation pipelines

Run: uvicorn jobboard.main:app --reload
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from jobboard.api.routes import api_router
from jobboard.core.config import Settings, get_settings
from jobboard.core.errors import register_exception_handlers
from jobboard.core.security import TokenService
from jobboard.db.mongodb import (
    check_mongo_connection,
    create_mongo_client,
    get_database,
    init_mongo_indexes,
)
from jobboard.schemas.schemas import HealthResponse

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application around an explicit Settings instance.

    The Mongo client, database handle, settings and token service live
    on app.state; request handlers reach them through jobboard.api.deps.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Job Board API",
        description="""
        Recruiters post jobs and review applicants; applicants browse
        jobs and apply with a PDF resume.

        ## Features
        - **Authentication**: JWT-based auth for applicants and recruiters
        - **Jobs**: Search, filter, sort and paginate open postings
        - **Applications**: One per job per applicant, resume upload/download
        - **Analytics**: Per-recruiter rollups over applications
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.mongo_client = create_mongo_client(settings)
    app.state.db = get_database(app.state.mongo_client, settings)
    app.state.token_service = TokenService.from_settings(settings)

    # CORS middleware; credentials are needed for the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    async def startup_event():
        """Initialize MongoDB indexes on startup."""
        try:
            init_mongo_indexes(app.state.db)
        except Exception as e:
            logger.warning("MongoDB index initialization failed: %s", e)

    @app.on_event("shutdown")
    async def shutdown_event():
        app.state.mongo_client.close()

    @app.get("/api/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request):
        """Liveness plus MongoDB reachability."""
        connected = check_mongo_connection(request.app.state.mongo_client)
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc),
            "mongodb": "connected" if connected else "disconnected",
        }

    return app


app = create_app()
