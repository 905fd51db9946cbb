"""
MongoDB Connection Utility

MongoDB stores everything the job board persists:
- users: credentials and profile fields
- jobs: postings owned by a recruiter
- applications: one per (job, applicant), with the resume bytes inline

The client is created by the app factory from an explicit Settings
instance and kept on app.state; nothing here holds a module-level client.
"""

import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from jobboard.core.config import Settings

logger = logging.getLogger(__name__)


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "jobs": "jobs",
    "applications": "applications",
}


def create_mongo_client(settings: Settings) -> MongoClient:
    """
    Create a MongoDB client.

    The client connects lazily, so this never blocks; the first query
    (or ping) does. Datetimes come back timezone-aware (UTC).
    """
    return MongoClient(
        settings.mongodb_uri,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
    )


def get_database(client: MongoClient, settings: Settings) -> Database:
    return client[settings.mongodb_db]


def get_collection(db: Database, name: str) -> Collection:
    return db[COLLECTIONS[name]]


def check_mongo_connection(client: MongoClient) -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        # ping command checks connection
        client.admin.command("ping")
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


def init_mongo_indexes(db: Database) -> None:
    """
    Create indexes, including the uniqueness constraints the
    services rely on. Call this once during app startup.
    """
    users = get_collection(db, "users")
    users.create_index("email", unique=True)

    jobs = get_collection(db, "jobs")
    jobs.create_index([("recruiterId", ASCENDING), ("createdAt", DESCENDING)])
    jobs.create_index("deadline")

    applications = get_collection(db, "applications")
    # One application per applicant per job
    applications.create_index(
        [("jobId", ASCENDING), ("applicantId", ASCENDING)],
        unique=True,
    )
    applications.create_index([("jobId", ASCENDING), ("status", ASCENDING)])
    applications.create_index([("applicantId", ASCENDING), ("createdAt", DESCENDING)])

    logger.info("MongoDB indexes created successfully")
