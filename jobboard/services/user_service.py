"""
User Service - registration, credential checks and profile updates.

Users are never deleted through the API and their role is fixed at
registration. `passwordHash` never leaves this module.
"""

import logging
from typing import Dict, Iterable, Optional

from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from jobboard.core.errors import AuthenticationError, ConflictError, NotFoundError
from jobboard.core.security import hash_password, verify_password
from jobboard.db.mongodb import get_collection
from jobboard.schemas.schemas import RegisterRequest, UserUpdate
from jobboard.services.mongo_service import serialize_doc, to_object_id, utcnow

logger = logging.getLogger(__name__)

PUBLIC_PROJECTION = {"passwordHash": 0}
SUMMARY_PROJECTION = {"name": 1, "email": 1}


def normalize_email(email: str) -> str:
    return str(email).strip().lower()


class UserService:
    """Handles the users collection."""

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "users")

    def register(self, data: RegisterRequest) -> dict:
        """
        Create a user with a hashed password.

        Raises:
            ConflictError if the email (case-insensitive) is taken
        """
        email = normalize_email(data.email)
        if self.collection.find_one({"email": email}, {"_id": 1}):
            raise ConflictError("User already exists with this email")

        doc = {
            "name": data.name,
            "email": email,
            "passwordHash": hash_password(data.password),
            "role": data.role.value,
            "createdAt": utcnow(),
        }
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration
            raise ConflictError("User already exists with this email")

        doc["_id"] = result.inserted_id
        doc.pop("passwordHash")
        logger.info("Registered %s user %s", doc["role"], doc["_id"])
        return serialize_doc(doc)

    def authenticate(self, email: str, password: str) -> dict:
        """
        Check credentials.

        Raises:
            NotFoundError for an unknown email
            AuthenticationError for a wrong password
        """
        user = self.collection.find_one({"email": normalize_email(email)})
        if not user:
            raise NotFoundError("User with this email does not exist")

        if not verify_password(password, user["passwordHash"]):
            raise AuthenticationError("Invalid password")

        user.pop("passwordHash")
        return serialize_doc(user)

    def get_by_id(self, user_id: str) -> dict:
        user = self.collection.find_one({"_id": to_object_id(user_id)}, PUBLIC_PROJECTION)
        if not user:
            raise NotFoundError("User not found")
        return serialize_doc(user)

    def update_profile(self, user_id: str, data: UserUpdate) -> dict:
        """Self-service update; only the name is mutable."""
        updates = {}
        if data.name is not None:
            updates["name"] = data.name

        if updates:
            self.collection.update_one({"_id": to_object_id(user_id)}, {"$set": updates})
        return self.get_by_id(user_id)

    def get_summaries(self, user_ids: Iterable) -> Dict[str, dict]:
        """Public {_id, name, email} for each id, keyed by string id."""
        ids = list({to_object_id(uid) for uid in user_ids})
        if not ids:
            return {}
        docs = self.collection.find({"_id": {"$in": ids}}, SUMMARY_PROJECTION)
        return {str(doc["_id"]): serialize_doc(doc) for doc in docs}

    def get_summary(self, user_id) -> Optional[dict]:
        return self.get_summaries([user_id]).get(str(user_id))
