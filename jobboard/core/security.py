"""
Security primitives - password hashing and JWT tokens.

Provides:
- Password hashing with bcrypt (passlib)
- TokenService: issue/verify signed, time-limited bearer tokens
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from jobboard.core.config import Settings
from jobboard.schemas.schemas import UserRole

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidTokenError(Exception):
    """Token signature, expiry or claims did not verify."""
    pass


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


class TokenService:
    """
    Issues and verifies JWTs carrying the user id (sub) and role.

    There is no revocation list: a token stays valid until it expires.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_days: int = 7):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = timedelta(days=expire_days)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expire_days=settings.jwt_expire_days,
        )

    def issue(self, user_id: str, role: str, now: Optional[datetime] = None) -> str:
        """Create a signed token for user_id/role."""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "role": UserRole(role).value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.expires_in).timestamp()),
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        """
        Decode and verify a token.

        Returns:
            {"id": <subject>, "role": <role>}

        Raises:
            InvalidTokenError on bad signature, expiry or missing claims
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        subject = payload.get("sub")
        role = payload.get("role")
        if not subject or role not in {r.value for r in UserRole}:
            raise InvalidTokenError("Token is missing required claims")

        return {"id": subject, "role": role}
