"""
Authentication Dependencies - token lookup and role checks.

Provides:
- Ordered token extraction strategies (header, cookie, query string)
- FastAPI dependencies for protected routes
- Role-restricted dependencies for recruiters/applicants
"""

from typing import Callable, Optional, Sequence

from fastapi import Depends, Request

from jobboard.core.errors import AuthenticationError, AuthorizationError
from jobboard.core.security import InvalidTokenError
from jobboard.schemas.schemas import UserRole

TokenExtractor = Callable[[Request], Optional[str]]


def bearer_header(request: Request) -> Optional[str]:
    """Authorization: Bearer <token>"""
    header = request.headers.get("Authorization")
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def session_cookie(request: Request) -> Optional[str]:
    """HttpOnly cookie set at login."""
    return request.cookies.get(request.app.state.settings.cookie_name) or None


def query_param(request: Request) -> Optional[str]:
    """?token=... (only for plain-link downloads)"""
    return request.query_params.get("token") or None


DEFAULT_EXTRACTORS: Sequence[TokenExtractor] = (bearer_header, session_cookie)
DOWNLOAD_EXTRACTORS: Sequence[TokenExtractor] = (bearer_header, session_cookie, query_param)


def extract_token(request: Request, extractors: Sequence[TokenExtractor]) -> Optional[str]:
    """First token found, trying extractors in order."""
    for extractor in extractors:
        token = extractor(request)
        if token:
            return token
    return None


def identity_dependency(extractors: Sequence[TokenExtractor]):
    """
    Build a dependency that resolves the caller's identity.

    Usage:
        @router.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user  # {"id": ..., "role": ...}
    """
    async def resolve_identity(request: Request) -> dict:
        token = extract_token(request, extractors)
        if not token:
            raise AuthenticationError("No token provided")

        try:
            identity = request.app.state.token_service.verify(token)
        except InvalidTokenError:
            raise AuthenticationError("Invalid or expired token")

        request.state.user = identity
        return identity

    return resolve_identity


get_current_user = identity_dependency(DEFAULT_EXTRACTORS)
get_download_user = identity_dependency(DOWNLOAD_EXTRACTORS)


def check_role(user: Optional[dict], roles: Sequence[UserRole]) -> dict:
    """401 without an identity, 403 if its role isn't one of `roles`."""
    if not user:
        raise AuthenticationError("Unauthorized")
    if user.get("role") not in {role.value for role in roles}:
        raise AuthorizationError("Forbidden: Insufficient permissions")
    return user


def require_roles(*roles: UserRole):
    """Dependency factory - require one of the given roles."""
    async def role_guard(user: dict = Depends(get_current_user)) -> dict:
        return check_role(user, roles)

    return role_guard


get_current_recruiter = require_roles(UserRole.recruiter)
get_current_applicant = require_roles(UserRole.applicant)
