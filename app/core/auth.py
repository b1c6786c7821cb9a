"""
Authentication Utility - FastAPI dependencies for protected routes.

Provides:
- get_current_user: the auth record behind a bearer token
- get_optional_profile: session bootstrap, None when no valid session
- get_current_student / get_current_professor: role-gated typed profiles

Hashing and token helpers live in app.core.security.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import text

from app.core.security import decode_token
from app.db.postgres import get_db_session
from app.schemas.schemas import StudentProfile, ProfessorProfile
from app.services.profile_service import ProfileType, fetch_profile

logger = logging.getLogger(__name__)

# Bearer token extractors
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)


def _load_user(token: str) -> Optional[dict]:
    """Resolve a token to an active auth record, or None."""
    payload = decode_token(token)
    if not payload or not payload.get("sub"):
        return None

    with get_db_session() as db:
        result = db.execute(
            text("SELECT id, email, role, is_active FROM users WHERE id = :id"),
            {"id": payload["sub"]}
        )
        user = result.fetchone()

    if not user:
        return None
    return {"user_id": user[0], "email": user[1], "role": user[2], "is_active": bool(user[3])}


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @app.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    user = _load_user(credentials.credentials)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")

    return user


async def get_optional_profile(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer_scheme)
) -> Optional[ProfileType]:
    """
    Dependency - Session bootstrap.

    No token, a bad token, or a missing profile all mean "no session";
    visitors still get to browse.
    """
    if credentials is None:
        return None

    user = _load_user(credentials.credentials)
    if not user or not user["is_active"]:
        logger.info("Ignoring invalid session token")
        return None

    return fetch_profile(user["user_id"])


async def get_current_profile(user: dict = Depends(get_current_user)) -> ProfileType:
    """Dependency - typed profile of the authenticated user."""
    profile = fetch_profile(user["user_id"])
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


async def get_current_student(profile: ProfileType = Depends(get_current_profile)) -> StudentProfile:
    """Dependency - Require student role."""
    if not isinstance(profile, StudentProfile):
        raise HTTPException(status_code=403, detail="Students only")
    return profile


async def get_current_professor(profile: ProfileType = Depends(get_current_profile)) -> ProfessorProfile:
    """Dependency - Require professor role."""
    if not isinstance(profile, ProfessorProfile):
        raise HTTPException(status_code=403, detail="Professors only")
    return profile
