"""
Authentication Routes

POST /auth/register - Register new user (creates auth record and profile)
POST /auth/login - Login and get JWT token
GET /auth/session - Session bootstrap (typed user or no session)
GET /auth/me - Get current auth record
POST /auth/logout - Acknowledge logout (token is discarded client side)
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from app.core.auth import get_current_user, get_optional_profile
from app.core.config import get_settings
from app.core.exceptions import AuthenticationError, BusinessRuleError, PermissionDeniedError
from app.core.security import hash_password, verify_password, create_access_token
from app.db.postgres import get_db_session
from app.services.profile_service import ProfileType, fetch_profile
from app.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, UserResponse, SessionResponse, MessageResponse
)
from app.utils.dates import to_db_timestamp, utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def email_taken(db, email: str) -> bool:
    result = db.execute(
        text("SELECT id FROM users WHERE LOWER(email) = LOWER(:email)"),
        {"email": email}
    )
    return result.fetchone() is not None


def require_campus_email(email: str) -> None:
    domain = get_settings().allowed_email_domain
    if not email.lower().endswith("@" + domain):
        raise BusinessRuleError(f"Only campus emails (@{domain}) are allowed")


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new user account.

    After registration, login to get access token, then complete the profile.
    """
    require_campus_email(request.email)
    if request.password != request.confirm_password:
        raise BusinessRuleError("Passwords do not match")

    user_id = str(uuid.uuid4())
    created_at = to_db_timestamp(utc_now())

    try:
        with get_db_session() as db:
            if email_taken(db, request.email):
                raise BusinessRuleError("Email already registered")

            db.execute(
                text("""
                    INSERT INTO users (id, email, password_hash, role, is_active, created_at)
                    VALUES (:id, :email, :password_hash, :role, :is_active, :created_at)
                """),
                {
                    "id": user_id,
                    "email": request.email,
                    "password_hash": hash_password(request.password),
                    "role": request.role.value,
                    "is_active": True,
                    "created_at": created_at
                }
            )

            # Contact and academic fields are filled in during profile setup
            db.execute(
                text("""
                    INSERT INTO profiles (id, full_name, id_number, email, role, created_at)
                    VALUES (:id, :full_name, :id_number, :email, :role, :created_at)
                """),
                {
                    "id": user_id,
                    "full_name": request.full_name,
                    "id_number": request.id_number,
                    "email": request.email,
                    "role": request.role.value,
                    "created_at": created_at
                }
            )
    except IntegrityError as e:
        # Concurrent registration of the same email
        logger.warning("Duplicate registration for %s: %s", request.email, e)
        raise BusinessRuleError("Email already registered") from e

    logger.info("Registered %s as %s", user_id, request.role.value)
    return MessageResponse(message=f"Registered successfully as {request.role.value}. Please login.")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    require_campus_email(request.email)

    with get_db_session() as db:
        result = db.execute(
            text("SELECT id, password_hash, role, is_active FROM users WHERE LOWER(email) = LOWER(:email)"),
            {"email": request.email}
        )
        user = result.fetchone()

    if not user:
        raise AuthenticationError("Invalid email or password")

    user_id, password_hash, role, is_active = user

    if not is_active:
        raise PermissionDeniedError("Account deactivated")

    if not verify_password(request.password, password_hash):
        logger.info("Failed login for %s", user_id)
        raise AuthenticationError("Invalid email or password")

    profile = fetch_profile(user_id)
    token = create_access_token(data={"sub": user_id, "role": role})

    return TokenResponse(
        access_token=token,
        user_id=user_id,
        role=role,
        profile_complete=bool(profile and profile.profile_complete)
    )


@router.get("/session", response_model=SessionResponse)
async def get_session(profile: Optional[ProfileType] = Depends(get_optional_profile)):
    """
    Session bootstrap for the client.

    Returns the typed user (student or professor) when the bearer token is
    valid; otherwise authenticated=false and no user.
    """
    return SessionResponse(authenticated=profile is not None, user=profile)


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    with get_db_session() as db:
        result = db.execute(
            text("SELECT id, email, role, is_active, created_at FROM users WHERE id = :id"),
            {"id": user["user_id"]}
        )
        row = result.fetchone()

    return UserResponse(
        user_id=row[0], email=row[1], role=row[2], is_active=row[3], created_at=row[4]
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(user: dict = Depends(get_current_user)):
    """Tokens are stateless; the client drops its copy."""
    logger.info("User %s logged out", user["user_id"])
    return MessageResponse(message="Logged out")
