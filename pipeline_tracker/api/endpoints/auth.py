"""
Authentication endpoints for user registration, login, and token refresh.

Implements JWT-based stateless authentication:
- POST /register: Create new user account (joins or creates an organization)
- POST /login: Authenticate and receive JWT tokens
- POST /refresh: Get new access token using refresh token
- GET /me: Get current user profile
"""

import logging
import uuid
from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException, Depends, status
from jose import JWTError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pipeline_tracker.core.database import get_db
from pipeline_tracker.core.deps import get_current_user
from pipeline_tracker.core.security import verify_password, create_access_token, create_refresh_token, decode_token
from pipeline_tracker.crud import user as user_crud
from pipeline_tracker.models.user import User
from pipeline_tracker.schemas.user import (
    UserRegisterRequest,
    UserLoginRequest,
    TokenResponse,
    TokenRefreshRequest,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


def _issue_tokens(user: User) -> TokenResponse:
    access_token = create_access_token(data={
        "sub": str(user.id),
        "organization_id": str(user.organization_id),
        "role": user.role.value,
    })
    refresh_token = create_refresh_token(data={"sub": str(user.id)})

    return TokenResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        user=UserResponse.model_validate(user)
    )


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    Organization onboarding:
    - organization_name given: a new organization is created and the user is its admin
    - otherwise: the user joins the oldest organization as a recruiter
      (the default organization is created if there is none yet)

    Returns JWT tokens for immediate login.
    """
    if user_crud.get_by_email(db, request.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    try:
        new_user = user_crud.create(
            db,
            email=request.email,
            password=request.password,
            full_name=request.full_name,
            organization_name=request.organization_name,
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error registering {request.email}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create account. Please try again.")

    logger.info(
        f"New user registered: {new_user.email} "
        f"(organization_id: {new_user.organization_id}, role: {new_user.role.value})"
    )

    return _issue_tokens(new_user)


@router.post("/login", response_model=TokenResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return JWT tokens.

    Validates email/password and returns access + refresh tokens.
    Updates last_login_at timestamp.
    """
    user = user_crud.get_by_email(db, request.username)
    if not user or not verify_password(request.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive. Please contact support."
        )

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)

    logger.info(f"User logged in: {user.email}")

    return _issue_tokens(user)


@router.post("/refresh", response_model=TokenResponse)
def refresh_token(
    request: TokenRefreshRequest,
    db: Session = Depends(get_db)
):
    """
    Refresh access token using refresh token.

    Validates the refresh token and issues a new token pair.
    """
    invalid_token = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid refresh token"
    )

    try:
        payload = decode_token(request.refresh_token)
        user_id = payload.get("sub")
        if user_id is None or payload.get("type") != "refresh":
            raise invalid_token
        user_uuid = uuid.UUID(user_id)
    except (JWTError, ValueError):
        raise invalid_token

    # Verify user still exists and is active
    user = user_crud.get_by_id(db, user_uuid)
    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive"
        )

    return _issue_tokens(user)


@router.get("/me", response_model=UserResponse)
def get_me(user: User = Depends(get_current_user)):
    """Get the current user's profile."""
    return user
