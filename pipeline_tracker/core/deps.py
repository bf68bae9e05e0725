"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect endpoints and extract the caller's
organization (tenant) context.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session
from uuid import UUID

from pipeline_tracker.core.database import get_db
from pipeline_tracker.core.security import decode_token
from pipeline_tracker.models.user import User, UserRole

# HTTP Bearer token scheme (Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Extract and validate the current user from JWT token.

    This dependency:
    1. Extracts the Bearer token from Authorization header
    2. Decodes and validates the JWT (refresh tokens are refused)
    3. Fetches the user from the database
    4. Ensures the user is active

    Raises:
        HTTPException 401: If token is missing, invalid or user not found
        HTTPException 403: If the account is inactive
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    try:
        payload = decode_token(credentials.credentials)
        user_id = payload.get("sub")
        if user_id is None or payload.get("type") == "refresh":
            raise credentials_exception
        user_uuid = UUID(user_id)
    except (JWTError, ValueError):
        raise credentials_exception

    user = db.query(User).filter(User.id == user_uuid).first()
    if user is None:
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    return user


def get_organization_id(user: User = Depends(get_current_user)) -> UUID:
    """
    Extract organization_id from the current user.

    This is the core multi-tenancy dependency. All queries must filter by
    organization_id to prevent cross-tenant data access.

    Usage:
        @router.get("/candidates")
        def list_candidates(organization_id: UUID = Depends(get_organization_id), db: Session = Depends(get_db)):
            ...
    """
    return user.organization_id


async def get_admin_user(user: User = Depends(get_current_user)) -> User:
    """
    Require the organization admin role.

    Raises:
        HTTPException 403: If the user is not an admin
    """
    if user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required"
        )
    return user
