"""
Pydantic schemas for User authentication and registration.
"""

from pydantic import BaseModel, EmailStr, Field, UUID4, field_validator
from typing import Optional
from datetime import datetime
import re

from pipeline_tracker.models.user import UserRole


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""
    email: EmailStr
    password: str = Field(
        ...,
        min_length=8,
        max_length=72,  # bcrypt limit
        description="Password must be 8-72 characters with uppercase, lowercase, number, and special character"
    )
    full_name: Optional[str] = None
    organization_name: Optional[str] = Field(
        None,
        max_length=200,
        description="Create a new organization; omit to join the existing one"
    )

    @field_validator('password')
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        """Validate password contains required character types."""
        if not re.search(r'[a-z]', v):
            raise ValueError('Password must contain at least one lowercase letter')
        if not re.search(r'[A-Z]', v):
            raise ValueError('Password must contain at least one uppercase letter')
        if not re.search(r'\d', v):
            raise ValueError('Password must contain at least one number')
        if not re.search(r'[!@#$%^&*(),.?":{}|<>]', v):
            raise ValueError('Password must contain at least one special character (!@#$%^&*(),.?":{}|<>)')
        return v


class UserLoginRequest(BaseModel):
    """Request schema for user login (OAuth2 field naming)."""
    username: EmailStr  # OAuth2 field name; holds the email
    password: str


class TokenRefreshRequest(BaseModel):
    """Request schema for refreshing access token."""
    refresh_token: str


class UserResponse(BaseModel):
    """User profile response (no sensitive data)."""
    id: UUID4
    organization_id: UUID4
    role: UserRole
    email: str
    full_name: Optional[str]
    is_active: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """JWT token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: Optional[UserResponse] = None


class OrganizationResponse(BaseModel):
    id: UUID4
    name: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
