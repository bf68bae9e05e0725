"""
User model for authentication and multi-tenancy.

Each User belongs to exactly one Organization. All resources (roles,
candidates, stage events) are scoped to the user's organization_id.
"""

import enum
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Enum, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from pipeline_tracker.core.database import Base, enum_values
from pipeline_tracker.models.organization import utcnow


class UserRole(str, enum.Enum):
    """
    Permission level inside an organization.

    - RECRUITER: manages candidates (default for new accounts)
    - MANAGER: hiring manager, same candidate permissions as recruiter
    - ADMIN: additionally manages roles (job openings)
    """
    RECRUITER = "recruiter"
    ADMIN = "admin"
    MANAGER = "manager"


class User(Base):
    """
    Recruiting team member.

    organization_id is the isolation boundary: every query issued on behalf
    of this user must filter by it.
    """
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    role = Column(
        Enum(UserRole, name="userrole", values_callable=enum_values),
        default=UserRole.RECRUITER,
        nullable=False
    )

    # Authentication credentials
    email = Column(String, unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)

    # User profile
    full_name = Column(String, nullable=True)

    # Account status
    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    organization = relationship("Organization", back_populates="users")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', organization_id={self.organization_id})>"
