"""
CRUD operations for User and Organization models.

Also implements organization onboarding: a new account either creates its
own organization or joins the oldest existing one.
"""

import uuid
from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session
from pipeline_tracker.core.config import settings
from pipeline_tracker.core.security import get_password_hash
from pipeline_tracker.models.organization import Organization
from pipeline_tracker.models.user import User, UserRole


def get_by_id(db: Session, user_id: UUID) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def list_for_organization(db: Session, organization_id: UUID) -> List[User]:
    """Members of one organization, ordered by name then email."""
    return (
        db.query(User)
        .filter(User.organization_id == organization_id)
        .order_by(User.full_name, User.email)
        .all()
    )


def get_organization(db: Session, organization_id: UUID) -> Optional[Organization]:
    return db.query(Organization).filter(Organization.id == organization_id).first()


def resolve_organization(db: Session, organization_name: Optional[str] = None) -> Tuple[Organization, bool]:
    """
    Pick the organization a new account belongs to.

    - organization_name given: create that organization
    - otherwise: join the oldest organization, creating the default one
      if none exists yet

    Returns:
        (organization, created) - created is True when a new row was added
    """
    if not organization_name:
        existing = db.query(Organization).order_by(Organization.created_at).first()
        if existing:
            return existing, False
        organization_name = settings.DEFAULT_ORGANIZATION_NAME

    organization = Organization(id=uuid.uuid4(), name=organization_name)
    db.add(organization)
    db.flush()  # Flush to get organization.id for the user FK
    return organization, True


def create(
    db: Session,
    email: str,
    password: str,
    full_name: Optional[str] = None,
    organization_name: Optional[str] = None,
) -> User:
    """
    Create a user and, when needed, its organization in one transaction.

    The founder of a newly created organization becomes its admin; everyone
    else starts as a recruiter.
    """
    organization, created = resolve_organization(db, organization_name)

    user = User(
        id=uuid.uuid4(),
        organization_id=organization.id,
        role=UserRole.ADMIN if created else UserRole.RECRUITER,
        email=email,
        hashed_password=get_password_hash(password),
        full_name=full_name or email.split("@")[0],
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    return user
