"""
CRUD operations for Role model (job openings).
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from pipeline_tracker.models.role import Role
from pipeline_tracker.schemas.role import RoleCreateRequest


def create(db: Session, organization_id: UUID, role_data: RoleCreateRequest) -> Role:
    db_role = Role(
        organization_id=organization_id,
        role_name=role_data.role_name,
        department=role_data.department,
        seniority=role_data.seniority,
    )

    db.add(db_role)
    db.commit()
    db.refresh(db_role)

    return db_role


def get_by_id(db: Session, organization_id: UUID, role_id: UUID) -> Optional[Role]:
    """Retrieve a role, or None if it does not exist in this organization."""
    return db.query(Role).filter(
        Role.id == role_id,
        Role.organization_id == organization_id
    ).first()


def get_multi(db: Session, organization_id: UUID) -> List[Role]:
    """All roles of an organization ordered by name."""
    return (
        db.query(Role)
        .filter(Role.organization_id == organization_id)
        .order_by(Role.role_name)
        .all()
    )
