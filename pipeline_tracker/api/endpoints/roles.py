import logging
from typing import List
from uuid import UUID
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pipeline_tracker.core.database import get_db
from pipeline_tracker.core.deps import get_admin_user, get_organization_id
from pipeline_tracker.crud import role as role_crud
from pipeline_tracker.models.user import User
from pipeline_tracker.schemas.role import RoleCreateRequest, RoleResponse

router = APIRouter(prefix="/roles", tags=["Roles"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=RoleResponse)
def create_role(
    request: RoleCreateRequest,
    admin_user: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Create a job opening candidates can be attached to. Admin only."""
    try:
        role = role_crud.create(db, admin_user.organization_id, request)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating role: {e}")
        raise HTTPException(status_code=500, detail="Failed to create role. Please try again.")

    logger.info(f"Created role {role.id}: {role.role_name} (organization_id: {role.organization_id})")
    return role


@router.get("/", response_model=List[RoleResponse])
def list_roles(
    organization_id: UUID = Depends(get_organization_id),
    db: Session = Depends(get_db)
):
    """List the organization's roles ordered by name."""
    return role_crud.get_multi(db, organization_id)


@router.get("/{role_id}", response_model=RoleResponse)
def get_role(
    role_id: UUID,
    organization_id: UUID = Depends(get_organization_id),
    db: Session = Depends(get_db)
):
    role = role_crud.get_by_id(db, organization_id, role_id)
    if not role:
        raise HTTPException(status_code=404, detail="Role not found")
    return role
