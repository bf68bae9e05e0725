"""
Endpoints for the caller's organization and its members.
"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pipeline_tracker.core.database import get_db
from pipeline_tracker.core.deps import get_organization_id
from pipeline_tracker.crud import user as user_crud
from pipeline_tracker.schemas.user import OrganizationResponse, UserResponse

router = APIRouter(tags=["Organization"])


@router.get("/organization", response_model=OrganizationResponse)
def get_organization(
    organization_id: UUID = Depends(get_organization_id),
    db: Session = Depends(get_db)
):
    """Organization the current user belongs to."""
    organization = user_crud.get_organization(db, organization_id)
    if not organization:
        raise HTTPException(status_code=404, detail="Organization not found")
    return organization


@router.get("/users", response_model=List[UserResponse])
def list_users(
    organization_id: UUID = Depends(get_organization_id),
    db: Session = Depends(get_db)
):
    """Members of the current user's organization."""
    return user_crud.list_for_organization(db, organization_id)
