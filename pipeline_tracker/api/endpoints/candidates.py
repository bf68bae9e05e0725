"""
API endpoints for candidate management.

Handles adding candidates to the pipeline, the kanban board, stage moves
and event history.
"""

import logging
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pipeline_tracker.core.database import get_db
from pipeline_tracker.core.deps import get_current_user
from pipeline_tracker.crud import candidate as candidate_crud
from pipeline_tracker.crud import role as role_crud
from pipeline_tracker.crud import stage_event as stage_event_crud
from pipeline_tracker.models.candidate import CandidateStatus
from pipeline_tracker.models.stage_event import Stage
from pipeline_tracker.models.user import User
from pipeline_tracker.schemas.candidate import (
    BoardResponse,
    CandidateCreateRequest,
    CandidateResponse,
    StageEventResponse,
    StageMoveRequest,
    StageMoveResponse,
)
from pipeline_tracker.services.analytics import stage_board

router = APIRouter(prefix="/candidates", tags=["Candidates"])
logger = logging.getLogger(__name__)


def _get_candidate_or_404(db: Session, organization_id: UUID, candidate_id: UUID):
    candidate = candidate_crud.get_by_id(db, organization_id, candidate_id)
    if not candidate:
        raise HTTPException(status_code=404, detail="Candidate not found")
    return candidate


@router.post("/", status_code=201, response_model=CandidateResponse)
def create_candidate(
    request: CandidateCreateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Add a candidate to the pipeline.

    The candidate starts in "Application Submitted" with status active, and
    its creation event (from_stage = null) is written in the same
    transaction.

    Raises:
        HTTPException 404: role_id does not belong to the organization
        HTTPException 500: the write failed
    """
    if request.role_id and not role_crud.get_by_id(db, user.organization_id, request.role_id):
        raise HTTPException(status_code=404, detail="Role not found")

    try:
        candidate = candidate_crud.create(db, user.organization_id, request, actor_id=user.id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating candidate: {e}")
        raise HTTPException(status_code=500, detail="Failed to create candidate. Please try again.")

    logger.info(
        f"Created candidate {candidate.id}",
        extra={"organization_id": candidate.organization_id, "user_id": user.id, "candidate_id": candidate.id}
    )
    return candidate


@router.get("/", response_model=List[CandidateResponse])
def list_candidates(
    stage: Optional[Stage] = None,
    candidate_status: Optional[CandidateStatus] = Query(None, alias="status"),
    role_id: Optional[UUID] = None,
    sources: Optional[List[str]] = Query(None, description="Match any of these sources"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List the organization's candidates, newest first.

    Args:
        stage: Only candidates currently in this stage
        status: Only candidates with this status (active, rejected, withdrawn, hired)
        role_id: Only candidates for this role
        sources: Only candidates from one of these sources (repeat the parameter)
    """
    return candidate_crud.get_multi(
        db,
        user.organization_id,
        stage=stage,
        status=candidate_status,
        role_id=role_id,
        sources=sources,
    )


@router.get("/board", response_model=BoardResponse)
def get_board(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Kanban board: one column per stage, in pipeline order.

    Every stage is present, empty columns included.
    """
    candidates = candidate_crud.get_multi(db, user.organization_id)
    return {"columns": stage_board(candidates)}


@router.get("/{candidate_id}", response_model=CandidateResponse)
def get_candidate(
    candidate_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return _get_candidate_or_404(db, user.organization_id, candidate_id)


@router.post("/{candidate_id}/move", response_model=StageMoveResponse)
def move_candidate(
    candidate_id: UUID,
    request: StageMoveRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Move a candidate to another stage.

    Flow:
    1. Append a stage event (from the current stage to to_stage)
    2. Derive the new status: reject -> rejected, withdraw -> withdrawn,
       advance to Joined -> hired, otherwise unchanged
    3. Update the candidate's current_stage and status

    Both writes are committed together. Any stage may be chosen whatever
    the current status; resubmitting records a second event.

    Raises:
        HTTPException 404: candidate not found in the organization
        HTTPException 422: reason_code is Other without reason_text
        HTTPException 500: the write failed (nothing is persisted)
    """
    candidate = _get_candidate_or_404(db, user.organization_id, candidate_id)
    from_stage = candidate.current_stage

    try:
        candidate, event = candidate_crud.move_stage(
            db,
            candidate,
            to_stage=request.to_stage,
            action_type=request.action_type,
            reason_code=request.reason_code,
            reason_text=request.reason_text,
            actor_id=user.id,
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error moving candidate {candidate_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to move candidate. Please try again.")

    logger.info(
        f"Moved candidate {candidate.id}: {from_stage.value} -> {event.to_stage.value} "
        f"({event.action_type.value}, {event.reason_code.value}) status={candidate.status.value}",
        extra={
            "organization_id": candidate.organization_id,
            "user_id": user.id,
            "candidate_id": candidate.id,
            "event_id": event.id,
        }
    )

    return {"candidate": candidate, "event": event}


@router.get("/{candidate_id}/events", response_model=List[StageEventResponse])
def list_candidate_events(
    candidate_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Stage history of a candidate, oldest first."""
    _get_candidate_or_404(db, user.organization_id, candidate_id)
    return stage_event_crud.get_for_candidate(db, user.organization_id, candidate_id)
