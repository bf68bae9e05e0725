"""
CRUD operations for Candidate model.

Candidate writes always travel with a stage event: creation appends the
initial event and every move appends one more. Both rows are committed in
the same transaction so current_stage/status never drift from the history.
"""

from typing import List, Optional, Sequence, Tuple
from uuid import UUID
from sqlalchemy.orm import Session
from pipeline_tracker.models.candidate import Candidate, CandidateStatus
from pipeline_tracker.models.stage_event import ActionType, CandidateStageEvent, ReasonCode, Stage
from pipeline_tracker.schemas.candidate import CandidateCreateRequest
from pipeline_tracker.services.transitions import (
    INITIAL_REASON_CODE,
    INITIAL_REASON_TEXT,
    INITIAL_STAGE,
    derive_status,
    normalize_reason_text,
)


def create(
    db: Session,
    organization_id: UUID,
    candidate_data: CandidateCreateRequest,
    actor_id: Optional[UUID] = None
) -> Candidate:
    """
    Add a candidate at the first stage together with its creation event.

    The creation event is the only event with from_stage = None.

    Args:
        db: Database session
        organization_id: Tenant the candidate belongs to
        candidate_data: Validated candidate form data
        actor_id: User creating the candidate (recorded as recruiter and mover)

    Returns:
        Created Candidate instance
    """
    db_candidate = Candidate(
        organization_id=organization_id,
        role_id=candidate_data.role_id,
        recruiter_id=actor_id,
        first_name=candidate_data.first_name,
        last_name=candidate_data.last_name,
        email=candidate_data.email,
        phone=candidate_data.phone,
        source=candidate_data.source,
        location=candidate_data.location,
        current_stage=INITIAL_STAGE,
        status=CandidateStatus.ACTIVE,
    )
    db.add(db_candidate)
    db.flush()  # Flush to get candidate.id for the event FK

    db.add(CandidateStageEvent(
        candidate_id=db_candidate.id,
        organization_id=organization_id,
        from_stage=None,
        to_stage=INITIAL_STAGE,
        action_type=ActionType.ADVANCE,
        reason_code=INITIAL_REASON_CODE,
        reason_text=INITIAL_REASON_TEXT,
        moved_by=actor_id,
    ))

    db.commit()
    db.refresh(db_candidate)

    return db_candidate


def get_by_id(db: Session, organization_id: UUID, candidate_id: UUID) -> Optional[Candidate]:
    """Retrieve a candidate, or None if it does not exist in this organization."""
    return db.query(Candidate).filter(
        Candidate.id == candidate_id,
        Candidate.organization_id == organization_id
    ).first()


def get_multi(
    db: Session,
    organization_id: UUID,
    stage: Optional[Stage] = None,
    status: Optional[CandidateStatus] = None,
    role_id: Optional[UUID] = None,
    sources: Optional[Sequence[str]] = None,
) -> List[Candidate]:
    """
    All candidates of an organization, newest first.

    No pagination: the board and analytics views need every row.
    """
    query = db.query(Candidate).filter(Candidate.organization_id == organization_id)

    if stage:
        query = query.filter(Candidate.current_stage == stage)
    if status:
        query = query.filter(Candidate.status == status)
    if role_id:
        query = query.filter(Candidate.role_id == role_id)
    if sources:
        query = query.filter(Candidate.source.in_(list(sources)))

    return query.order_by(Candidate.created_at.desc()).all()


def move_stage(
    db: Session,
    candidate: Candidate,
    to_stage: Stage,
    action_type: ActionType,
    reason_code: ReasonCode,
    reason_text: Optional[str] = None,
    actor_id: Optional[UUID] = None
) -> Tuple[Candidate, CandidateStageEvent]:
    """
    Move a candidate to another stage.

    1. Append an event from the candidate's current stage to to_stage
    2. Derive the new status from the action and target stage
    3. Rewrite current_stage and status on the candidate

    Any stage may be targeted whatever the current status, and repeating a
    move appends a duplicate event.

    Raises:
        ReasonTextRequired: reason_code is Other without text
    """
    event = CandidateStageEvent(
        candidate_id=candidate.id,
        organization_id=candidate.organization_id,
        from_stage=candidate.current_stage,
        to_stage=to_stage,
        action_type=action_type,
        reason_code=reason_code,
        reason_text=normalize_reason_text(reason_code, reason_text),
        moved_by=actor_id,
    )
    db.add(event)

    candidate.status = derive_status(candidate.status, action_type, to_stage)
    candidate.current_stage = to_stage

    db.commit()
    db.refresh(candidate)
    db.refresh(event)

    return candidate, event
