"""
Read operations for CandidateStageEvent.

Events are append-only; they are written by crud.candidate and never
updated or deleted, so this module only queries.
"""

from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID
from sqlalchemy.orm import Session
from pipeline_tracker.models.stage_event import ActionType, CandidateStageEvent


def get_for_candidate(db: Session, organization_id: UUID, candidate_id: UUID) -> List[CandidateStageEvent]:
    """Event history of one candidate, oldest first."""
    return (
        db.query(CandidateStageEvent)
        .filter(
            CandidateStageEvent.organization_id == organization_id,
            CandidateStageEvent.candidate_id == candidate_id
        )
        .order_by(CandidateStageEvent.moved_at)
        .all()
    )


def get_multi(
    db: Session,
    organization_id: UUID,
    action_types: Optional[Sequence[ActionType]] = None,
    since: Optional[datetime] = None
) -> List[CandidateStageEvent]:
    """
    All events of an organization, oldest first.

    Args:
        action_types: Keep only these action types (set membership)
        since: Keep only events moved at or after this instant
    """
    query = db.query(CandidateStageEvent).filter(
        CandidateStageEvent.organization_id == organization_id
    )

    if action_types:
        query = query.filter(CandidateStageEvent.action_type.in_(list(action_types)))
    if since is not None:
        query = query.filter(CandidateStageEvent.moved_at >= since)

    return query.order_by(CandidateStageEvent.moved_at).all()
