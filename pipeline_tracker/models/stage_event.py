"""
Candidate stage event model.

One row per stage transition. The table is append-only: events are written
when a candidate is created or moved and are never updated or deleted, so
the event history is the audit trail behind the candidate's current_stage.
"""

import enum
import uuid
from sqlalchemy import Column, Text, DateTime, Enum, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from pipeline_tracker.core.database import Base, enum_values
from pipeline_tracker.models.organization import utcnow


class Stage(str, enum.Enum):
    """Hiring pipeline stages, in pipeline order."""
    APPLICATION_SUBMITTED = "Application Submitted"
    RECRUITER_SCREENING = "Recruiter Screening"
    HIRING_MANAGER_REVIEW = "Hiring Manager Review"
    INTERVIEW_ROUND_1 = "Interview Round 1"
    INTERVIEW_ROUND_2 = "Interview Round 2"
    OFFER_EXTENDED = "Offer Extended"
    OFFER_ACCEPTED = "Offer Accepted"
    BACKGROUND_CHECK = "Background Check"
    JOINED = "Joined"


STAGES = list(Stage)


class ActionType(str, enum.Enum):
    """Classification of a transition."""
    ADVANCE = "advance"
    REJECT = "reject"
    WITHDRAW = "withdraw"


class ReasonCode(str, enum.Enum):
    """Closed list of reasons recorded with every transition."""
    COMPENSATION_MISMATCH = "Compensation mismatch"
    ROLE_MISMATCH = "Role mismatch"
    INTERVIEW_FEEDBACK = "Interview feedback"
    CANDIDATE_WITHDREW = "Candidate withdrew"
    GHOSTED = "Ghosted"
    FAILED_BACKGROUND_CHECK = "Failed background check"
    OTHER = "Other"


REASON_CODES = list(ReasonCode)


class CandidateStageEvent(Base):
    __tablename__ = "candidate_stage_events"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    candidate_id = Column(
        UUID(as_uuid=True),
        ForeignKey("candidates.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    from_stage = Column(Enum(Stage, name="pipelinestage", values_callable=enum_values), nullable=True)  # null only for the creation event
    to_stage = Column(Enum(Stage, name="pipelinestage", values_callable=enum_values), nullable=False, index=True)
    action_type = Column(Enum(ActionType, name="actiontype", values_callable=enum_values), nullable=False, index=True)
    reason_code = Column(Enum(ReasonCode, name="reasoncode", values_callable=enum_values), nullable=False)
    reason_text = Column(Text, nullable=True)  # only kept when reason_code is Other

    moved_by = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    moved_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    # No updated_at: events are immutable

    # Relationships
    candidate = relationship("Candidate", back_populates="events")

    def __repr__(self):
        return (
            f"<CandidateStageEvent(candidate_id={self.candidate_id}, "
            f"{self.from_stage} -> {self.to_stage}, action={self.action_type})>"
        )
