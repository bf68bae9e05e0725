"""
Candidate database model.

A candidate moving through the hiring pipeline. current_stage and status are
a denormalized projection of the latest stage event, rewritten in place on
every move.
"""

import enum
import uuid
from sqlalchemy import Column, String, DateTime, Enum, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from pipeline_tracker.core.database import Base, enum_values
from pipeline_tracker.models.organization import utcnow
from pipeline_tracker.models.stage_event import Stage


class CandidateStatus(str, enum.Enum):
    """
    Candidate status lifecycle:

    ACTIVE -> HIRED       (advanced to Joined)
           -> REJECTED    (reject action)
           -> WITHDRAWN   (withdraw action)
    """
    ACTIVE = "active"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"
    HIRED = "hired"


class Candidate(Base):
    __tablename__ = "candidates"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    role_id = Column(UUID(as_uuid=True), ForeignKey("roles.id", ondelete="SET NULL"), nullable=True, index=True)
    recruiter_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Candidate Metadata
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    source = Column(String, nullable=True, index=True)  # e.g. LinkedIn, Referral
    location = Column(String, nullable=True)

    # Pipeline position
    current_stage = Column(
        Enum(Stage, name="pipelinestage", values_callable=enum_values),
        default=Stage.APPLICATION_SUBMITTED,
        nullable=False,
        index=True
    )
    status = Column(
        Enum(CandidateStatus, name="candidatestatus", values_callable=enum_values),
        default=CandidateStatus.ACTIVE,
        nullable=False,
        index=True
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    # Relationships
    role = relationship("Role", back_populates="candidates")
    events = relationship(
        "CandidateStageEvent",
        back_populates="candidate",
        order_by="CandidateStageEvent.moved_at",
        cascade="all, delete-orphan"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self):
        return f"<Candidate(id={self.id}, name='{self.full_name}', stage='{self.current_stage}', status={self.status})>"
