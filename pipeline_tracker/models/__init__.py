"""
Database models package.
"""

from pipeline_tracker.models.organization import Organization
from pipeline_tracker.models.user import User, UserRole
from pipeline_tracker.models.role import Role
from pipeline_tracker.models.stage_event import (
    CandidateStageEvent,
    Stage,
    STAGES,
    ActionType,
    ReasonCode,
    REASON_CODES,
)
from pipeline_tracker.models.candidate import Candidate, CandidateStatus

__all__ = [
    "Organization",
    "User",
    "UserRole",
    "Role",
    "Candidate",
    "CandidateStatus",
    "CandidateStageEvent",
    "Stage",
    "STAGES",
    "ActionType",
    "ReasonCode",
    "REASON_CODES",
]
