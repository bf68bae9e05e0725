"""
Stage transition rules.

Pure functions shared by the candidate CRUD layer and the request schemas.
No transition is forbidden: any stage may be targeted whatever the
candidate's current status.
"""

from typing import Optional

from pipeline_tracker.models.candidate import CandidateStatus
from pipeline_tracker.models.stage_event import ActionType, ReasonCode, Stage

INITIAL_STAGE = Stage.APPLICATION_SUBMITTED
INITIAL_REASON_CODE = ReasonCode.OTHER
INITIAL_REASON_TEXT = "Initial application"


class ReasonTextRequired(ValueError):
    """Raised when reason_code is Other but no free text was given."""


def derive_status(
    current_status: CandidateStatus,
    action_type: ActionType,
    to_stage: Stage
) -> CandidateStatus:
    """
    Compute the candidate status produced by a transition.

    reject and withdraw win over the target stage; advancing to Joined
    means hired; anything else keeps the current status.
    """
    if action_type == ActionType.REJECT:
        return CandidateStatus.REJECTED
    if action_type == ActionType.WITHDRAW:
        return CandidateStatus.WITHDRAWN
    if to_stage == Stage.JOINED:
        return CandidateStatus.HIRED
    return CandidateStatus(current_status) if current_status else CandidateStatus.ACTIVE


def normalize_reason_text(reason_code: ReasonCode, reason_text: Optional[str]) -> Optional[str]:
    """
    Return the reason text to persist.

    Text is required (after stripping) for Other and discarded for every
    other reason code.

    Raises:
        ReasonTextRequired: reason_code is Other and the text is empty
    """
    if reason_code != ReasonCode.OTHER:
        return None

    text = (reason_text or "").strip()
    if not text:
        raise ReasonTextRequired("reason_text is required when reason_code is 'Other'")
    return text
