"""
Unit tests for stage transition rules.

Tests cover:
- Status derivation
- Reason text normalization
- Move request validation
"""

import pytest
from pydantic import ValidationError

from pipeline_tracker.models import ActionType, CandidateStatus, ReasonCode, Stage, STAGES
from pipeline_tracker.schemas.candidate import StageMoveRequest
from pipeline_tracker.services.transitions import ReasonTextRequired, derive_status, normalize_reason_text


class TestDeriveStatus:
    """Tests for status derivation"""

    @pytest.mark.parametrize("to_stage", STAGES)
    def test_reject_always_rejected(self, to_stage):
        """reject wins over the target stage, Joined included"""
        assert derive_status(CandidateStatus.ACTIVE, ActionType.REJECT, to_stage) == CandidateStatus.REJECTED

    @pytest.mark.parametrize("to_stage", STAGES)
    def test_withdraw_always_withdrawn(self, to_stage):
        assert derive_status(CandidateStatus.ACTIVE, ActionType.WITHDRAW, to_stage) == CandidateStatus.WITHDRAWN

    def test_advance_to_joined_is_hired(self):
        assert derive_status(CandidateStatus.ACTIVE, ActionType.ADVANCE, Stage.JOINED) == CandidateStatus.HIRED

    def test_advance_keeps_current_status(self):
        assert derive_status(CandidateStatus.ACTIVE, ActionType.ADVANCE, Stage.INTERVIEW_ROUND_1) == CandidateStatus.ACTIVE

    def test_advance_does_not_revive_rejected_candidate(self):
        """No transition is forbidden, but status only changes on reject/withdraw/Joined"""
        status = derive_status(CandidateStatus.REJECTED, ActionType.ADVANCE, Stage.OFFER_EXTENDED)
        assert status == CandidateStatus.REJECTED

    def test_rejected_candidate_advanced_to_joined_is_hired(self):
        assert derive_status(CandidateStatus.REJECTED, ActionType.ADVANCE, Stage.JOINED) == CandidateStatus.HIRED

    def test_accepts_plain_string_values(self):
        assert derive_status("active", "reject", "Joined") == CandidateStatus.REJECTED
        assert derive_status("active", "advance", "Joined") == CandidateStatus.HIRED


class TestReasonText:
    """Tests for reason text normalization"""

    def test_other_requires_text(self):
        with pytest.raises(ReasonTextRequired):
            normalize_reason_text(ReasonCode.OTHER, None)

    def test_other_rejects_blank_text(self):
        with pytest.raises(ReasonTextRequired):
            normalize_reason_text(ReasonCode.OTHER, "   ")

    def test_other_keeps_stripped_text(self):
        assert normalize_reason_text(ReasonCode.OTHER, "  relocating abroad ") == "relocating abroad"

    @pytest.mark.parametrize("code", [c for c in ReasonCode if c != ReasonCode.OTHER])
    def test_text_discarded_for_other_codes(self, code):
        assert normalize_reason_text(code, "some explanation") is None


class TestStageMoveRequest:
    """Tests for move request validation"""

    def test_defaults_to_advance(self):
        request = StageMoveRequest(to_stage="Recruiter Screening", reason_code="Interview feedback")
        assert request.action_type == ActionType.ADVANCE
        assert request.to_stage == Stage.RECRUITER_SCREENING

    def test_reason_text_dropped_when_not_other(self):
        request = StageMoveRequest(
            to_stage="Recruiter Screening",
            reason_code="Role mismatch",
            reason_text="ignored"
        )
        assert request.reason_text is None

    def test_other_without_text_invalid(self):
        with pytest.raises(ValidationError):
            StageMoveRequest(to_stage="Joined", reason_code="Other")

    def test_unknown_stage_invalid(self):
        with pytest.raises(ValidationError):
            StageMoveRequest(to_stage="Phone Screen", reason_code="Ghosted")

    def test_unknown_reason_code_invalid(self):
        with pytest.raises(ValidationError):
            StageMoveRequest(to_stage="Joined", reason_code="Too expensive")
