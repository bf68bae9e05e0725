"""
Pydantic schemas for Candidate API requests/responses.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, EmailStr, UUID4, field_validator, model_validator

from pipeline_tracker.models.candidate import CandidateStatus
from pipeline_tracker.models.stage_event import ActionType, ReasonCode, Stage
from pipeline_tracker.services.transitions import normalize_reason_text


class CandidateBase(BaseModel):
    """Base candidate schema with common fields."""
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    source: Optional[str] = Field(None, max_length=100, description="e.g. LinkedIn, Referral")
    location: Optional[str] = Field(None, max_length=200, description="e.g. San Francisco, CA")


class CandidateCreateRequest(CandidateBase):
    """Form payload for adding a candidate to the pipeline."""
    role_id: Optional[UUID4] = None

    @field_validator("email", "phone", "source", "location", "role_id", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Forms submit empty strings for untouched optional fields and padded text."""
        if isinstance(v, str):
            return v.strip() or None
        return v


class CandidateResponse(CandidateBase):
    id: UUID4
    organization_id: UUID4
    role_id: Optional[UUID4] = None
    recruiter_id: Optional[UUID4] = None
    email: Optional[str] = None
    current_stage: Stage
    status: CandidateStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StageMoveRequest(BaseModel):
    """
    Request to move a candidate to another stage.

    reason_text is required when reason_code is Other and dropped otherwise.
    """
    to_stage: Stage
    action_type: ActionType = ActionType.ADVANCE
    reason_code: ReasonCode
    reason_text: Optional[str] = Field(None, max_length=2000)

    @model_validator(mode="after")
    def apply_reason_text_rule(self) -> "StageMoveRequest":
        self.reason_text = normalize_reason_text(self.reason_code, self.reason_text)
        return self


class StageEventResponse(BaseModel):
    id: UUID4
    candidate_id: UUID4
    organization_id: UUID4
    from_stage: Optional[Stage] = None
    to_stage: Stage
    action_type: ActionType
    reason_code: ReasonCode
    reason_text: Optional[str] = None
    moved_by: Optional[UUID4] = None
    moved_at: datetime

    class Config:
        from_attributes = True


class StageMoveResponse(BaseModel):
    candidate: CandidateResponse
    event: StageEventResponse


class BoardColumn(BaseModel):
    stage: Stage
    count: int
    candidates: List[CandidateResponse]


class BoardResponse(BaseModel):
    columns: List[BoardColumn]
