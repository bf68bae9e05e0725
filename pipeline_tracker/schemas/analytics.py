from typing import List
from pydantic import BaseModel, Field


class FunnelStage(BaseModel):
    stage: str
    count: int = Field(..., description="Number of events entering this stage (not distinct candidates)")


class DropoffReason(BaseModel):
    reason: str
    count: int


class SourcePerformance(BaseModel):
    source: str
    total: int
    hired: int
    rate: int = Field(..., ge=0, le=100, description="Hire rate in percent, rounded")


class StageDuration(BaseModel):
    stage: str
    avg_days: float
    samples: int = Field(..., description="Number of completed stays averaged")


class AnalyticsResponse(BaseModel):
    """All analytics views computed in one request."""
    funnel: List[FunnelStage]
    dropoffs: List[DropoffReason]
    sources: List[SourcePerformance]
    time_in_stage: List[StageDuration]


class DashboardStatsResponse(BaseModel):
    total_candidates: int
    active_candidates: int
    hired_candidates: int
    recent_activity: int
    recent_activity_days: int
