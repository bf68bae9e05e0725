"""
Analytics and dashboard endpoints.

Every view loads the organization's rows in one query and folds them in
memory with the functions in services.analytics. Nothing is cached, so each
request reflects the latest writes.
"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pipeline_tracker.core.config import settings
from pipeline_tracker.core.database import get_db
from pipeline_tracker.core.deps import get_organization_id
from pipeline_tracker.crud import candidate as candidate_crud
from pipeline_tracker.crud import stage_event as stage_event_crud
from pipeline_tracker.schemas.analytics import (
    AnalyticsResponse,
    DashboardStatsResponse,
    DropoffReason,
    FunnelStage,
    SourcePerformance,
    StageDuration,
)
from pipeline_tracker.services import analytics
from pipeline_tracker.services.analytics import DROPOFF_ACTIONS

router = APIRouter(tags=["Analytics"])


@router.get("/analytics", response_model=AnalyticsResponse)
def get_analytics(
    organization_id: UUID = Depends(get_organization_id),
    db: Session = Depends(get_db)
):
    """All analytics views at once (what the analytics page renders)."""
    events = stage_event_crud.get_multi(db, organization_id)
    candidates = candidate_crud.get_multi(db, organization_id)

    return {
        "funnel": analytics.funnel_counts(events),
        "dropoffs": analytics.dropoff_reasons(events),
        "sources": analytics.source_performance(candidates),
        "time_in_stage": analytics.time_in_stage(events),
    }


@router.get("/analytics/funnel", response_model=List[FunnelStage])
def get_funnel(
    organization_id: UUID = Depends(get_organization_id),
    db: Session = Depends(get_db)
):
    """
    Events per target stage, in pipeline order.

    Counts entries into a stage, not distinct candidates.
    """
    return analytics.funnel_counts(stage_event_crud.get_multi(db, organization_id))


@router.get("/analytics/dropoffs", response_model=List[DropoffReason])
def get_dropoffs(
    organization_id: UUID = Depends(get_organization_id),
    db: Session = Depends(get_db)
):
    """Reject and withdraw events per reason code."""
    events = stage_event_crud.get_multi(db, organization_id, action_types=DROPOFF_ACTIONS)
    return analytics.dropoff_reasons(events)


@router.get("/analytics/sources", response_model=List[SourcePerformance])
def get_source_performance(
    organization_id: UUID = Depends(get_organization_id),
    db: Session = Depends(get_db)
):
    """Candidates and hires per source with hire rate (percent)."""
    return analytics.source_performance(candidate_crud.get_multi(db, organization_id))


@router.get("/analytics/time-in-stage", response_model=List[StageDuration])
def get_time_in_stage(
    organization_id: UUID = Depends(get_organization_id),
    db: Session = Depends(get_db)
):
    """Average days per stage over completed stays."""
    return analytics.time_in_stage(stage_event_crud.get_multi(db, organization_id))


@router.get("/dashboard/stats", response_model=DashboardStatsResponse)
def get_dashboard_stats(
    organization_id: UUID = Depends(get_organization_id),
    db: Session = Depends(get_db)
):
    """Headline numbers: total, active and hired candidates, recent activity."""
    days = settings.RECENT_ACTIVITY_DAYS
    candidates = candidate_crud.get_multi(db, organization_id)
    recent_events = stage_event_crud.get_multi(
        db,
        organization_id,
        since=analytics.activity_cutoff(days)
    )

    summary = analytics.dashboard_summary(candidates, recent_events)
    summary["recent_activity_days"] = days
    return summary
