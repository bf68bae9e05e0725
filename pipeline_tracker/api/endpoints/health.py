"""
Health check and monitoring endpoints.

Liveness, readiness of the database (including the event history table the
board and analytics depend on) and pipeline-wide row counts.
"""

import logging
from typing import Dict, Any
from fastapi import APIRouter, Depends, status
from sqlalchemy import func, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from datetime import datetime, timezone

from pipeline_tracker.core.database import get_db
from pipeline_tracker.models import Candidate, CandidateStageEvent, Organization, User

router = APIRouter(tags=["Health"])
logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _check(db: Session, name: str, statement: str) -> Dict[str, str]:
    try:
        db.execute(text(statement))
        return {"status": "healthy", "message": f"{name} reachable"}
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{name} health check failed: {e}")
        return {"status": "unhealthy", "message": f"{name} error: {str(e)}"}


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> Dict[str, str]:
    """Liveness probe: 200 while the process is serving."""
    return {"status": "healthy", "timestamp": _now()}


@router.get("/health/detailed", status_code=status.HTTP_200_OK)
def detailed_health_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Readiness with per-dependency status.

    Checks:
    - database: the connection answers
    - stage_events: the candidate_stage_events table is queryable

    The overall status is "unhealthy" when any check fails.
    """
    checks = {
        "database": _check(db, "Database", "SELECT 1"),
        "stage_events": _check(db, "Stage event history", "SELECT 1 FROM candidate_stage_events LIMIT 1"),
    }
    healthy = all(check["status"] == "healthy" for check in checks.values())

    return {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": _now(),
        "checks": checks,
    }


@router.get("/metrics", status_code=status.HTTP_200_OK)
def get_metrics(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Pipeline-wide counts across all organizations.

    Candidates are broken down by status and by current stage.
    """
    try:
        by_status = dict(
            db.query(Candidate.status, func.count(Candidate.id)).group_by(Candidate.status).all()
        )
        by_stage = dict(
            db.query(Candidate.current_stage, func.count(Candidate.id)).group_by(Candidate.current_stage).all()
        )

        return {
            "timestamp": _now(),
            "metrics": {
                "total_organizations": db.query(func.count(Organization.id)).scalar() or 0,
                "total_users": db.query(func.count(User.id)).scalar() or 0,
                "total_candidates": db.query(func.count(Candidate.id)).scalar() or 0,
                "total_stage_events": db.query(func.count(CandidateStageEvent.id)).scalar() or 0,
                "candidates_by_status": {s.value: n for s, n in by_status.items()},
                "candidates_by_stage": {s.value: n for s, n in by_stage.items()},
            }
        }
    except SQLAlchemyError as e:
        logger.error(f"Failed to retrieve metrics: {e}")
        return {
            "error": "Failed to retrieve metrics",
            "message": str(e)
        }
