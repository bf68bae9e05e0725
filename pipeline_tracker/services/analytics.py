"""
Aggregation views over flat row lists.

Every function here is a pure fold: it takes ORM rows (or any objects with
the same attributes), recomputes from scratch and returns plain dicts ready
for the response schemas. Nothing is cached.
"""

from collections import Counter, defaultdict
from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pipeline_tracker.models.candidate import CandidateStatus
from pipeline_tracker.models.stage_event import ActionType, Stage, STAGES, REASON_CODES

DROPOFF_ACTIONS = (ActionType.REJECT, ActionType.WITHDRAW)
SECONDS_PER_DAY = 86400


def round_half_up(value: float, places: int = 0) -> float:
    """Round like a spreadsheet (2.5 -> 3), not banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def hire_rate(hired: int, total: int) -> int:
    """Percentage of hired candidates, 0 when there are none."""
    if total <= 0:
        return 0
    return int(round_half_up(hired / total * 100))


def funnel_counts(events: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Count events per target stage.

    Counts occurrences, not distinct candidates: a candidate that entered a
    stage twice is counted twice, so the counts sum to len(events).
    """
    counts = Counter(Stage(event.to_stage) for event in events)
    return [
        {"stage": stage.value, "count": counts[stage]}
        for stage in STAGES
        if counts[stage]
    ]


def dropoff_reasons(events: Iterable[Any]) -> List[Dict[str, Any]]:
    """Count reject/withdraw events per reason code."""
    counts = Counter(
        event.reason_code
        for event in events
        if event.action_type in DROPOFF_ACTIONS
    )
    return [
        {"reason": code.value, "count": counts[code]}
        for code in REASON_CODES
        if counts[code]
    ]


def source_performance(candidates: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Total and hired candidates per source, with hire rate in percent.

    Candidates without a source are left out.
    """
    stats: Dict[str, Dict[str, int]] = defaultdict(lambda: {"total": 0, "hired": 0})
    for candidate in candidates:
        if not candidate.source:
            continue
        entry = stats[candidate.source]
        entry["total"] += 1
        if candidate.status == CandidateStatus.HIRED:
            entry["hired"] += 1

    return [
        {
            "source": source,
            "total": entry["total"],
            "hired": entry["hired"],
            "rate": hire_rate(entry["hired"], entry["total"]),
        }
        for source, entry in sorted(stats.items())
    ]


def time_in_stage(events: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Average days spent per stage.

    A stay in stage S starts at an event whose to_stage is S and ends at the
    same candidate's next event. Open stays (the candidate is still there)
    are not counted.
    """
    by_candidate: Dict[Any, List[Any]] = defaultdict(list)
    for event in events:
        by_candidate[event.candidate_id].append(event)

    durations: Dict[Stage, List[float]] = defaultdict(list)
    for history in by_candidate.values():
        history.sort(key=lambda e: e.moved_at)
        for entered, left in zip(history, history[1:]):
            seconds = (left.moved_at - entered.moved_at).total_seconds()
            durations[Stage(entered.to_stage)].append(seconds / SECONDS_PER_DAY)

    return [
        {
            "stage": stage.value,
            "avg_days": round_half_up(sum(durations[stage]) / len(durations[stage]), 1),
            "samples": len(durations[stage]),
        }
        for stage in STAGES
        if durations[stage]
    ]


def stage_board(candidates: Sequence[Any]) -> List[Dict[str, Any]]:
    """
    Kanban columns for every stage in pipeline order.

    Candidates keep their input order inside a column.
    """
    columns: Dict[Stage, List[Any]] = {stage: [] for stage in STAGES}
    for candidate in candidates:
        columns[Stage(candidate.current_stage)].append(candidate)

    return [
        {"stage": stage.value, "count": len(columns[stage]), "candidates": columns[stage]}
        for stage in STAGES
    ]


def activity_cutoff(days: int, now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now - timedelta(days=days)


def dashboard_summary(candidates: Sequence[Any], recent_events: Sequence[Any]) -> Dict[str, int]:
    """Headline numbers for the dashboard; recent_events is pre-filtered by the caller."""
    return {
        "total_candidates": len(candidates),
        "active_candidates": sum(1 for c in candidates if c.status == CandidateStatus.ACTIVE),
        "hired_candidates": sum(1 for c in candidates if c.status == CandidateStatus.HIRED),
        "recent_activity": len(recent_events),
    }
