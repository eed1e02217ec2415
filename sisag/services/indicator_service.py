"""
Dashboard indicators service layer.

The reductions below are pure functions over collections the caller has
already loaded (projects, alerts, planning alerts, phases, alignment
scores).  ``get_indicators`` is the only function that touches the
database: it loads those collections once and feeds them through the
reductions.

Design notes
------------
- Phase-delay and alignment rollups only look at the first
  ``sample_size`` projects (newest first).
- Top-N rankings keep first-encountered order among ties because
  ``sorted`` is stable and dicts preserve insertion order.
- Nothing is cached or persisted: every call recomputes from the tables.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Callable, Iterable, Sequence

from sqlalchemy.orm import Session

from sisag.models.alert import Alert
from sisag.models.planning_alert import PlanningAlert
from sisag.models.project import Project
from sisag.schemas.indicators import (
    AlignmentStats,
    BudgetVariance,
    IndicatorsResponse,
    MonthlyCount,
    RankedItem,
    RiskSummary,
    SeverityCounts,
)
from sisag.services import alignment_service, phase_service, project_service
from sisag.utils.constants import (
    ALERT_TREND_MONTHS,
    ALIGNED_SCORE_MIN,
    RISK_SEVERITIES,
    SEVERITIES,
    TOP_N,
)
from sisag.utils.rounding import round_half_up

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pure reductions
# ---------------------------------------------------------------------------


def budget_variance(projects: Iterable[Any]) -> BudgetVariance:
    """Compare total spending with total budget.

    Args:
        projects: Objects exposing ``budget`` and ``spent``.

    Returns:
        ``BudgetVariance``; ``variance_percent`` is 0 when the total budget is 0.
    """
    total_budget = 0.0
    total_spent = 0.0
    for p in projects:
        total_budget += float(p.budget or 0)
        total_spent += float(p.spent or 0)
    variance = total_spent - total_budget
    variance_percent = variance / total_budget * 100 if total_budget else 0.0
    return BudgetVariance(
        total_budget=round_half_up(total_budget, 2),
        total_spent=round_half_up(total_spent, 2),
        variance=round_half_up(variance, 2),
        variance_percent=round_half_up(variance_percent, 2),
    )


def severity_distribution(alerts: Iterable[Any]) -> SeverityCounts:
    counts = {level: 0 for level in SEVERITIES}
    for a in alerts:
        if a.severity in counts:
            counts[a.severity] += 1
    return SeverityCounts(**counts)


def at_risk_projects(
    projects: Sequence[Any],
    alerts: Iterable[Any],
    planning_alerts: Iterable[Any],
) -> RiskSummary:
    """Count projects targeted by at least one high or critical alert.

    Global and planning alerts are pooled; a project counts once however
    many alerts reference it.  Only projects of ``projects`` are counted.
    """
    risky_ids = {
        a.project_id
        for source in (alerts, planning_alerts)
        for a in source
        if a.severity in RISK_SEVERITIES
    }
    count = sum(1 for p in projects if p.id in risky_ids)
    rate = count / len(projects) * 100 if projects else 0.0
    return RiskSummary(count=count, rate=round_half_up(rate, 2))


def _trailing_months(today: date, months: int) -> list[str]:
    keys: list[str] = []
    year, month = today.year, today.month
    for _ in range(months):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


def monthly_alert_trend(
    alerts: Iterable[Any],
    planning_alerts: Iterable[Any],
    today: date | None = None,
    months: int = ALERT_TREND_MONTHS,
) -> list[MonthlyCount]:
    """Bucket global and planning alerts by calendar month.

    Args:
        alerts: Objects exposing ``created_at``.
        planning_alerts: Objects exposing ``created_at``.
        today: Reference day; the current month is the last bucket.
        months: Number of trailing months, current month included.

    Returns:
        One ``MonthlyCount`` per month, oldest first.  Alerts outside the
        window are ignored.
    """
    today = today or datetime.now(timezone.utc).date()
    buckets = {key: 0 for key in _trailing_months(today, months)}
    for source in (alerts, planning_alerts):
        for a in source:
            created: datetime | None = a.created_at
            if created is None:
                continue
            key = f"{created.year:04d}-{created.month:02d}"
            if key in buckets:
                buckets[key] += 1
    return [MonthlyCount(month=key, count=count) for key, count in buckets.items()]


def _top(totals: dict[str, float], n: int) -> list[RankedItem]:
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return [RankedItem(name=name, value=value) for name, value in ranked[:n]]


def top_by_count(projects: Iterable[Any], attr: str, n: int = TOP_N) -> list[RankedItem]:
    """Rank the values of ``attr`` (e.g. ``"sector"``) by number of projects."""
    totals: dict[str, float] = {}
    for p in projects:
        key = getattr(p, attr)
        totals[key] = totals.get(key, 0) + 1
    return _top(totals, n)


def top_by_sum(
    projects: Iterable[Any],
    attr: str,
    value: Callable[[Any], float],
    n: int = TOP_N,
) -> list[RankedItem]:
    """Rank the values of ``attr`` by the sum of ``value(project)``."""
    totals: dict[str, float] = {}
    for p in projects:
        key = getattr(p, attr)
        totals[key] = totals.get(key, 0.0) + float(value(p) or 0)
    return _top(totals, n)


def alignment_stats(scores: Sequence[float]) -> AlignmentStats:
    """Average alignment score and share of projects scoring >= 70."""
    count = len(scores)
    if count == 0:
        return AlignmentStats(count=0, avg_score=0.0, aligned_percent=0.0)
    aligned = sum(1 for s in scores if s >= ALIGNED_SCORE_MIN)
    return AlignmentStats(
        count=count,
        avg_score=round_half_up(sum(scores) / count, 2),
        aligned_percent=round_half_up(aligned / count * 100, 2),
    )


# ---------------------------------------------------------------------------
# Database-backed assembly
# ---------------------------------------------------------------------------


def get_indicators(
    db: Session,
    sample_size: int,
    today: date | None = None,
) -> IndicatorsResponse:
    """Build the full government-dashboard indicator payload.

    Args:
        db: Active SQLAlchemy session.
        sample_size: Number of newest projects used for phase and alignment
                     rollups.
        today: Reference day for the monthly trend (defaults to today).

    Returns:
        An ``IndicatorsResponse``.
    """
    projects: list[Project] = project_service.list_projects(db)
    alerts: list[Alert] = db.query(Alert).all()
    planning_alerts: list[PlanningAlert] = db.query(PlanningAlert).all()

    sample = projects[:sample_size]
    sample_ids = [p.id for p in sample]
    phases = phase_service.phases_for_projects(db, sample_ids)
    scores = [alignment_service.compute_alignment(db, pid).score for pid in sample_ids]

    logger.debug(
        "get_indicators: projects=%d alerts=%d planning_alerts=%d sample=%d phases=%d",
        len(projects), len(alerts), len(planning_alerts), len(sample), len(phases),
    )

    return IndicatorsResponse(
        project_count=len(projects),
        sample_size=len(sample),
        budget=budget_variance(projects),
        alert_severity=severity_distribution(alerts),
        planning_alert_severity=severity_distribution(planning_alerts),
        risk=at_risk_projects(projects, alerts, planning_alerts),
        monthly_alert_trend=monthly_alert_trend(alerts, planning_alerts, today),
        top_sectors=top_by_count(projects, "sector"),
        top_provinces=top_by_count(projects, "province"),
        top_sectors_by_spent=top_by_sum(projects, "sector", lambda p: p.spent),
        phase_delays=phase_service.phase_delay_stats(phases),
        alignment=alignment_stats(scores),
    )
