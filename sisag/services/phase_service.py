"""
Phase tracker service layer.

CRUD for project phases plus the delay/progress rules that every consumer
(phase list, indicators) derives on read.

Derived rules
-------------
- ``is_delayed``: status is ``blocked``, or ``actual_end`` is after
  ``planned_end`` (both present).
- ``delay_days``: ``actual_end - planned_end`` in whole days, only when
  positive; otherwise ``None``.
- ``progress_percent``: ``completed`` → 100, ``planned`` → 0.  Otherwise
  the elapsed share of the window from the effective start
  (``planned_start`` or ``actual_start``) to the effective end
  (``planned_end`` or ``actual_end``), clamped to [0, 100] and capped at 90
  for ``blocked``.  Without a usable window the progress is unknown: 50,
  or 0 for ``blocked``.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone
from typing import Any, Iterable

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from sisag.models.phase import Phase
from sisag.schemas.indicators import PhaseDelayStats
from sisag.schemas.phase import PhaseCreate, PhaseMetrics, PhaseResponse, PhaseUpdate
from sisag.services.project_service import get_project_or_404
from sisag.utils.constants import PROGRESS_BLOCKED_CAP, PROGRESS_UNKNOWN
from sisag.utils.rounding import clamp, round_half_up

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Derived metrics (pure)
# ---------------------------------------------------------------------------


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def is_delayed(phase: Any) -> bool:
    if phase.status == "blocked":
        return True
    if phase.actual_end is not None and phase.planned_end is not None:
        return phase.actual_end > phase.planned_end
    return False


def delay_days(phase: Any) -> int | None:
    if phase.actual_end is None or phase.planned_end is None:
        return None
    days = (phase.actual_end - phase.planned_end).days
    return days if days > 0 else None


def progress_percent(phase: Any, now: datetime | None = None) -> float:
    """Estimate how far through its window a phase is.

    Args:
        phase: Any object exposing ``status`` and the four date attributes.
        now: Reference instant; defaults to the current UTC time.

    Returns:
        Progress between 0 and 100.
    """
    if phase.status == "completed":
        return 100.0
    if phase.status == "planned":
        return 0.0

    start = phase.planned_start or phase.actual_start
    end = phase.planned_end or phase.actual_end
    if start is None or end is None or _as_datetime(end) <= _as_datetime(start):
        return 0.0 if phase.status == "blocked" else PROGRESS_UNKNOWN

    now = now or datetime.now(timezone.utc)
    start_dt, end_dt = _as_datetime(start), _as_datetime(end)
    elapsed = (now - start_dt).total_seconds() / (end_dt - start_dt).total_seconds()
    pct = clamp(elapsed * 100, 0.0, 100.0)
    if phase.status == "blocked":
        pct = min(pct, PROGRESS_BLOCKED_CAP)
    return round_half_up(pct, 2)


def compute_metrics(phase: Any, now: datetime | None = None) -> PhaseMetrics:
    return PhaseMetrics(
        is_delayed=is_delayed(phase),
        delay_days=delay_days(phase),
        progress_percent=progress_percent(phase, now),
    )


def phase_delay_stats(phases: Iterable[Any]) -> PhaseDelayStats:
    """Share of delayed phases in a collection (0 when it is empty)."""
    total = 0
    delayed = 0
    for phase in phases:
        total += 1
        if is_delayed(phase):
            delayed += 1
    rate = round_half_up(delayed / total * 100, 2) if total else 0.0
    return PhaseDelayStats(total=total, delayed=delayed, rate=rate)


def to_response(phase: Phase, now: datetime | None = None) -> PhaseResponse:
    return PhaseResponse(
        id=phase.id,
        project_id=phase.project_id,
        name=phase.name,
        status=phase.status,
        planned_start=phase.planned_start,
        planned_end=phase.planned_end,
        actual_start=phase.actual_start,
        actual_end=phase.actual_end,
        deliverables=phase.deliverables or [],
        created_at=phase.created_at,
        updated_at=phase.updated_at,
        metrics=compute_metrics(phase, now),
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _check_date_order(
    planned_start: date | None,
    planned_end: date | None,
    actual_start: date | None,
    actual_end: date | None,
) -> None:
    """Reject inverted planned or actual windows.

    Raises:
        HTTPException 400: If an end date precedes its start date.
    """
    if planned_start and planned_end and planned_end < planned_start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="La fin prévue ne peut pas précéder le début prévu.",
        )
    if actual_start and actual_end and actual_end < actual_start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="La fin réelle ne peut pas précéder le début réel.",
        )


def get_phase_or_404(db: Session, phase_id: int) -> Phase:
    phase: Phase | None = db.query(Phase).filter(Phase.id == phase_id).first()
    if phase is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Phase avec id={phase_id} introuvable.",
        )
    return phase


def phases_for_projects(db: Session, project_ids: list[int]) -> list[Phase]:
    """Return the phases of several projects in one query."""
    if not project_ids:
        return []
    return (
        db.query(Phase)
        .filter(Phase.project_id.in_(project_ids))
        .order_by(Phase.created_at.asc(), Phase.id.asc())
        .all()
    )


# ---------------------------------------------------------------------------
# Public CRUD functions
# ---------------------------------------------------------------------------


def list_phases(db: Session, project_id: int) -> list[PhaseResponse]:
    """Return a project's phases in creation order, with derived metrics.

    Raises:
        HTTPException 404: If the project does not exist.
    """
    get_project_or_404(db, project_id)
    phases = phases_for_projects(db, [project_id])
    now = datetime.now(timezone.utc)
    logger.debug("list_phases: project_id=%d -> %d phases", project_id, len(phases))
    return [to_response(p, now) for p in phases]


def create_phase(db: Session, project_id: int, data: PhaseCreate) -> PhaseResponse:
    """Create a phase for a project.

    Raises:
        HTTPException 404: If the project does not exist.
        HTTPException 400: If a date window is inverted.
    """
    get_project_or_404(db, project_id)
    _check_date_order(data.planned_start, data.planned_end, data.actual_start, data.actual_end)

    payload = data.model_dump()
    phase = Phase(project_id=project_id, **payload)
    db.add(phase)
    db.commit()
    db.refresh(phase)

    logger.info(
        "create_phase: id=%d project_id=%d status=%s", phase.id, project_id, phase.status
    )
    return to_response(phase)


def update_phase(db: Session, phase_id: int, data: PhaseUpdate) -> PhaseResponse:
    """Apply a partial update to a phase.

    Only fields present in the request body are written; any status
    transition is allowed.

    Raises:
        HTTPException 404: If the phase does not exist.
        HTTPException 400: If the resulting date windows are inverted or the
                           name is cleared.
    """
    phase = get_phase_or_404(db, phase_id)
    update_data = data.model_dump(exclude_unset=True)

    if "name" in update_data and update_data["name"] is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Le nom de la phase est obligatoire.",
        )
    if "status" in update_data and update_data["status"] is None:
        del update_data["status"]
    if "deliverables" in update_data and update_data["deliverables"] is None:
        update_data["deliverables"] = []

    _check_date_order(
        update_data.get("planned_start", phase.planned_start),
        update_data.get("planned_end", phase.planned_end),
        update_data.get("actual_start", phase.actual_start),
        update_data.get("actual_end", phase.actual_end),
    )

    for field, value in update_data.items():
        setattr(phase, field, value)

    db.commit()
    db.refresh(phase)
    logger.info("update_phase: id=%d fields=%s", phase_id, list(update_data.keys()))
    return to_response(phase)


def delete_phase(db: Session, phase_id: int) -> None:
    """Delete a phase; planning alerts pointing at it keep their project link.

    Raises:
        HTTPException 404: If the phase does not exist.
    """
    phase = get_phase_or_404(db, phase_id)
    for alert in phase.planning_alerts:
        alert.phase_id = None
    db.delete(phase)
    db.commit()
    logger.info("delete_phase: id=%d", phase_id)
