"""
Alerts service layer.

Two alert families share this module:

1. **Planning alerts** (``create_planning_alert``, ``list_planning_alerts``):
   delay, blocked and budget-drift notices logged by hand against a
   project and optionally one of its phases.  The log is append-only.

2. **Global project alerts** (``create_alert``, ``list_alerts``,
   ``mark_alert_read``): the budget-overrun / delay / missed-milestone feed
   shown on the citizen dashboard.

Design notes
------------
- Nothing here derives alerts automatically from phase delays; alerts
  exist only when a government or partner user creates them.
- ``datetime.now(timezone.utc)`` is used for all timestamps.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from sisag.models.alert import Alert
from sisag.models.planning_alert import PlanningAlert
from sisag.schemas.alert import AlertCreate, PlanningAlertCreate
from sisag.services.phase_service import get_phase_or_404
from sisag.services.project_service import get_project_or_404
from sisag.utils.constants import ALERTS_LIST_LIMIT

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Planning alerts
# ---------------------------------------------------------------------------


def list_planning_alerts(db: Session, project_id: int | None = None) -> list[PlanningAlert]:
    """Return planning alerts, newest first.

    Args:
        db: Active SQLAlchemy session.
        project_id: If provided, restrict to one project.

    Returns:
        List of ``PlanningAlert`` rows.
    """
    q = db.query(PlanningAlert)
    if project_id is not None:
        q = q.filter(PlanningAlert.project_id == project_id)
    rows = q.order_by(PlanningAlert.created_at.desc(), PlanningAlert.id.desc()).all()
    logger.debug("list_planning_alerts: project_id=%s -> %d rows", project_id, len(rows))
    return rows


def create_planning_alert(
    db: Session, data: PlanningAlertCreate, created_by: str | None
) -> PlanningAlert:
    """Append a planning alert.

    Args:
        db: Active SQLAlchemy session.
        data: Validated payload (type and severity already checked).
        created_by: Identity-service id of the author.

    Returns:
        The stored ``PlanningAlert``.

    Raises:
        HTTPException 404: If the project does not exist, or if ``phase_id``
                           is given and is not a phase of that project.
    """
    get_project_or_404(db, data.project_id)
    if data.phase_id is not None:
        phase = get_phase_or_404(db, data.phase_id)
        if phase.project_id != data.project_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=(
                    f"Phase id={data.phase_id} introuvable pour le projet "
                    f"id={data.project_id}."
                ),
            )

    alert = PlanningAlert(
        project_id=data.project_id,
        phase_id=data.phase_id,
        type=data.type,
        severity=data.severity,
        message=data.message,
        created_by=created_by,
        created_at=datetime.now(timezone.utc),
    )
    db.add(alert)
    db.commit()
    db.refresh(alert)

    logger.info(
        "create_planning_alert: id=%d project_id=%d phase_id=%s type=%s severity=%s",
        alert.id, alert.project_id, alert.phase_id, alert.type, alert.severity,
    )
    return alert


# ---------------------------------------------------------------------------
# Global project alerts
# ---------------------------------------------------------------------------


def list_alerts(db: Session, limit: int = ALERTS_LIST_LIMIT) -> list[Alert]:
    """Return the most recent global alerts, newest first."""
    rows = (
        db.query(Alert)
        .order_by(Alert.created_at.desc(), Alert.id.desc())
        .limit(limit)
        .all()
    )
    logger.debug("list_alerts: %d rows", len(rows))
    return rows


def create_alert(db: Session, data: AlertCreate, user_id: str | None) -> Alert:
    """Create a global project alert.

    Raises:
        HTTPException 404: If the project does not exist.
    """
    get_project_or_404(db, data.project_id)
    alert = Alert(
        project_id=data.project_id,
        type=data.type,
        severity=data.severity,
        message=data.message,
        is_read=False,
        user_id=user_id,
        created_at=datetime.now(timezone.utc),
    )
    db.add(alert)
    db.commit()
    db.refresh(alert)
    logger.info(
        "create_alert: id=%d project_id=%d type=%s severity=%s",
        alert.id, alert.project_id, alert.type, alert.severity,
    )
    return alert


def mark_alert_read(db: Session, alert_id: int) -> Alert:
    """Mark a single global alert as read.

    Raises:
        HTTPException 404: If no alert with ``alert_id`` exists.
    """
    alert: Alert | None = db.query(Alert).filter(Alert.id == alert_id).first()
    if alert is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Alerte avec id={alert_id} introuvable.",
        )
    alert.is_read = True
    db.commit()
    db.refresh(alert)
    logger.debug("mark_alert_read: alert id=%d marked as read", alert_id)
    return alert
