"""
Alerts routers.

Two routers live here:

- ``planning_router``, mounted under ``/api/planning-alerts``::

    GET  /?project_id=  - Planning alerts, newest first.
    POST /              - Log a planning alert (government / partner).

- ``router``, mounted under ``/api/alerts``::

    GET  /             - 50 most recent global alerts.
    POST /             - Create a global alert (government / partner).
    PUT  /{id}/read    - Mark an alert as read (government / partner).
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from sisag.database import get_db
from sisag.schemas.alert import (
    AlertCreate,
    AlertResponse,
    PlanningAlertCreate,
    PlanningAlertResponse,
)
from sisag.services import alert_service
from sisag.services.auth_service import EditorUser

logger = logging.getLogger(__name__)

planning_router = APIRouter(tags=["Alertes de planification"])
router = APIRouter(tags=["Alertes"])

_WRITE_RESPONSES = {
    401: {"description": "Jeton absent ou invalide."},
    403: {"description": "Rôle insuffisant."},
    404: {"description": "Projet ou phase introuvable."},
}


# ---------------------------------------------------------------------------
# Planning alerts
# ---------------------------------------------------------------------------


@planning_router.get(
    "",
    response_model=list[PlanningAlertResponse],
    summary="Lister les alertes de planification",
)
def get_planning_alerts(
    db: Annotated[Session, Depends(get_db)],
    project_id: Annotated[
        int | None, Query(description="Restreindre à un projet.", ge=1)
    ] = None,
) -> list[PlanningAlertResponse]:
    return alert_service.list_planning_alerts(db, project_id=project_id)


@planning_router.post(
    "",
    response_model=PlanningAlertResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Créer une alerte de planification",
    responses=_WRITE_RESPONSES,
)
def post_planning_alert(
    body: PlanningAlertCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: EditorUser,
) -> PlanningAlertResponse:
    logger.info(
        "POST /planning-alerts project_id=%d phase_id=%s user=%s",
        body.project_id, body.phase_id, current_user.id,
    )
    return alert_service.create_planning_alert(db, body, created_by=current_user.id)


# ---------------------------------------------------------------------------
# Global project alerts
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=list[AlertResponse],
    summary="Lister les alertes projet",
    description="Retourne les 50 alertes les plus récentes.",
)
def get_alerts(db: Annotated[Session, Depends(get_db)]) -> list[AlertResponse]:
    return alert_service.list_alerts(db)


@router.post(
    "",
    response_model=AlertResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Créer une alerte projet",
    responses=_WRITE_RESPONSES,
)
def post_alert(
    body: AlertCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: EditorUser,
) -> AlertResponse:
    return alert_service.create_alert(db, body, user_id=current_user.id)


@router.put(
    "/{alert_id}/read",
    response_model=AlertResponse,
    summary="Marquer une alerte comme lue",
    responses={404: {"description": "Alerte introuvable."}},
)
def put_alert_read(
    alert_id: Annotated[int, Path(description="ID de l'alerte.", ge=1)],
    db: Annotated[Session, Depends(get_db)],
    current_user: EditorUser,
) -> AlertResponse:
    logger.debug("PUT /alerts/%d/read user=%s", alert_id, current_user.id)
    return alert_service.mark_alert_read(db, alert_id)
