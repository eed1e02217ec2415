"""
Phase tracker router.

Mounts under ``/api`` (prefix set in ``main.py``) because phases are listed
and created under their project but edited by their own id.

Endpoints
---------
GET    /projects/{id}/phases - Phases of a project with delay/progress metrics.
POST   /projects/{id}/phases - Create a phase (government / partner).
PUT    /phases/{phase_id}    - Partial update (government / partner).
DELETE /phases/{phase_id}    - Delete a phase (government / partner).
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from sisag.database import get_db
from sisag.schemas.common import MessageResponse
from sisag.schemas.phase import PhaseCreate, PhaseResponse, PhaseUpdate
from sisag.services import phase_service
from sisag.services.auth_service import EditorUser

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Phases"])

PhaseId = Annotated[int, Path(description="ID de la phase.", ge=1)]


@router.get(
    "/projects/{project_id}/phases",
    response_model=list[PhaseResponse],
    summary="Lister les phases d'un projet",
    responses={404: {"description": "Projet introuvable."}},
)
def get_phases(
    project_id: Annotated[int, Path(description="ID du projet.", ge=1)],
    db: Annotated[Session, Depends(get_db)],
) -> list[PhaseResponse]:
    return phase_service.list_phases(db, project_id)


@router.post(
    "/projects/{project_id}/phases",
    response_model=PhaseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Créer une phase",
    responses={
        400: {"description": "Dates incohérentes."},
        401: {"description": "Jeton absent ou invalide."},
        403: {"description": "Rôle insuffisant."},
        404: {"description": "Projet introuvable."},
    },
)
def post_phase(
    project_id: Annotated[int, Path(description="ID du projet.", ge=1)],
    body: PhaseCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: EditorUser,
) -> PhaseResponse:
    logger.info("POST /projects/%d/phases name=%r user=%s", project_id, body.name, current_user.id)
    return phase_service.create_phase(db, project_id, body)


@router.put(
    "/phases/{phase_id}",
    response_model=PhaseResponse,
    summary="Modifier une phase",
    responses={
        400: {"description": "Dates incohérentes ou nom vide."},
        404: {"description": "Phase introuvable."},
    },
)
def put_phase(
    phase_id: PhaseId,
    body: PhaseUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: EditorUser,
) -> PhaseResponse:
    return phase_service.update_phase(db, phase_id, body)


@router.delete(
    "/phases/{phase_id}",
    response_model=MessageResponse,
    summary="Supprimer une phase",
    responses={404: {"description": "Phase introuvable."}},
)
def delete_phase(
    phase_id: PhaseId,
    db: Annotated[Session, Depends(get_db)],
    current_user: EditorUser,
) -> MessageResponse:
    phase_service.delete_phase(db, phase_id)
    return MessageResponse(message=f"Phase id={phase_id} supprimée.")
