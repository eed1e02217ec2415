"""
PAG objective catalog router.

Mounts under ``/api/objectives`` (prefix set in ``main.py``).

Endpoints
---------
GET  /       - List objectives (?level=national&sector=Santé), ordered by code.
POST /       - Add an objective to the catalog (government / partner).
GET  /{id}   - Single objective.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from sisag.database import get_db
from sisag.schemas.objective import ObjectiveCreate, ObjectiveLevel, ObjectiveResponse
from sisag.services import objective_service
from sisag.services.auth_service import EditorUser

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Objectifs PAG"])


@router.get(
    "",
    response_model=list[ObjectiveResponse],
    summary="Lister les objectifs PAG",
)
def get_objectives(
    db: Annotated[Session, Depends(get_db)],
    level: Annotated[
        ObjectiveLevel | None,
        Query(description="Niveau : national, provincial ou territorial."),
    ] = None,
    sector: Annotated[str | None, Query(description="Secteur (égalité exacte).")] = None,
) -> list[ObjectiveResponse]:
    logger.debug("GET /objectives level=%s sector=%s", level, sector)
    return objective_service.list_objectives(db, level=level, sector=sector)


@router.post(
    "",
    response_model=ObjectiveResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Créer un objectif PAG",
    responses={
        401: {"description": "Jeton absent ou invalide."},
        403: {"description": "Rôle insuffisant."},
        409: {"description": "Code déjà utilisé."},
    },
)
def post_objective(
    body: ObjectiveCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: EditorUser,
) -> ObjectiveResponse:
    logger.info("POST /objectives code=%s user=%s", body.code, current_user.id)
    return objective_service.create_objective(db, body)


@router.get(
    "/{objective_id}",
    response_model=ObjectiveResponse,
    summary="Détail d'un objectif PAG",
    responses={404: {"description": "Objectif introuvable."}},
)
def get_objective(
    objective_id: Annotated[int, Path(description="ID de l'objectif.", ge=1)],
    db: Annotated[Session, Depends(get_db)],
) -> ObjectiveResponse:
    return objective_service.get_objective_or_404(db, objective_id)
