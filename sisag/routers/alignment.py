"""
PAG alignment router.

Mounts under ``/api/projects`` (prefix set in ``main.py``).

Endpoints
---------
GET    /{id}/alignment                   - Score, linked objectives, redundancy, suggestions.
POST   /{id}/objectives                  - Link an objective with a weight (upsert).
PUT    /{id}/objectives/{objective_id}   - Change the weight of a link (upsert).
DELETE /{id}/objectives/{objective_id}   - Remove a link.

Weights outside [1, 5] are clamped, not rejected.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from sisag.database import get_db
from sisag.schemas.alignment import (
    AlignmentResult,
    LinkObjectiveRequest,
    ProjectObjectiveResponse,
    UpdateWeightRequest,
)
from sisag.schemas.common import MessageResponse
from sisag.services import alignment_service
from sisag.services.auth_service import EditorUser

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Alignement PAG"])

ProjectId = Annotated[int, Path(description="ID du projet.", ge=1)]
ObjectiveId = Annotated[int, Path(description="ID de l'objectif PAG.", ge=1)]


@router.get(
    "/{project_id}/alignment",
    response_model=AlignmentResult,
    summary="Alignement d'un projet avec le PAG",
    description=(
        "Score 0-100 = somme des poids / (nombre de liens x 5) x 100, arrondi. "
        "Inclut le nombre de projets similaires (même province et même secteur) "
        "et jusqu'à cinq objectifs du même secteur non encore liés."
    ),
    responses={404: {"description": "Projet introuvable."}},
)
def get_alignment(
    project_id: ProjectId,
    db: Annotated[Session, Depends(get_db)],
) -> AlignmentResult:
    return alignment_service.compute_alignment(db, project_id)


@router.post(
    "/{project_id}/objectives",
    response_model=ProjectObjectiveResponse,
    summary="Lier un objectif PAG au projet",
    responses={
        401: {"description": "Jeton absent ou invalide."},
        403: {"description": "Rôle insuffisant."},
        404: {"description": "Projet ou objectif introuvable."},
    },
)
def post_objective_link(
    project_id: ProjectId,
    body: LinkObjectiveRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: EditorUser,
) -> ProjectObjectiveResponse:
    logger.info(
        "POST /projects/%d/objectives objective_id=%d weight=%d user=%s",
        project_id, body.objective_id, body.weight, current_user.id,
    )
    return alignment_service.link_objective(db, project_id, body.objective_id, body.weight)


@router.put(
    "/{project_id}/objectives/{objective_id}",
    response_model=ProjectObjectiveResponse,
    summary="Modifier le poids d'un objectif lié",
)
def put_objective_link(
    project_id: ProjectId,
    objective_id: ObjectiveId,
    body: UpdateWeightRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: EditorUser,
) -> ProjectObjectiveResponse:
    return alignment_service.update_link_weight(db, project_id, objective_id, body.weight)


@router.delete(
    "/{project_id}/objectives/{objective_id}",
    response_model=MessageResponse,
    summary="Retirer un objectif lié",
    responses={404: {"description": "Lien introuvable."}},
)
def delete_objective_link(
    project_id: ProjectId,
    objective_id: ObjectiveId,
    db: Annotated[Session, Depends(get_db)],
    current_user: EditorUser,
) -> MessageResponse:
    alignment_service.unlink_objective(db, project_id, objective_id)
    return MessageResponse(
        message=f"Objectif id={objective_id} retiré du projet id={project_id}."
    )
