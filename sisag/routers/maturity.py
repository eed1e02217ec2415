"""
Maturity (readiness) router.

Mounts under ``/api/projects`` (prefix set in ``main.py``).

Endpoints
---------
GET /{id}/maturity - Score the stored checklist (all-false when none is saved).
PUT /{id}/maturity - Merge a partial checklist, save it and return the new score.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from sisag.database import get_db
from sisag.schemas.maturity import MaturityAssessmentUpdate, MaturityResult
from sisag.services import maturity_service
from sisag.services.auth_service import EditorUser

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Maturité"])


@router.get(
    "/{project_id}/maturity",
    response_model=MaturityResult,
    summary="Score de maturité d'un projet",
    description=(
        "Score pondéré sur cinq dimensions (financière 30, technique 25, "
        "juridique 20, opérationnelle 15, stratégique 10), recommandation et "
        "trois principaux points bloquants."
    ),
    responses={404: {"description": "Projet introuvable."}},
)
def get_maturity(
    project_id: Annotated[int, Path(description="ID du projet.", ge=1)],
    db: Annotated[Session, Depends(get_db)],
) -> MaturityResult:
    return maturity_service.get_maturity(db, project_id)


@router.put(
    "/{project_id}/maturity",
    response_model=MaturityResult,
    summary="Enregistrer l'évaluation de maturité",
    description=(
        "Les champs absents conservent la valeur enregistrée. "
        "pag_alignment_percent est ramené dans [0, 100]."
    ),
    responses={
        401: {"description": "Jeton absent ou invalide."},
        403: {"description": "Rôle insuffisant."},
        404: {"description": "Projet introuvable."},
    },
)
def put_maturity(
    project_id: Annotated[int, Path(description="ID du projet.", ge=1)],
    body: MaturityAssessmentUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: EditorUser,
) -> MaturityResult:
    logger.info("PUT /projects/%d/maturity user=%s", project_id, current_user.id)
    return maturity_service.save_maturity(db, project_id, body)
