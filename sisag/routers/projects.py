"""
Project store router.

Mounts under ``/api/projects`` (prefix set in ``main.py``).  The alignment,
maturity and phase sub-resources of a project live in their own routers.

Endpoints
---------
GET  /       - List projects (?province=&sector=&status=), newest first.
POST /       - Create a project (government / partner).
GET  /{id}   - Single project.
PUT  /{id}   - Partial update (government / partner).
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from sisag.database import get_db
from sisag.schemas.project import (
    ProjectCreate,
    ProjectResponse,
    ProjectStatus,
    ProjectUpdate,
)
from sisag.services import project_service
from sisag.services.auth_service import EditorUser

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Projets"])

_WRITE_RESPONSES = {
    401: {"description": "Jeton absent ou invalide."},
    403: {"description": "Rôle insuffisant."},
}


@router.get(
    "",
    response_model=list[ProjectResponse],
    summary="Lister les projets",
    description="Retourne les projets du plus récent au plus ancien, filtrables par "
    "province, secteur et statut (égalité exacte).",
)
def get_projects(
    db: Annotated[Session, Depends(get_db)],
    province: Annotated[str | None, Query(description="Province.")] = None,
    sector: Annotated[str | None, Query(description="Secteur.")] = None,
    status_: Annotated[
        ProjectStatus | None, Query(alias="status", description="Statut du projet.")
    ] = None,
) -> list[ProjectResponse]:
    return project_service.list_projects(db, province=province, sector=sector, status_=status_)


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Créer un projet",
    responses=_WRITE_RESPONSES,
)
def post_project(
    body: ProjectCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: EditorUser,
) -> ProjectResponse:
    logger.info("POST /projects title=%r user=%s", body.title, current_user.id)
    return project_service.create_project(db, body, created_by=current_user.id)


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Détail d'un projet",
    responses={404: {"description": "Projet introuvable."}},
)
def get_project(
    project_id: Annotated[int, Path(description="ID du projet.", ge=1)],
    db: Annotated[Session, Depends(get_db)],
) -> ProjectResponse:
    return project_service.get_project_or_404(db, project_id)


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Modifier un projet",
    responses={
        **_WRITE_RESPONSES,
        400: {"description": "Dates incohérentes."},
        404: {"description": "Projet introuvable."},
    },
)
def put_project(
    project_id: Annotated[int, Path(description="ID du projet.", ge=1)],
    body: ProjectUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: EditorUser,
) -> ProjectResponse:
    logger.info("PUT /projects/%d user=%s", project_id, current_user.id)
    return project_service.update_project(db, project_id, body)
