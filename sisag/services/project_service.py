"""
Project store service layer.

Plain CRUD over ``Project`` plus ``get_project_or_404``, the lookup every
engine uses to turn an unknown project id into an HTTP 404.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from sisag.models.project import Project
from sisag.schemas.project import ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)

# Only these columns may be cleared with an explicit null.
_NULLABLE_FIELDS = frozenset({"latitude", "longitude", "actual_end_date"})


def get_project_or_404(db: Session, project_id: int) -> Project:
    """Load a project by primary key.

    Raises:
        HTTPException 404: If no project with ``project_id`` exists.
    """
    project: Project | None = db.query(Project).filter(Project.id == project_id).first()
    if project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Projet avec id={project_id} introuvable.",
        )
    return project


def list_projects(
    db: Session,
    province: str | None = None,
    sector: str | None = None,
    status_: str | None = None,
) -> list[Project]:
    """Return projects, newest first, optionally filtered by exact field values."""
    q = db.query(Project)
    if province is not None:
        q = q.filter(Project.province == province)
    if sector is not None:
        q = q.filter(Project.sector == sector)
    if status_ is not None:
        q = q.filter(Project.status == status_)
    rows = q.order_by(Project.created_at.desc(), Project.id.desc()).all()
    logger.debug(
        "list_projects: province=%s sector=%s status=%s -> %d rows",
        province, sector, status_, len(rows),
    )
    return rows


def create_project(db: Session, data: ProjectCreate, created_by: str | None) -> Project:
    project = Project(**data.model_dump(), created_by=created_by)
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("create_project: created id=%d sector=%s", project.id, project.sector)
    return project


def update_project(db: Session, project_id: int, data: ProjectUpdate) -> Project:
    """Apply a partial update to a project.

    Only fields present in the request body are written; an explicit null
    is ignored except for the optional columns.

    Raises:
        HTTPException 404: If the project does not exist.
        HTTPException 400: If the resulting ``end_date`` precedes ``start_date``.
    """
    project = get_project_or_404(db, project_id)

    update_data = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in _NULLABLE_FIELDS
    }
    start = update_data.get("start_date", project.start_date)
    end = update_data.get("end_date", project.end_date)
    if start is not None and end is not None and end < start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="La date de fin ne peut pas précéder la date de début.",
        )

    for field, value in update_data.items():
        setattr(project, field, value)

    db.commit()
    db.refresh(project)
    logger.info("update_project: id=%d fields=%s", project_id, list(update_data.keys()))
    return project
