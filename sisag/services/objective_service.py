"""
PAG objective catalog service layer.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from sisag.models.objective import Objective
from sisag.schemas.objective import ObjectiveCreate

logger = logging.getLogger(__name__)


def get_objective_or_404(db: Session, objective_id: int) -> Objective:
    objective: Objective | None = (
        db.query(Objective).filter(Objective.id == objective_id).first()
    )
    if objective is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Objectif avec id={objective_id} introuvable.",
        )
    return objective


def list_objectives(
    db: Session,
    level: str | None = None,
    sector: str | None = None,
) -> list[Objective]:
    """Return catalog objectives ordered by code.

    Args:
        db: Active SQLAlchemy session.
        level: Optional exact level filter.
        sector: Optional exact sector filter.

    Returns:
        Matching ``Objective`` rows.
    """
    q = db.query(Objective)
    if level is not None:
        q = q.filter(Objective.level == level)
    if sector is not None:
        q = q.filter(Objective.sector == sector)
    return q.order_by(Objective.code.asc()).all()


def create_objective(db: Session, data: ObjectiveCreate) -> Objective:
    """Add an objective to the catalog.

    Raises:
        HTTPException 409: If ``data.code`` is already in use.
    """
    existing = db.query(Objective.id).filter(Objective.code == data.code).first()
    if existing is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Un objectif avec le code '{data.code}' existe déjà.",
        )

    objective = Objective(**data.model_dump())
    db.add(objective)
    db.commit()
    db.refresh(objective)
    logger.info("create_objective: created id=%d code=%s", objective.id, objective.code)
    return objective
