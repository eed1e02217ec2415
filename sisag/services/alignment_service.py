"""
PAG alignment engine.

Computes how strongly a project's weighted objective links saturate the
maximum possible contribution, plus two informational signals:

- **redundancy** - how many *other* projects share the same province and
  sector (exact string match, no normalisation);
- **suggestions** - up to five same-sector objectives not yet linked,
  ordered by code.

Scoring
-------
``total_possible = max(link_count, 1) * 5`` so a project without links
scores 0 instead of dividing by zero.  The score is
``round_half_up(total_weight / total_possible * 100)`` and therefore always
lies in [0, 100] given that stored weights are clamped to [1, 5].

Links are written through an upsert: linking an already-linked objective
overwrites its weight rather than failing.
"""

from __future__ import annotations

import logging
from typing import Sequence

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sisag.models.objective import Objective
from sisag.models.project import Project
from sisag.models.project_objective import ProjectObjective
from sisag.schemas.alignment import (
    AlignmentObjective,
    AlignmentResult,
    Redundancy,
)
from sisag.schemas.objective import ObjectiveResponse
from sisag.services.objective_service import get_objective_or_404
from sisag.services.project_service import get_project_or_404
from sisag.utils.constants import MAX_SUGGESTIONS, WEIGHT_MAX, WEIGHT_MIN
from sisag.utils.rounding import round_half_up

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pure scoring helpers
# ---------------------------------------------------------------------------


def clamp_weight(weight: int) -> int:
    """Bring a requested weight into [1, 5]."""
    return max(WEIGHT_MIN, min(WEIGHT_MAX, int(weight)))


def alignment_score(weights: Sequence[int]) -> int:
    """Return the 0-100 alignment score for a set of link weights.

    Args:
        weights: Weight of each linked objective.

    Returns:
        Integer score; 0 when ``weights`` is empty.
    """
    total_possible = max(len(weights), 1) * WEIGHT_MAX
    total_weight = sum(weights)
    return int(round_half_up(total_weight / total_possible * 100))


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def _count_similar_projects(db: Session, project: Project) -> int:
    return (
        db.query(func.count(Project.id))
        .filter(
            Project.province == project.province,
            Project.sector == project.sector,
            Project.id != project.id,
        )
        .scalar()
    ) or 0


def _suggest_objectives(
    db: Session, project: Project, linked_ids: list[int]
) -> list[Objective]:
    q = db.query(Objective).filter(Objective.sector == project.sector)
    if linked_ids:
        q = q.filter(Objective.id.notin_(linked_ids))
    return q.order_by(Objective.code.asc()).limit(MAX_SUGGESTIONS).all()


def compute_alignment(db: Session, project_id: int) -> AlignmentResult:
    """Compute the alignment result of one project.

    Args:
        db: Active SQLAlchemy session.
        project_id: Primary key of the project.

    Returns:
        An ``AlignmentResult`` recomputed from the current links.

    Raises:
        HTTPException 404: If the project does not exist.
    """
    project = get_project_or_404(db, project_id)

    rows = (
        db.query(ProjectObjective.weight, Objective)
        .join(Objective, ProjectObjective.objective_id == Objective.id)
        .filter(ProjectObjective.project_id == project_id)
        .order_by(Objective.code.asc())
        .all()
    )

    objectives = [
        AlignmentObjective(
            id=objective.id,
            code=objective.code,
            title=objective.title,
            level=objective.level,
            sector=objective.sector,
            weight=weight,
        )
        for weight, objective in rows
    ]
    score = alignment_score([o.weight for o in objectives])
    similar = _count_similar_projects(db, project)
    suggestions = _suggest_objectives(db, project, [o.id for o in objectives])

    logger.debug(
        "compute_alignment: project_id=%d links=%d score=%d similar=%d suggestions=%d",
        project_id, len(objectives), score, similar, len(suggestions),
    )

    return AlignmentResult(
        score=score,
        objectives=objectives,
        redundancy=Redundancy(similar_projects=similar),
        suggestions=[ObjectiveResponse.model_validate(o) for o in suggestions],
    )


# ---------------------------------------------------------------------------
# Link writes
# ---------------------------------------------------------------------------


def _find_link(db: Session, project_id: int, objective_id: int) -> ProjectObjective | None:
    return (
        db.query(ProjectObjective)
        .filter(
            ProjectObjective.project_id == project_id,
            ProjectObjective.objective_id == objective_id,
        )
        .first()
    )


def link_objective(
    db: Session, project_id: int, objective_id: int, weight: int
) -> ProjectObjective:
    """Insert or overwrite the weighted link between a project and an objective.

    The weight is clamped to [1, 5] before it is stored.  A concurrent insert
    of the same pair surfaces as an ``IntegrityError`` on commit; it is
    absorbed by re-reading the winning row and overwriting its weight.

    Args:
        db: Active SQLAlchemy session.
        project_id: Project primary key.
        objective_id: Objective primary key.
        weight: Requested weight (any integer).

    Returns:
        The stored ``ProjectObjective`` row.

    Raises:
        HTTPException 404: If the project or the objective does not exist.
    """
    get_project_or_404(db, project_id)
    get_objective_or_404(db, objective_id)
    stored_weight = clamp_weight(weight)

    link = _find_link(db, project_id, objective_id)
    if link is None:
        link = ProjectObjective(
            project_id=project_id, objective_id=objective_id, weight=stored_weight
        )
        db.add(link)
    else:
        link.weight = stored_weight

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        link = _find_link(db, project_id, objective_id)
        if link is None:
            raise
        link.weight = stored_weight
        db.commit()

    db.refresh(link)
    logger.info(
        "link_objective: project_id=%d objective_id=%d weight=%d (requested %d)",
        project_id, objective_id, stored_weight, weight,
    )
    return link


def unlink_objective(db: Session, project_id: int, objective_id: int) -> None:
    """Delete the link between a project and an objective.

    Raises:
        HTTPException 404: If the project does not exist or the pair is not linked.
    """
    get_project_or_404(db, project_id)
    link = _find_link(db, project_id, objective_id)
    if link is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=(
                f"L'objectif id={objective_id} n'est pas lié au projet id={project_id}."
            ),
        )
    db.delete(link)
    db.commit()
    logger.info("unlink_objective: project_id=%d objective_id=%d", project_id, objective_id)


def update_link_weight(
    db: Session, project_id: int, objective_id: int, weight: int
) -> ProjectObjective:
    """Change the weight of a link; creates the link when it does not exist yet."""
    return link_objective(db, project_id, objective_id, weight)
