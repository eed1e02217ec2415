"""
Maturity (readiness) engine.

Scores the 13-item checklist of ``constants.MATURITY_CHECKLIST`` across five
dimensions and derives a readiness recommendation.

Scoring rules
-------------
- Each checked item earns its fixed points; per dimension the points sum to
  the dimension ceiling (financial 30, technical 25, legal 20,
  operational 15).
- Strategic (ceiling 10) is driven only by ``pag_alignment_percent``
  (clamped to [0, 100]): it contributes ``pag / 100 * 10`` points and its
  dimension score is the percentage itself.
- Dimension score = earned / ceiling * 100.
- Overall score = total earned points (max 100), rounded to 2 decimals.

Recommendation thresholds (policy)
----------------------------------
score >= 80 → ``ready``; 50 <= score < 80 → ``preparing``; below → ``not_ready``.

Blocking items
--------------
Unchecked items sorted by points descending, top 3; ties keep the checklist
declaration order (``sorted`` is stable).
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from sisag.models.maturity_assessment import MaturityAssessment
from sisag.schemas.maturity import (
    BlockingItem,
    DimensionScores,
    MaturityAssessmentData,
    MaturityAssessmentUpdate,
    MaturityResult,
    Recommendation,
)
from sisag.services.project_service import get_project_or_404
from sisag.utils.constants import (
    CHECKLIST_KEYS,
    DIMENSION_CEILINGS,
    MATURITY_CHECKLIST,
    MATURITY_PREPARING_MIN,
    MATURITY_READY_MIN,
    MAX_BLOCKING_ITEMS,
    RECOMMENDATION_MESSAGES,
)
from sisag.utils.rounding import clamp, round_half_up

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pure scoring functions
# ---------------------------------------------------------------------------


def earned_points(assessment: MaturityAssessmentData) -> dict[str, float]:
    """Return the weighted points earned in each dimension.

    Args:
        assessment: Complete checklist.

    Returns:
        Mapping dimension → earned points, in ``DIMENSION_CEILINGS`` order.
    """
    points: dict[str, float] = {dim: 0.0 for dim in DIMENSION_CEILINGS}
    for item in MATURITY_CHECKLIST:
        if getattr(assessment, item.key):
            points[item.dimension] += item.weight

    pag = clamp(assessment.pag_alignment_percent, 0.0, 100.0)
    points["strategic"] = pag / 100 * DIMENSION_CEILINGS["strategic"]
    return points


def dimension_scores(points: dict[str, float]) -> DimensionScores:
    return DimensionScores(
        **{
            dim: round_half_up(points[dim] / ceiling * 100, 2)
            for dim, ceiling in DIMENSION_CEILINGS.items()
        }
    )


def recommendation_for(score: float) -> Recommendation:
    """Map an overall score to its readiness status and message."""
    if score >= MATURITY_READY_MIN:
        status_ = "ready"
    elif score >= MATURITY_PREPARING_MIN:
        status_ = "preparing"
    else:
        status_ = "not_ready"
    return Recommendation(status=status_, message=RECOMMENDATION_MESSAGES[status_])


def blocking_items(
    assessment: MaturityAssessmentData, limit: int = MAX_BLOCKING_ITEMS
) -> list[BlockingItem]:
    """Return the highest-weight unchecked items, at most ``limit``."""
    missing = [item for item in MATURITY_CHECKLIST if not getattr(assessment, item.key)]
    ranked = sorted(missing, key=lambda item: item.weight, reverse=True)
    return [
        BlockingItem(
            key=item.key,
            label=item.label,
            dimension=item.dimension,
            weight=item.weight,
            action=item.action,
        )
        for item in ranked[:limit]
    ]


def score_assessment(assessment: MaturityAssessmentData) -> MaturityResult:
    """Score a complete assessment from scratch.

    Args:
        assessment: Complete checklist (no merging happens here).

    Returns:
        The ``MaturityResult`` with score, dimensions, recommendation and
        blocking items.
    """
    points = earned_points(assessment)
    raw_score = sum(points.values())
    # Thresholds apply to the exact sum, only the reported score is rounded.
    return MaturityResult(
        assessment=assessment,
        score=round_half_up(raw_score, 2),
        dimensions=dimension_scores(points),
        recommendation=recommendation_for(raw_score),
        blocking_items=blocking_items(assessment),
    )


def merge_assessment(
    stored: MaturityAssessmentData | None, update: MaturityAssessmentUpdate
) -> MaturityAssessmentData:
    """Overlay a partial update on the stored checklist.

    Fields absent from ``update`` (or sent as null) keep the stored value,
    or the false/0/empty default when nothing is stored yet.
    ``pag_alignment_percent`` is clamped to [0, 100].
    """
    merged = (stored or MaturityAssessmentData()).model_dump()
    merged.update(update.model_dump(exclude_none=True))
    merged["pag_alignment_percent"] = clamp(
        float(merged["pag_alignment_percent"]), 0.0, 100.0
    )
    return MaturityAssessmentData.model_validate(merged)


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


def _load_assessment(db: Session, project_id: int) -> MaturityAssessment | None:
    return (
        db.query(MaturityAssessment)
        .filter(MaturityAssessment.project_id == project_id)
        .first()
    )


def get_maturity(db: Session, project_id: int) -> MaturityResult:
    """Score the stored assessment of a project.

    A project without a saved assessment is scored as an all-false
    checklist (score 0, ``not_ready``).

    Raises:
        HTTPException 404: If the project does not exist.
    """
    get_project_or_404(db, project_id)
    row = _load_assessment(db, project_id)
    assessment = (
        MaturityAssessmentData.model_validate(row) if row is not None
        else MaturityAssessmentData()
    )
    result = score_assessment(assessment)
    logger.debug(
        "get_maturity: project_id=%d stored=%s score=%.2f",
        project_id, row is not None, result.score,
    )
    return result


def save_maturity(
    db: Session, project_id: int, data: MaturityAssessmentUpdate
) -> MaturityResult:
    """Merge, upsert and rescore the assessment of a project.

    Args:
        db: Active SQLAlchemy session.
        project_id: Project primary key.
        data: Partial checklist from the form.

    Returns:
        The ``MaturityResult`` recomputed from the saved assessment.

    Raises:
        HTTPException 404: If the project does not exist.
    """
    get_project_or_404(db, project_id)
    row = _load_assessment(db, project_id)
    stored = MaturityAssessmentData.model_validate(row) if row is not None else None
    assessment = merge_assessment(stored, data)

    if row is None:
        row = MaturityAssessment(project_id=project_id)
        db.add(row)
    for key in CHECKLIST_KEYS:
        setattr(row, key, getattr(assessment, key))
    row.pag_alignment_percent = assessment.pag_alignment_percent
    row.attachments = [a.model_dump() for a in assessment.attachments]

    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("save_maturity: commit failed for project_id=%d", project_id)
        raise

    result = score_assessment(assessment)
    logger.info(
        "save_maturity: project_id=%d score=%.2f status=%s",
        project_id, result.score, result.recommendation.status,
    )
    return result
