"""PlanningAlert model: manually logged delay/blockage/budget-drift notice."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sisag.database import Base


class PlanningAlert(Base):
    """Append-only planning alert tied to a project and optionally a phase.

    Attributes:
        id: Primary key.
        project_id: FK to Project.
        phase_id: Optional FK to Phase (nulled if the phase is deleted).
        type: One of ``constants.PLANNING_ALERT_TYPES``.
        severity: One of ``constants.SEVERITIES``.
        message: Free-text description.
        created_by: Identity-service id of the author.
        created_at: Creation timestamp.
    """

    __tablename__ = "planning_alert"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        Integer, ForeignKey("project.id", ondelete="CASCADE"), nullable=False, index=True
    )
    phase_id = Column(
        Integer, ForeignKey("phase.id", ondelete="SET NULL"), nullable=True
    )
    type = Column(String(30), nullable=False)
    severity = Column(String(20), nullable=False)
    message = Column(Text, nullable=False)
    created_by = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="planning_alerts", lazy="select")
    phase = relationship("Phase", back_populates="planning_alerts", lazy="select")
