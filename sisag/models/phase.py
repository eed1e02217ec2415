"""Phase model: dated sub-stage of a project's lifecycle."""

from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sisag.database import Base


class Phase(Base):
    """Named project phase with planned vs. actual dates.

    Phases carry no sequencing constraint: any phase may change status
    independently of the others.  Delay and progress are derived on read
    (see ``phase_service.compute_metrics``), never stored.

    Attributes:
        id: Primary key.
        project_id: FK to Project.
        name: Phase name, e.g. "Études", "Exécution".
        planned_start: Planned start date.
        planned_end: Planned end date.
        actual_start: Actual start date.
        actual_end: Actual end date.
        status: One of ``constants.PHASE_STATUSES``.
        deliverables: JSON list of ``{"name": str, "completed": bool}``.
        created_at: Creation timestamp, defines the display order.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "phase"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        Integer, ForeignKey("project.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(200), nullable=False)
    planned_start = Column(Date, nullable=True)
    planned_end = Column(Date, nullable=True)
    actual_start = Column(Date, nullable=True)
    actual_end = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default="planned")
    deliverables = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="phases", lazy="select")
    planning_alerts = relationship("PlanningAlert", back_populates="phase", lazy="select")
