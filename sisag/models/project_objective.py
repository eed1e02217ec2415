"""ProjectObjective model: weighted link between a project and a PAG objective."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sisag.database import Base


class ProjectObjective(Base):
    """Contribution of a project to one objective.

    At most one row exists per ``(project_id, objective_id)``; writes go
    through the upsert in ``alignment_service``.

    Attributes:
        id: Primary key.
        project_id: FK to Project.
        objective_id: FK to Objective.
        weight: Contribution strength, always within [1, 5].
        created_at: Link creation timestamp.
        updated_at: Last weight change.
    """

    __tablename__ = "project_objective"
    __table_args__ = (
        UniqueConstraint("project_id", "objective_id", name="uq_project_objective"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        Integer, ForeignKey("project.id", ondelete="CASCADE"), nullable=False, index=True
    )
    objective_id = Column(
        Integer, ForeignKey("objective.id", ondelete="CASCADE"), nullable=False
    )
    weight = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="objective_links", lazy="select")
    objective = relationship("Objective", back_populates="project_links", lazy="joined")
