"""MaturityAssessment model: one readiness checklist per project."""

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sisag.database import Base


class MaturityAssessment(Base):
    """Thirteen-item readiness checklist plus the PAG alignment slider.

    The column names match ``constants.CHECKLIST_KEYS``; the scoring rules
    live in ``maturity_service``.
    """

    __tablename__ = "maturity_assessment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        Integer,
        ForeignKey("project.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    # Financial
    budget_available = Column(Boolean, default=False, nullable=False)
    disbursement_planned = Column(Boolean, default=False, nullable=False)
    funding_source_confirmed = Column(Boolean, default=False, nullable=False)
    contracts_signed = Column(Boolean, default=False, nullable=False)
    # Technical
    feasibility_study = Column(Boolean, default=False, nullable=False)
    technical_plans_validated = Column(Boolean, default=False, nullable=False)
    documentation_complete = Column(Boolean, default=False, nullable=False)
    # Legal & administrative
    governance_defined = Column(Boolean, default=False, nullable=False)
    steering_committee_formed = Column(Boolean, default=False, nullable=False)
    tenders_launched_awarded = Column(Boolean, default=False, nullable=False)
    # Operational
    project_team_available = Column(Boolean, default=False, nullable=False)
    logistics_ready = Column(Boolean, default=False, nullable=False)
    risks_identified = Column(Boolean, default=False, nullable=False)
    # Strategic
    pag_alignment_percent = Column(Float, default=0.0, nullable=False)

    attachments = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="maturity_assessment", lazy="select")
