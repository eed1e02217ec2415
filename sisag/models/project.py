"""Project model: public infrastructure project tracked by the dashboard."""

from sqlalchemy import Column, Date, DateTime, Float, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sisag.database import Base


class Project(Base):
    """Public project with budget, location, schedule and status.

    Attributes:
        id: Primary key.
        title: Project title.
        description: Long description shown to citizens.
        sector: Free-text sector, e.g. "Santé".
        status: One of ``constants.PROJECT_STATUSES``.
        budget: Allocated budget (CDF), >= 0.
        spent: Amount spent so far (CDF), >= 0.
        province: Province name, e.g. "Kinshasa".
        city: City or territory.
        latitude: Optional map latitude.
        longitude: Optional map longitude.
        start_date: Planned start date.
        end_date: Planned end date.
        actual_end_date: Actual completion date, if completed.
        ministry: Supervising ministry.
        responsible_person: Named project lead.
        created_by: Identity-service id of the creator.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "project"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=False, default="")
    sector = Column(String(100), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="planned")
    budget = Column(Numeric(18, 2), nullable=False, default=0)
    spent = Column(Numeric(18, 2), nullable=False, default=0)
    province = Column(String(100), nullable=False, index=True)
    city = Column(String(100), nullable=False, default="")
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    actual_end_date = Column(Date, nullable=True)
    ministry = Column(String(200), nullable=False, default="")
    responsible_person = Column(String(200), nullable=False, default="")
    created_by = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    objective_links = relationship(
        "ProjectObjective",
        back_populates="project",
        cascade="all, delete-orphan",
        lazy="select",
    )
    phases = relationship(
        "Phase",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Phase.id",
        lazy="select",
    )
    maturity_assessment = relationship(
        "MaturityAssessment",
        back_populates="project",
        cascade="all, delete-orphan",
        uselist=False,
        lazy="select",
    )
    planning_alerts = relationship(
        "PlanningAlert",
        back_populates="project",
        cascade="all, delete-orphan",
        lazy="select",
    )
    alerts = relationship(
        "Alert",
        back_populates="project",
        cascade="all, delete-orphan",
        lazy="select",
    )
