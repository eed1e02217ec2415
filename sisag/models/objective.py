"""Objective model: PAG policy objective a project can contribute to."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sisag.database import Base


class Objective(Base):
    """National, provincial or territorial objective of the PAG catalog.

    Attributes:
        id: Primary key.
        code: Unique human-readable policy code, e.g. "PAG-SAN-01".
        title: Objective title.
        description: Optional long description.
        level: "national", "provincial" or "territorial".
        sector: Free-text sector; matched by exact string equality.
        created_at: Record creation timestamp.
    """

    __tablename__ = "objective"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50), unique=True, nullable=False)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    level = Column(String(20), nullable=False)
    sector = Column(String(100), nullable=False, index=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    # Relationships
    project_links = relationship(
        "ProjectObjective", back_populates="objective", lazy="select"
    )
