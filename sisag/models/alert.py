"""Alert model: global project alert (budget overrun, delay, missed milestone)."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sisag.database import Base


class Alert(Base):
    """Project-level alert shown on the citizen and government dashboards.

    Attributes:
        id: Primary key.
        project_id: FK to Project.
        type: One of ``constants.ALERT_TYPES``.
        severity: One of ``constants.SEVERITIES``.
        message: Free-text description.
        is_read: Whether the alert has been acknowledged.
        user_id: Identity-service id of the author.
        created_at: Creation timestamp.
    """

    __tablename__ = "alert"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        Integer, ForeignKey("project.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = Column(String(30), nullable=False)
    severity = Column(String(20), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    user_id = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="alerts", lazy="select")
