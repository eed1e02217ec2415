"""SQLAlchemy models package for SISAG.

Importing all models here ensures that SQLAlchemy's mapper registry is
populated before ``Base.metadata.create_all()`` or Alembic migrations run.
The import order follows the foreign-key dependency graph so that parent
tables are always registered before their children.

Usage from other modules:
    from sisag.models import Project, Phase
"""

# Leaf tables (no FK dependencies on other domain models)
from sisag.models.objective import Objective  # noqa: F401
from sisag.models.project import Project  # noqa: F401

# Project children
from sisag.models.project_objective import ProjectObjective  # noqa: F401
from sisag.models.phase import Phase  # noqa: F401
from sisag.models.maturity_assessment import MaturityAssessment  # noqa: F401

# Alerts
from sisag.models.planning_alert import PlanningAlert  # noqa: F401
from sisag.models.alert import Alert  # noqa: F401

__all__ = [
    "Objective",
    "Project",
    "ProjectObjective",
    "Phase",
    "MaturityAssessment",
    "PlanningAlert",
    "Alert",
]
