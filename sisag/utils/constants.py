"""
Application-wide constants for the SISAG backend.

Defines domain enumerations, the maturity checklist, scoring thresholds,
and lookup lists used across routers, services, and models.
"""

from typing import Final, NamedTuple

# ---------------------------------------------------------------------------
# User roles (issued by the identity service)
# ---------------------------------------------------------------------------

ROLES: Final[list[str]] = [
    "citizen",
    "government",
    "partner",
]

EDITOR_ROLES: Final[tuple[str, ...]] = ("government", "partner")

# ---------------------------------------------------------------------------
# Project states
# ---------------------------------------------------------------------------

PROJECT_STATUSES: Final[list[str]] = [
    "planned",
    "in_progress",
    "completed",
    "delayed",
    "cancelled",
]

# ---------------------------------------------------------------------------
# PAG objective levels
# ---------------------------------------------------------------------------

OBJECTIVE_LEVELS: Final[list[str]] = [
    "national",
    "provincial",
    "territorial",
]

# ---------------------------------------------------------------------------
# Phase states
# ---------------------------------------------------------------------------

PHASE_STATUSES: Final[list[str]] = [
    "planned",
    "in_progress",
    "completed",
    "blocked",
]

# ---------------------------------------------------------------------------
# Alerts
# ---------------------------------------------------------------------------

SEVERITIES: Final[list[str]] = [
    "low",
    "medium",
    "high",
    "critical",
]

RISK_SEVERITIES: Final[frozenset[str]] = frozenset({"high", "critical"})

PLANNING_ALERT_TYPES: Final[list[str]] = [
    "delay",
    "blocked",
    "budget_drift",
]

ALERT_TYPES: Final[list[str]] = [
    "budget_overrun",
    "delay",
    "milestone_missed",
]

ALERTS_LIST_LIMIT: Final[int] = 50

# ---------------------------------------------------------------------------
# Alignment engine
# ---------------------------------------------------------------------------

WEIGHT_MIN: Final[int] = 1
WEIGHT_MAX: Final[int] = 5
MAX_SUGGESTIONS: Final[int] = 5
ALIGNED_SCORE_MIN: Final[int] = 70  # indicator: projet "aligné"

# ---------------------------------------------------------------------------
# Maturity engine
# ---------------------------------------------------------------------------

# Dimension ceilings, in display order; they sum to 100.
DIMENSION_CEILINGS: Final[dict[str, int]] = {
    "financial": 30,
    "technical": 25,
    "legal": 20,
    "operational": 15,
    "strategic": 10,
}


class ChecklistItem(NamedTuple):
    key: str
    dimension: str
    weight: int
    label: str
    action: str


# Declaration order is the tie-break order for blocking items.
MATURITY_CHECKLIST: Final[tuple[ChecklistItem, ...]] = (
    ChecklistItem(
        "budget_available", "financial", 10,
        "Budget disponible",
        "Assurer la mise à disposition du budget par le ministère des finances.",
    ),
    ChecklistItem(
        "disbursement_planned", "financial", 10,
        "Décaissement prévu",
        "Programmer les décaissements et établir un calendrier approuvé.",
    ),
    ChecklistItem(
        "funding_source_confirmed", "financial", 5,
        "Source de financement confirmée",
        "Finaliser la lettre de confirmation des bailleurs.",
    ),
    ChecklistItem(
        "contracts_signed", "financial", 5,
        "Contrats de financement signés",
        "Signer les contrats de financement en attente.",
    ),
    ChecklistItem(
        "feasibility_study", "technical", 10,
        "Étude de faisabilité disponible",
        "Téléverser ou finaliser l'étude de faisabilité.",
    ),
    ChecklistItem(
        "technical_plans_validated", "technical", 10,
        "Plans techniques validés",
        "Valider les plans techniques avec l'unité d'ingénierie.",
    ),
    ChecklistItem(
        "documentation_complete", "technical", 5,
        "Documentation complète",
        "Compléter la documentation technique et administrative.",
    ),
    ChecklistItem(
        "governance_defined", "legal", 5,
        "Gouvernance définie",
        "Définir la structure de gouvernance du projet.",
    ),
    ChecklistItem(
        "steering_committee_formed", "legal", 5,
        "Comité de pilotage formé",
        "Constituer le comité de pilotage et valider les termes de référence.",
    ),
    ChecklistItem(
        "tenders_launched_awarded", "legal", 10,
        "Appels d'offres lancés / attribués",
        "Lancer/attribuer les appels d'offres via le module Marchés Publics.",
    ),
    ChecklistItem(
        "project_team_available", "operational", 5,
        "Équipe projet disponible",
        "Nommer l'équipe projet et clarifier les responsabilités.",
    ),
    ChecklistItem(
        "logistics_ready", "operational", 5,
        "Logistique prête",
        "Planifier la logistique et contractualiser les prestataires locaux.",
    ),
    ChecklistItem(
        "risks_identified", "operational", 5,
        "Risques identifiés",
        "Identifier et consigner les risques clés avec plans d'atténuation.",
    ),
)

CHECKLIST_KEYS: Final[tuple[str, ...]] = tuple(item.key for item in MATURITY_CHECKLIST)

MAX_BLOCKING_ITEMS: Final[int] = 3

# Recommendation thresholds on the overall score (policy)
MATURITY_READY_MIN: Final[float] = 80.0
MATURITY_PREPARING_MIN: Final[float] = 50.0

RECOMMENDATION_MESSAGES: Final[dict[str, str]] = {
    "ready": "Projet prêt pour exécution. Passer à la phase suivante.",
    "preparing": "Projet en cours de préparation. Voir les blocages ci-dessous.",
    "not_ready": "Projet non prêt. Actions urgentes requises.",
}

# ---------------------------------------------------------------------------
# Phase progress heuristics
# ---------------------------------------------------------------------------

PROGRESS_UNKNOWN: Final[float] = 50.0
PROGRESS_BLOCKED_CAP: Final[float] = 90.0

# ---------------------------------------------------------------------------
# Indicators
# ---------------------------------------------------------------------------

TOP_N: Final[int] = 3
ALERT_TREND_MONTHS: Final[int] = 6
