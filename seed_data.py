"""Seed data script for the SISAG database.

Populates the database with a small, realistic demo set: the PAG objective
catalog, a handful of projects across provinces, their objective links,
phases, maturity checklists and alerts.

The script is idempotent: each step checks for existing records before
inserting.

Usage (from the repository root):
    python seed_data.py
"""

from __future__ import annotations

import os
import sys
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

# Ensure the sisag package is importable when running from the repo root
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sisag.database import Base, SessionLocal, engine  # noqa: E402
from sisag.models import (  # noqa: E402
    Alert,
    MaturityAssessment,
    Objective,
    Phase,
    PlanningAlert,
    Project,
    ProjectObjective,
)
from sisag.services.alignment_service import clamp_weight  # noqa: E402

SEED_USER = "seed-script"


def _d(year: int, month: int, day: int) -> date:
    """Shorthand date constructor."""
    return date(year, month, day)


def _dec(value: float) -> Decimal:
    """Convert float to Decimal for Numeric columns."""
    return Decimal(str(round(value, 2)))


# ---------------------------------------------------------------------------
# Seed functions
# ---------------------------------------------------------------------------


def seed_objectives(session) -> dict[str, Objective]:
    """Insert the PAG objective catalog if it is empty."""
    if session.query(Objective).count() > 0:
        print("  [SKIP] Objective: table already has data.")
        return {o.code: o for o in session.query(Objective).all()}

    rows = [
        ("PAG-SAN-01", "Améliorer l'accès aux soins de santé primaires", "national", "Santé"),
        ("PAG-SAN-02", "Réhabiliter les hôpitaux généraux de référence", "provincial", "Santé"),
        ("PAG-SAN-03", "Renforcer la couverture vaccinale", "national", "Santé"),
        ("PAG-EDU-01", "Généraliser la gratuité de l'enseignement primaire", "national", "Éducation"),
        ("PAG-EDU-02", "Construire et équiper des salles de classe", "territorial", "Éducation"),
        ("PAG-INF-01", "Désenclaver les zones rurales par la route", "national", "Infrastructures"),
        ("PAG-INF-02", "Moderniser la voirie urbaine", "provincial", "Infrastructures"),
        ("PAG-ENE-01", "Étendre l'accès à l'électricité", "national", "Énergie"),
        ("PAG-EAU-01", "Accroître l'accès à l'eau potable", "territorial", "Eau"),
    ]
    objectives = [
        Objective(code=code, title=title, level=level, sector=sector)
        for code, title, level, sector in rows
    ]
    session.add_all(objectives)
    session.flush()
    print(f"  [OK] {len(objectives)} objectifs PAG insérés.")
    return {o.code: o for o in objectives}


def seed_projects(session) -> list[Project]:
    """Insert demo projects if the table is empty."""
    if session.query(Project).count() > 0:
        print("  [SKIP] Project: table already has data.")
        return session.query(Project).order_by(Project.id).all()

    rows = [
        dict(
            title="Réhabilitation de l'Hôpital Général de Kinshasa",
            sector="Santé", province="Kinshasa", city="Gombe", status="in_progress",
            budget=_dec(12_500_000), spent=_dec(7_800_000),
            start_date=_d(2025, 1, 15), end_date=_d(2026, 6, 30),
            ministry="Ministère de la Santé Publique", responsible_person="Dr. Mbala",
            latitude=-4.3105, longitude=15.3125,
        ),
        dict(
            title="Centres de santé de Kinshasa-Est",
            sector="Santé", province="Kinshasa", city="N'Djili", status="planned",
            budget=_dec(3_200_000), spent=_dec(0),
            start_date=_d(2026, 3, 1), end_date=_d(2027, 2, 28),
            ministry="Ministère de la Santé Publique", responsible_person="Mme Kabongo",
        ),
        dict(
            title="Route Kananga - Tshikapa",
            sector="Infrastructures", province="Kasaï-Central", city="Kananga", status="delayed",
            budget=_dec(45_000_000), spent=_dec(49_500_000),
            start_date=_d(2024, 6, 1), end_date=_d(2026, 5, 31),
            ministry="Ministère des Infrastructures", responsible_person="Ing. Tshibanda",
        ),
        dict(
            title="Écoles primaires de Goma",
            sector="Éducation", province="Nord-Kivu", city="Goma", status="in_progress",
            budget=_dec(4_800_000), spent=_dec(2_100_000),
            start_date=_d(2025, 9, 1), end_date=_d(2026, 12, 31),
            ministry="Ministère de l'Éducation", responsible_person="M. Bahati",
        ),
        dict(
            title="Mini-centrale hydroélectrique de Kindu",
            sector="Énergie", province="Maniema", city="Kindu", status="completed",
            budget=_dec(9_000_000), spent=_dec(8_700_000),
            start_date=_d(2023, 4, 1), end_date=_d(2025, 3, 31),
            actual_end_date=_d(2025, 5, 15),
            ministry="Ministère des Ressources Hydrauliques", responsible_person="Ing. Lukusa",
        ),
        dict(
            title="Adduction d'eau potable de Mbuji-Mayi",
            sector="Eau", province="Kasaï-Oriental", city="Mbuji-Mayi", status="in_progress",
            budget=_dec(6_400_000), spent=_dec(1_900_000),
            start_date=_d(2025, 11, 1), end_date=_d(2027, 4, 30),
            ministry="Ministère des Ressources Hydrauliques", responsible_person="Mme Ngalula",
        ),
    ]
    projects = [Project(created_by=SEED_USER, **row) for row in rows]
    session.add_all(projects)
    session.flush()
    print(f"  [OK] {len(projects)} projets insérés.")
    return projects


def seed_objective_links(session, projects: list[Project], objectives: dict[str, Objective]) -> None:
    if session.query(ProjectObjective).count() > 0:
        print("  [SKIP] ProjectObjective: table already has data.")
        return

    links = [
        (0, "PAG-SAN-01", 4),
        (0, "PAG-SAN-02", 2),
        (1, "PAG-SAN-01", 5),
        (2, "PAG-INF-01", 5),
        (2, "PAG-INF-02", 3),
        (3, "PAG-EDU-02", 4),
        (4, "PAG-ENE-01", 5),
        (5, "PAG-EAU-01", 3),
    ]
    for project_index, code, weight in links:
        session.add(ProjectObjective(
            project_id=projects[project_index].id,
            objective_id=objectives[code].id,
            weight=clamp_weight(weight),
        ))
    session.flush()
    print(f"  [OK] {len(links)} liens projet-objectif insérés.")


def seed_phases(session, projects: list[Project]) -> list[Phase]:
    if session.query(Phase).count() > 0:
        print("  [SKIP] Phase: table already has data.")
        return session.query(Phase).order_by(Phase.id).all()

    hospital, health_centres, road, schools, hydro, water = projects[:6]
    rows = [
        Phase(project_id=hospital.id, name="Études et conception", status="completed",
              planned_start=_d(2025, 1, 15), planned_end=_d(2025, 4, 30),
              actual_start=_d(2025, 1, 20), actual_end=_d(2025, 5, 12),
              deliverables=[{"name": "Étude de faisabilité", "completed": True},
                            {"name": "Plans d'exécution", "completed": True}]),
        Phase(project_id=hospital.id, name="Travaux de gros œuvre", status="in_progress",
              planned_start=_d(2025, 5, 1), planned_end=_d(2026, 1, 31),
              actual_start=_d(2025, 5, 15),
              deliverables=[{"name": "Bloc opératoire", "completed": False}]),
        Phase(project_id=health_centres.id, name="Passation des marchés", status="planned",
              planned_start=_d(2026, 3, 1), planned_end=_d(2026, 5, 31)),
        Phase(project_id=road.id, name="Terrassement", status="blocked",
              planned_start=_d(2024, 6, 1), planned_end=_d(2025, 3, 31),
              actual_start=_d(2024, 7, 10)),
        Phase(project_id=schools.id, name="Construction des salles", status="in_progress",
              planned_start=_d(2025, 9, 1), planned_end=_d(2026, 8, 31),
              actual_start=_d(2025, 9, 8)),
        Phase(project_id=hydro.id, name="Mise en service", status="completed",
              planned_start=_d(2025, 1, 1), planned_end=_d(2025, 3, 31),
              actual_start=_d(2025, 1, 5), actual_end=_d(2025, 5, 15)),
        Phase(project_id=water.id, name="Forages", status="in_progress",
              planned_start=_d(2025, 11, 1), planned_end=_d(2026, 7, 31)),
    ]
    session.add_all(rows)
    session.flush()
    print(f"  [OK] {len(rows)} phases insérées.")
    return rows


def seed_maturity(session, projects: list[Project]) -> None:
    if session.query(MaturityAssessment).count() > 0:
        print("  [SKIP] MaturityAssessment: table already has data.")
        return

    hospital, health_centres, road = projects[:3]
    rows = [
        MaturityAssessment(
            project_id=hospital.id,
            budget_available=True, disbursement_planned=True, funding_source_confirmed=True,
            contracts_signed=True, feasibility_study=True, technical_plans_validated=True,
            documentation_complete=True, governance_defined=True, steering_committee_formed=True,
            tenders_launched_awarded=True, project_team_available=True, logistics_ready=False,
            risks_identified=True, pag_alignment_percent=80.0,
            attachments=[{"name": "etude_faisabilite.pdf"}],
        ),
        MaturityAssessment(
            project_id=health_centres.id,
            budget_available=True, funding_source_confirmed=True, feasibility_study=True,
            governance_defined=True, project_team_available=True,
            pag_alignment_percent=60.0, attachments=[],
        ),
        MaturityAssessment(
            project_id=road.id,
            budget_available=True, disbursement_planned=True, feasibility_study=True,
            technical_plans_validated=True, tenders_launched_awarded=True,
            pag_alignment_percent=90.0, attachments=[],
        ),
    ]
    session.add_all(rows)
    session.flush()
    print(f"  [OK] {len(rows)} évaluations de maturité insérées.")


def seed_alerts(session, projects: list[Project], phases: list[Phase]) -> None:
    if session.query(Alert).count() > 0 or session.query(PlanningAlert).count() > 0:
        print("  [SKIP] Alert / PlanningAlert: tables already have data.")
        return

    now = datetime.now(timezone.utc)
    hospital, _, road, schools = projects[:4]
    road_phase = next(p for p in phases if p.project_id == road.id)

    alerts = [
        Alert(project_id=road.id, type="budget_overrun", severity="critical",
              message="Dépenses supérieures de 10 % au budget alloué.",
              user_id=SEED_USER, created_at=now - timedelta(days=12)),
        Alert(project_id=hospital.id, type="milestone_missed", severity="medium",
              message="Livraison des études avec 12 jours de retard.",
              user_id=SEED_USER, created_at=now - timedelta(days=70)),
        Alert(project_id=schools.id, type="delay", severity="low",
              message="Approvisionnement en ciment ralenti.",
              user_id=SEED_USER, is_read=True, created_at=now - timedelta(days=40)),
    ]
    planning_alerts = [
        PlanningAlert(project_id=road.id, phase_id=road_phase.id, type="blocked",
                      severity="high", message="Terrassement arrêté: saison des pluies.",
                      created_by=SEED_USER, created_at=now - timedelta(days=20)),
        PlanningAlert(project_id=road.id, type="budget_drift", severity="medium",
                      message="Révision des prix du carburant.",
                      created_by=SEED_USER, created_at=now - timedelta(days=100)),
    ]
    session.add_all(alerts + planning_alerts)
    session.flush()
    print(f"  [OK] {len(alerts)} alertes projet et {len(planning_alerts)} alertes de planification insérées.")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Run the complete seed process within a single database transaction."""
    print("=" * 60)
    print("  SISAG: script de données de démonstration")
    print("=" * 60)

    Base.metadata.create_all(bind=engine)

    session = SessionLocal()
    try:
        print("\n[1/6] Objectifs PAG...")
        objectives = seed_objectives(session)

        print("\n[2/6] Projets...")
        projects = seed_projects(session)

        print("\n[3/6] Liens projet-objectif...")
        seed_objective_links(session, projects, objectives)

        print("\n[4/6] Phases...")
        phases = seed_phases(session, projects)

        print("\n[5/6] Évaluations de maturité...")
        seed_maturity(session, projects)

        print("\n[6/6] Alertes...")
        seed_alerts(session, projects, phases)

        session.commit()
        print("\n" + "=" * 60)
        print("  Seed terminé avec succès.")
        print("=" * 60)

    except Exception as exc:
        session.rollback()
        print("\n[ERROR] Seed échoué, rollback effectué.")
        print(f"  Détail : {exc}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
