"""Shared fixtures: in-memory SQLite database, API client and bearer tokens."""
from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import sisag.models  # noqa: F401
from sisag.database import Base, get_db
from sisag.models import Objective, Project
from sisag.utils.security import create_access_token


@pytest.fixture()
def test_db():
    """Create an in-memory SQLite database shared by every connection."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    yield TestSession
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def db(test_db):
    """A session for calling services directly."""
    session = test_db()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(test_db):
    """FastAPI TestClient bound to the in-memory database.

    The client is not used as a context manager so the application lifespan
    (which creates tables on the configured database) does not run.
    """
    from sisag.main import app

    def override_get_db():
        session = test_db()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app, raise_server_exceptions=True)
    app.dependency_overrides.clear()


def _auth(role: str, sub: str) -> dict[str, str]:
    token = create_access_token(sub, role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def gov_headers():
    return _auth("government", "gov-user-1")


@pytest.fixture()
def partner_headers():
    return _auth("partner", "partner-user-1")


@pytest.fixture()
def citizen_headers():
    return _auth("citizen", "citizen-user-1")


@pytest.fixture()
def make_project(db):
    """Factory inserting a project; keyword arguments override the defaults."""

    def _make(**overrides) -> Project:
        fields = {
            "title": "Réhabilitation du centre de santé",
            "description": "",
            "sector": "Santé",
            "status": "in_progress",
            "budget": 1_000_000,
            "spent": 250_000,
            "province": "Kinshasa",
            "city": "Kinshasa",
            "start_date": date(2024, 1, 1),
            "end_date": date(2024, 12, 31),
            "ministry": "Ministère de la Santé",
            "responsible_person": "Dr. Mbala",
        }
        fields.update(overrides)
        project = Project(**fields)
        db.add(project)
        db.commit()
        db.refresh(project)
        return project

    return _make


@pytest.fixture()
def make_objective(db):
    """Factory inserting a PAG objective."""

    def _make(code: str, sector: str = "Santé", level: str = "national", **overrides) -> Objective:
        objective = Objective(
            code=code,
            title=overrides.pop("title", f"Objectif {code}"),
            level=level,
            sector=sector,
            **overrides,
        )
        db.add(objective)
        db.commit()
        db.refresh(objective)
        return objective

    return _make
