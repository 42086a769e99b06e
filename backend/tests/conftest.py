"""Pytest configuration and shared fixtures."""

import os
from datetime import datetime

# Secrets must exist BEFORE the app factory runs
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret")

import pytest

from pregnancy_bp import create_app, db
from pregnancy_bp.core.classifier import PREGNANCY, classify
from pregnancy_bp.core.clock import FixedClock
from pregnancy_bp.models.reading import Reading, new_reading_id
from pregnancy_bp.utils.auth import generate_session_token

NOW = datetime(2026, 3, 1, 9, 30)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def app(clock):
    """App wired to in-memory SQLite with a frozen clock."""
    app = create_app("testing")
    app.config["CLOCK"] = clock
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def bearer(user_id="user-1", name="Jane Doe"):
    return {"Authorization": f"Bearer {generate_session_token(user_id, name)}"}


@pytest.fixture
def auth_headers():
    return bearer()


def make_reading(systolic=118, diastolic=76, pulse=80, date="2026-03-01",
                 time="08:00", week=10, ruleset=PREGNANCY, **extra):
    """Build a classified reading without going through the service."""
    return Reading(
        id=extra.pop("id", new_reading_id()),
        systolic=systolic,
        diastolic=diastolic,
        pulse=pulse,
        date=date,
        time=time,
        category=classify(systolic, diastolic, ruleset),
        pregnancy_week=week,
        **extra,
    )
