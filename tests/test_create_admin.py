"""
Tests for the admin bootstrap script
"""
import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker

from app.db.async_session import Base
from app.models import Profile
from create_admin import create_admin_profile


@pytest.fixture
def sync_db():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()
    yield session
    session.close()
    engine.dispose()


def test_create_admin_profile(sync_db):
    profile = create_admin_profile(sync_db, "ops", "ops@example.com", "2000000001")
    assert profile.is_admin is True
    assert profile.username == "ops"


def test_create_admin_profile_is_idempotent(sync_db):
    first = create_admin_profile(sync_db, "ops", "ops@example.com", "2000000001")
    second = create_admin_profile(sync_db, "ops", "ops@example.com", "2000000001")
    assert first.id == second.id
    assert sync_db.execute(select(func.count(Profile.id))).scalar() == 1


def test_existing_profile_is_promoted(sync_db):
    sync_db.add(Profile(edipi="2000000002", username="analyst", email="analyst@example.com", is_admin=False))
    sync_db.commit()

    profile = create_admin_profile(sync_db, "analyst", "analyst@example.com", "2000000002")
    assert profile.is_admin is True
