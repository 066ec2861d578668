"""
Shared fixtures for pytest: database setup, seed data, the HTTP client and
authentication helpers.
"""
import os

# Settings are read at import time, so configure the environment first
os.environ["ASYNC_DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_TO_FILE"] = "False"
os.environ["INTERNAL_API_KEY"] = "test-internal-key"
os.environ["SECRET_KEY"] = "test-secret-key"

import uuid
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, select
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.ext.compiler import compiles

from app.core.security import create_access_token
from app.db.async_session import Base, get_async_db
from app.main import app
from app.models import (
    Profile, Role, ProfileProjectRole, InstrumentType, Parameter, Unit, Status,
    Office, Project, Instrument, Timeseries, TimeseriesMeasurement,
    AwareParameter, AwarePlatform, AwarePlatformParameterEnabled,
)

# Test database URL - use SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"

SEED_CREATE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)


# Make JSONB work with SQLite
@compiles(JSONB, "sqlite")
def compile_jsonb_sqlite(element, compiler, **kw):
    # Use JSON type for SQLite instead of JSONB
    return compiler.visit_JSON(element, **kw)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest_asyncio.fixture(scope="function")
async def db() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh database for each test and yield a session.
    After the test completes, drop all tables.
    """
    engine = create_async_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        await seed_test_data(session)
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client bound to the app, using the test database session
    """
    async def override_get_db():
        yield db

    app.dependency_overrides[get_async_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def seed_test_data(db: AsyncSession) -> None:
    admin = Profile(id=uuid.uuid4(), edipi="1000000001", username="admin", email="admin@example.com", is_admin=True)
    member = Profile(id=uuid.uuid4(), edipi="1000000002", username="member", email="member@example.com")
    outsider = Profile(id=uuid.uuid4(), edipi="1000000003", username="outsider", email="outsider@example.com")
    db.add_all([admin, member, outsider])

    role = Role(id=uuid.uuid4(), name="MEMBER")
    piezometer = InstrumentType(id=uuid.uuid4(), name="Piezometer")
    inclinometer = InstrumentType(id=uuid.uuid4(), name="Inclinometer")
    pressure = Parameter(id=uuid.uuid4(), name="pressure")
    feet = Unit(id=uuid.uuid4(), name="feet", abbreviation="ft")
    active = Status(id=uuid.uuid4(), name="active", description="Instrument is reporting")
    inactive = Status(id=uuid.uuid4(), name="inactive", description="Instrument is offline")
    office = Office(id=uuid.uuid4(), name="Jacksonville District", symbol="SAJ")
    db.add_all([role, piezometer, inclinometer, pressure, feet, active, inactive, office])
    await db.flush()

    project = Project(
        id=uuid.uuid4(),
        slug="blue-water-dam",
        name="Blue Water Dam",
        office_id=office.id,
        creator=admin.id,
        create_date=SEED_CREATE_DATE,
    )
    other_project = Project(
        id=uuid.uuid4(),
        slug="red-rock-levee",
        name="Red Rock Levee",
        creator=admin.id,
        create_date=SEED_CREATE_DATE,
    )
    db.add_all([project, other_project])
    await db.flush()

    db.add(ProfileProjectRole(id=uuid.uuid4(), profile_id=member.id, project_id=project.id, role_id=role.id))
    instrument = Instrument(
        id=uuid.uuid4(),
        slug="pz-1",
        name="PZ-1",
        type_id=piezometer.id,
        project_id=project.id,
        geometry={"type": "Point", "coordinates": [-80.8, 26.7]},
        station=100,
        offset=5,
        creator=admin.id,
        create_date=SEED_CREATE_DATE,
    )
    db.add(instrument)
    await db.flush()

    timeseries = Timeseries(
        id=uuid.uuid4(),
        slug="pz-1-pressure",
        name="PZ-1 Pressure",
        instrument_id=instrument.id,
        parameter_id=pressure.id,
        unit_id=feet.id,
    )
    db.add(timeseries)
    await db.flush()

    db.add_all([
        TimeseriesMeasurement(id=uuid.uuid4(), timeseries_id=timeseries.id, time=utc(2024, 1, 1, 10), value=1.0),
        TimeseriesMeasurement(id=uuid.uuid4(), timeseries_id=timeseries.id, time=utc(2024, 1, 1, 11), value=2.0),
    ])

    aware_parameter = AwareParameter(id=uuid.uuid4(), key="h2oLevel", parameter_id=pressure.id, unit_id=feet.id)
    unmatched_parameter = AwareParameter(id=uuid.uuid4(), key="batteryVoltage", parameter_id=pressure.id, unit_id=feet.id)
    platform = AwarePlatform(id=uuid.uuid4(), aware_id=uuid.uuid4(), instrument_id=instrument.id)
    db.add_all([aware_parameter, unmatched_parameter, platform])
    await db.flush()
    db.add(AwarePlatformParameterEnabled(aware_platform_id=platform.id, aware_parameter_id=aware_parameter.id))

    await db.commit()


# Seeded entity fixtures

@pytest_asyncio.fixture
async def admin_profile(db: AsyncSession) -> Profile:
    result = await db.execute(select(Profile).filter(Profile.username == "admin"))
    return result.scalars().first()


@pytest_asyncio.fixture
async def member_profile(db: AsyncSession) -> Profile:
    result = await db.execute(select(Profile).filter(Profile.username == "member"))
    return result.scalars().first()


@pytest_asyncio.fixture
async def project(db: AsyncSession) -> Project:
    result = await db.execute(select(Project).filter(Project.slug == "blue-water-dam"))
    return result.scalars().first()


@pytest_asyncio.fixture
async def other_project(db: AsyncSession) -> Project:
    result = await db.execute(select(Project).filter(Project.slug == "red-rock-levee"))
    return result.scalars().first()


@pytest_asyncio.fixture
async def instrument(db: AsyncSession) -> Instrument:
    result = await db.execute(select(Instrument).filter(Instrument.slug == "pz-1"))
    return result.scalars().first()


@pytest_asyncio.fixture
async def instrument_type(db: AsyncSession) -> InstrumentType:
    result = await db.execute(select(InstrumentType).filter(InstrumentType.name == "Piezometer"))
    return result.scalars().first()


@pytest_asyncio.fixture
async def timeseries(db: AsyncSession) -> Timeseries:
    result = await db.execute(select(Timeseries).filter(Timeseries.slug == "pz-1-pressure"))
    return result.scalars().first()


@pytest_asyncio.fixture
async def parameter(db: AsyncSession) -> Parameter:
    result = await db.execute(select(Parameter).filter(Parameter.name == "pressure"))
    return result.scalars().first()


@pytest_asyncio.fixture
async def unit(db: AsyncSession) -> Unit:
    result = await db.execute(select(Unit).filter(Unit.name == "feet"))
    return result.scalars().first()


@pytest_asyncio.fixture
async def statuses(db: AsyncSession) -> dict:
    result = await db.execute(select(Status))
    return {status.name: status for status in result.scalars().all()}


# Token fixtures

@pytest_asyncio.fixture
async def admin_token(admin_profile: Profile) -> str:
    """Generate an admin token for tests"""
    return create_access_token(subject=str(admin_profile.id), expires_delta=timedelta(minutes=30))


@pytest_asyncio.fixture
async def member_token(member_profile: Profile) -> str:
    """Generate a non-admin token for tests"""
    return create_access_token(subject=str(member_profile.id), expires_delta=timedelta(minutes=30))


@pytest_asyncio.fixture
async def expired_token(admin_profile: Profile) -> str:
    """Generate an expired token for tests"""
    return create_access_token(
        subject=str(admin_profile.id),
        expires_delta=timedelta(minutes=-30)  # Negative minutes = expired
    )


@pytest.fixture
def admin_headers(admin_token: str) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def member_headers(member_token: str) -> dict:
    return {"Authorization": f"Bearer {member_token}"}
