"""
Test configuration and fixtures
"""

from dataclasses import dataclass
from datetime import date, time

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.domains.staff.models import Employee, Role, Shift
from app.infra.database import Base, get_db
from app.main import app

# Create in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database with all tables for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragmas(dbapi_connection, connection_record):
        # Enforce foreign keys and make LIKE case-sensitive, as on PostgreSQL
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA case_sensitive_like=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """Create an async test client with database dependency override"""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@dataclass
class Staff:
    """Sample data shared by the database-backed tests."""

    cashier: Role
    cook: Role
    manager: Role
    alice: Employee
    bob: Employee
    carla: Employee
    shifts: list[Shift]


MONDAY = date(2024, 5, 6)


@pytest_asyncio.fixture
async def staff(db_session) -> Staff:
    """Three roles, three employees and four shifts.

    Shift roles are cashier, cook, cook, manager; the first three fall in the
    week starting MONDAY, the last one in the week after.
    """
    cashier, cook, manager = Role(name="Cashier"), Role(name="Cook"), Role(name="Manager")
    alice = Employee(first_name="Alice", last_name="Smith", roles=[cashier, cook])
    bob = Employee(first_name="Bob", last_name="Jones", roles=[cook])
    carla = Employee(first_name="Carla", last_name="smithson", roles=[])
    db_session.add_all([cashier, cook, manager, alice, bob, carla])
    await db_session.flush()

    shifts = [
        Shift(
            employee_id=alice.id,
            role_id=cashier.id,
            start_date=MONDAY,
            end_date=MONDAY,
            start_time=time(9, 0),
            end_time=time(17, 0),
        ),
        Shift(
            employee_id=bob.id,
            role_id=cook.id,
            start_date=MONDAY,
            end_date=MONDAY,
            start_time=time(9, 0),
            end_time=time(17, 0),
        ),
        Shift(
            employee_id=alice.id,
            role_id=cook.id,
            start_date=date(2024, 5, 8),
            end_date=date(2024, 5, 8),
            start_time=time(12, 0),
            end_time=time(20, 0),
        ),
        Shift(
            employee_id=bob.id,
            role_id=manager.id,
            start_date=date(2024, 5, 13),
            end_date=date(2024, 5, 13),
            start_time=time(8, 0),
            end_time=time(12, 0),
        ),
    ]
    db_session.add_all(shifts)
    await db_session.commit()

    return Staff(cashier, cook, manager, alice, bob, carla, shifts)
