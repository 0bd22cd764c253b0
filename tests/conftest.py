"""
Pytest Configuration and Fixtures

Provides fixtures for:
- Database sessions (async, in-memory SQLite)
- HTTP client bound to the app with the session injected
- Test data factories for users, stations, ports and bookings
"""
import os

# Must be set before chargeslot.config is imported
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-for-testing-only")
os.environ.setdefault("BOOKING_TIMEZONE", "UTC")

from datetime import date, datetime, time, timedelta
from typing import AsyncGenerator

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from chargeslot.core.security import create_user_token
from chargeslot.database import Base, get_db
from chargeslot.domain.booking_state import PENDING
from chargeslot.main import app
from chargeslot.models import Booking, Port, Station, User

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed clock for service-level tests
NOW = datetime(2025, 6, 30, 12, 0)
BOOKING_DAY = date(2025, 7, 1)


def slot(hour: int, minute: int = 0, day: date = BOOKING_DAY) -> datetime:
    """Naive local slot start on ``day``."""
    return datetime.combine(day, time(hour, minute))


def future_day(days: int = 7) -> date:
    """A date safely in the future for tests that run against the real clock."""
    return date.today() + timedelta(days=days)


@pytest.fixture(scope="function")
async def async_engine():
    """Create async test database engine"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        # SQLite leaves foreign keys off unless asked per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async database session for tests"""
    async_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture(scope="function")
async def test_client(db_session: AsyncSession):
    """Create test client with database override"""
    from httpx import ASGITransport, AsyncClient

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ============================================================================
# Test Data Factories
# ============================================================================

@pytest.fixture
def user_factory(db_session: AsyncSession):
    """Factory for creating test users"""
    counter = {"n": 0}

    async def _create_user(
        name: str = "Test Driver",
        email: str | None = None,
        is_active: bool = True,
    ) -> User:
        counter["n"] += 1
        user = User(
            name=name,
            email=email or f"driver{counter['n']}@example.com",
            is_active=is_active,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _create_user


@pytest.fixture
def station_factory(db_session: AsyncSession):
    """Factory for creating stations with ``ports`` active Type 2 ports"""
    async def _create_station(
        name: str = "Downtown Charging Station",
        address: str = "123 Main Street, Downtown",
        location: str = "Downtown",
        is_active: bool = True,
        ports: int = 2,
    ) -> Station:
        station = Station(
            name=name,
            address=address,
            location=location,
            is_active=is_active,
        )
        station.ports = [
            Port(port_number=f"P{i}", charging_type="Type 2", power_kw=22, is_active=True)
            for i in range(1, ports + 1)
        ]
        db_session.add(station)
        await db_session.commit()
        return station

    return _create_station


@pytest.fixture
def booking_factory(db_session: AsyncSession):
    """Factory for inserting bookings directly, bypassing validation"""
    async def _create_booking(
        user: User,
        port: Port,
        timeslot: datetime,
        status: str = PENDING,
        admin_notes: str | None = None,
    ) -> Booking:
        booking = Booking(
            user_id=user.id,
            station_id=port.station_id,
            port_id=port.id,
            timeslot=timeslot,
            status=status,
            admin_notes=admin_notes,
        )
        db_session.add(booking)
        await db_session.commit()
        return booking

    return _create_booking


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user"""
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_user_token(user.id, user.email)}"}

    return _headers


# ============================================================================
# Sample Test Data
# ============================================================================

@pytest.fixture
async def sample_user(user_factory) -> User:
    """Create a sample driver"""
    return await user_factory(name="Sample Driver", email="sample@example.com")


@pytest.fixture
async def sample_station(station_factory) -> Station:
    """Create a sample active station with two ports"""
    return await station_factory()
