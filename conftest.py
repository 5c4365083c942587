import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import date

import fakeredis
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from event_quotes.main import app
from event_quotes.core import redis as redis_client
from event_quotes.db.session import get_db
from event_quotes.models.registry import AdminUser, Base, Quote
from event_quotes.core.enums import AdminRole, QuoteStatus
from event_quotes.core.security import create_access_token, hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite://"
ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def test_client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def fake_redis(monkeypatch):
    client = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer())
    monkeypatch.setattr(redis_client, "redis", client)
    yield client
    await client.aclose()


async def _create_admin(db_session, email, role, is_active=True):
    admin = AdminUser(
        email=email,
        full_name="Test Admin",
        password_hash=hash_password(ADMIN_PASSWORD),
        role=role,
        is_active=is_active,
    )
    db_session.add(admin)
    await db_session.commit()
    await db_session.refresh(admin)
    return admin


@pytest.fixture
def admin_password():
    return ADMIN_PASSWORD


@pytest.fixture
async def admin_user(db_session):
    return await _create_admin(db_session, "admin@example.com", AdminRole.ADMIN)


@pytest.fixture
async def super_admin_user(db_session):
    return await _create_admin(db_session, "owner@example.com", AdminRole.SUPER_ADMIN)


@pytest.fixture
async def inactive_admin_user(db_session):
    return await _create_admin(db_session, "former@example.com", AdminRole.ADMIN, is_active=False)


@pytest.fixture
def admin_headers(admin_user):
    token = create_access_token(str(admin_user.id), admin_user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def super_admin_headers(super_admin_user):
    token = create_access_token(str(super_admin_user.id), super_admin_user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def valid_quote_data():
    return {
        "name": "Jane Smith",
        "email": "jane@example.com",
        "phone": "469-555-0100",
        "event_type": "Wedding",
        "guest_count": "200-300",
        "event_date": "2030-06-15",
        "start_time": "10:00",
        "end_time": "18:00",
        "event_location": "123 Main St, Frisco, TX",
        "distance_miles": 35,
        "water_connection": "yes",
        "cleaning_attendant": True,
        "baby_changing_station": True,
        "additional_requests": "Near the reception tent",
    }


@pytest.fixture
def quote_factory(db_session):
    async def _create_quote(**kwargs):
        data = {
            "name": "Test Customer",
            "email": "customer@example.com",
            "phone": "469-555-0199",
            "event_type": "Birthday",
            "guest_count": "50-100",
            "event_date": date(2030, 1, 10),
            "start_time": "09:00",
            "end_time": "14:00",
            "event_location": "1 Elm St, McKinney, TX",
            "distance_miles": 10,
            "water_connection": "no",
            "quote_amount": 99500,
            "status": QuoteStatus.PENDING,
            "tags": [],
        }
        data.update(kwargs)
        quote = Quote(**data)
        db_session.add(quote)
        await db_session.commit()
        await db_session.refresh(quote)
        return quote

    return _create_quote


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "admin: marks tests related to the admin back-office"
    )
