"""Fixtures partagées / Shared test fixtures.

Chaque test reçoit une base SQLite en mémoire neuve.
Each test gets a fresh in-memory SQLite database.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.database import Base, get_db
from app.main import app
from app.models.absence_request import AbsenceRequest, AbsenceStatus
from app.models.client import Client
from app.models.company import Company
from app.models.contract import Contract, ContractStatus
from app.models.job import Job, JobStatus
from app.models.user import User, UserRole
from app.rate_limit import limiter
from app.services.time_calculator import TimeCalculatorService
from app.utils.auth import create_access_token, hash_password

PASSWORD = "secret123"
# Un seul hash bcrypt pour toute la session / One bcrypt hash for the whole run
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def _get_test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    limiter.enabled = False
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    limiter.enabled = True


async def _add(db: AsyncSession, obj):
    db.add(obj)
    await db.commit()
    return obj


def _user(company: Company, username: str, role: UserRole, **kwargs) -> User:
    return User(
        company_id=company.id,
        username=username,
        email=f"{username}@example.com",
        hashed_password=PASSWORD_HASH,
        role=role,
        is_active=True,
        **kwargs,
    )


@pytest.fixture
async def company(db):
    return await _add(db, Company(name="Sparkle Co", timezone="America/Toronto"))


@pytest.fixture
async def other_company(db):
    return await _add(db, Company(name="Other Co", timezone="Europe/Paris"))


@pytest.fixture
async def admin(db, company):
    return await _add(db, _user(company, "admin", UserRole.ADMIN, first_name="Ada"))


@pytest.fixture
async def manager(db, company):
    return await _add(db, _user(company, "manager", UserRole.MANAGER, first_name="Max", last_name="Roy"))


@pytest.fixture
async def cleaner(db, company):
    return await _add(db, _user(company, "marie", UserRole.CLEANER, first_name="Marie", last_name="Tremblay"))


@pytest.fixture
async def cleaner2(db, company):
    return await _add(db, _user(company, "paul", UserRole.CLEANER, first_name="Paul", last_name="Gagnon"))


@pytest.fixture
async def client_acme(db, company):
    return await _add(db, Client(company_id=company.id, name="Acme Offices", email="desk@acme.test", phone="555-0100"))


@pytest.fixture
async def client_beta(db, company):
    return await _add(db, Client(company_id=company.id, name="Beta Lofts", phone="555-0200"))


@pytest.fixture
async def contract_acme(db, company, client_acme):
    return await _add(db, Contract(
        company_id=company.id,
        client_id=client_acme.id,
        contract_number="C-001",
        status=ContractStatus.ACTIVE,
        start_date="2020-01-01",
    ))


@pytest.fixture
async def contract_beta(db, company, client_beta):
    return await _add(db, Contract(
        company_id=company.id,
        client_id=client_beta.id,
        contract_number="C-002",
        status=ContractStatus.ACTIVE,
        start_date="2020-01-01",
    ))


@pytest.fixture
def make_job(db, company):
    """Insérer un job directement / Insert a job directly, bypassing the checks."""

    async def _make(client, cleaner, date, start_time="09:00", duration=120, status=JobStatus.SCHEDULED):
        end_time = None
        if start_time and duration:
            end_time = TimeCalculatorService.add_minutes_to_time(start_time, duration)
        return await _add(db, Job(
            company_id=company.id,
            client_id=client.id,
            cleaner_id=cleaner.id,
            scheduled_date=date,
            start_time=start_time,
            end_time=end_time,
            duration_minutes=duration,
            status=status,
            services="standard",
        ))

    return _make


@pytest.fixture
def make_absence(db, company):
    async def _make(cleaner, start_date, end_date, status=AbsenceStatus.APPROVED):
        return await _add(db, AbsenceRequest(
            company_id=company.id,
            cleaner_id=cleaner.id,
            start_date=start_date,
            end_date=end_date,
            status=status,
        ))

    return _make


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.company_id)}"}


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def manager_headers(manager):
    return auth_headers(manager)


@pytest.fixture
def cleaner_headers(cleaner):
    return auth_headers(cleaner)
