
from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
import src.domain  # noqa: F401  registers the tables on SQLModel.metadata
from src.depends import get_session
from src.domain.base import utc_now
from src.domain.property import Property
from src.domain.tenant import Tenant


@pytest_asyncio.fixture(scope="function")
async def engine():
    """Create test database engine using an in-memory SQLite database"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
def seed_tenant(db_session):
    """Factory inserting a tenant (and optionally its property); returns (tenant_id, property_id)"""

    async def _seed(
        first_name: str = "Ada",
        last_name: str = "Lovelace",
        payment_due_day: int = 15,
        rent_amount: Decimal = Decimal("1450.00"),
        with_property: bool = True,
    ):
        property_id = None
        if with_property:
            rental = Property(
                address=f"{first_name} {last_name} St",
                rent_amount=rent_amount,
                created_at=utc_now(),
                updated_at=utc_now(),
            )
            db_session.add(rental)
            property_id = rental.id

        tenant = Tenant(
            first_name=first_name,
            last_name=last_name,
            payment_due_day=payment_due_day,
            property_id=property_id,
        )
        db_session.add(tenant)
        tenant_id = tenant.id
        await db_session.commit()
        return tenant_id, property_id

    return _seed
