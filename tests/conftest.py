"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from factory_pulse.db.base import Base
# Import all models to register with Base.metadata
import factory_pulse.db.models  # noqa: F401
from factory_pulse.events.webhook_config import webhook_registry


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create a test database session."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(db_engine):
    """Create a test application instance with in-memory DB."""
    from factory_pulse.main import create_app

    _app = create_app()
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    _app.state.db_engine = db_engine
    _app.state.db_session_factory = session_factory
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(autouse=True)
def clean_webhook_registry():
    """Keep the module-level webhook registry empty between tests."""
    webhook_registry.clear()
    yield
    webhook_registry.clear()


@pytest.fixture
def complete_inquiry() -> dict:
    """A project snapshot whose inquiry stage is complete."""
    return {
        "status": "inquiry_received",
        "customer_id": "cust_acme",
        "description": "Laser-cut stainless brackets",
    }


@pytest.fixture
def reviewed_project() -> dict:
    """A project in technical review with all three reviewers assigned."""
    return {
        "status": "technical_review",
        "customer_id": "cust_acme",
        "description": "Laser-cut stainless brackets",
        "engineering_reviewer_id": "usr_eng",
        "qa_reviewer_id": "usr_qa",
        "production_reviewer_id": "usr_prod",
    }
