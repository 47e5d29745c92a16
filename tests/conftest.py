"""Fixtures communes / Shared fixtures."""

import os

# Avant tout import de fleetops (Settings lu a l'import) / Before any fleetops import (Settings read at import)
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SEED_VEHICLES", "false")
os.environ.setdefault("DEBUG", "false")

from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import fleetops.models  # noqa: E402,F401
from fleetops.api.deps import get_clock  # noqa: E402
from fleetops.database import Base, get_db  # noqa: E402
from fleetops.main import app  # noqa: E402
from fleetops.schemas.contract import ContractBase  # noqa: E402
from fleetops.utils.clock import FixedClock  # noqa: E402

TODAY = date(2024, 1, 20)


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def make_contract():
    """Fabrique de contrats moteur / Engine contract factory."""

    def _make(**overrides) -> ContractBase:
        fields = {
            "client_name": "Construtora Alfa",
            "vehicle_id": 1,
            "start_date": date(2024, 1, 10),
            "end_date": date(2024, 1, 20),
            "daily_rate": Decimal("1000"),
            "working_days": {1, 2, 3, 4, 5},
        }
        fields.update(overrides)
        return ContractBase(**fields)

    return _make


@pytest.fixture
async def session_factory():
    """Base SQLite en memoire par test / In-memory SQLite database per test."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def client(session_factory, clock):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
