"""Shared fixtures for PCP Tracker tests."""

import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio


# ============================================================================
# Clock
# ============================================================================


class FixedClock:
    """Callable clock that returns a settable instant."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    """Clock fixed at 2024-07-15 12:00 UTC."""
    return FixedClock(datetime(2024, 7, 15, 12, 0, tzinfo=timezone.utc))


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def temp_db_path() -> AsyncGenerator[Path, None]:
    """Create temporary database file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield db_path


@pytest_asyncio.fixture
async def test_database(temp_db_path: Path):
    """Initialized test database."""
    from src.database.connection import Database

    db = Database(temp_db_path)
    await db.connect()
    yield db
    await db.close()


@pytest.fixture
def sku_repo(test_database):
    from src.repositories import SqliteSkuRepository

    return SqliteSkuRepository(test_database)


@pytest.fixture
def order_repo(test_database):
    from src.repositories import SqliteProductionOrderRepository

    return SqliteProductionOrderRepository(test_database)


@pytest.fixture
def demand_repo(test_database):
    from src.repositories import SqliteDemandRepository

    return SqliteDemandRepository(test_database)


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def reporting_config():
    """Default ReportingConfig (UTC, 6 months, 25% critical threshold)."""
    from src.config import ReportingConfig

    return ReportingConfig()


@pytest.fixture
def test_config(temp_db_path, reporting_config):
    """Complete test AppConfig."""
    from src.config import AppConfig

    return AppConfig(db_path=temp_db_path, log_level="DEBUG", reporting=reporting_config)


# ============================================================================
# Services over the SQLite repositories
# ============================================================================


@pytest.fixture
def sku_service(sku_repo, order_repo, demand_repo, clock):
    from src.services import SkuService

    return SkuService(sku_repo, order_repo, demand_repo, clock=clock)


@pytest.fixture
def order_service(order_repo, sku_repo, clock):
    from src.services import ProductionOrderService

    return ProductionOrderService(order_repo, sku_repo, clock=clock)


@pytest.fixture
def demand_service(demand_repo, sku_repo, clock):
    from src.services import DemandService

    return DemandService(demand_repo, sku_repo, clock=clock)


@pytest.fixture
def report_service(sku_repo, order_repo, demand_repo, reporting_config, clock):
    from src.services import ReportService

    return ReportService(sku_repo, order_repo, demand_repo, reporting=reporting_config, clock=clock)
