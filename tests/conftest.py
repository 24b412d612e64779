"""테스트 인프라 — 임시 DB, 세션, httpx 클라이언트, 고정 시계 픽스처.

Test infrastructure — Temporary database, session, httpx client and clock fixtures.
Uses in-memory SQLite (aiosqlite) by default; set TEST_DATABASE_URL to run
against PostgreSQL instead. Schema is created and dropped per test.
"""

import os
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from harvest_ledger.database import Base, get_db
from harvest_ledger.main import app
from harvest_ledger.models import *  # noqa: F401,F403 — register all models with metadata
from harvest_ledger.services.block_service import block_service
from harvest_ledger.services.ledger_service import ledger_service

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")

API = "/api/v1"

# 2026-03-02 은 월요일 (Monday)
CLOCK_START = datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)


class FakeClock:
    """테스트용 시계 — 호출 시 고정 시각을 반환하고 advance()로 이동합니다."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: float) -> None:
        self.now = self.now + timedelta(minutes=minutes)


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 스키마를 생성하고 종료 시 삭제합니다."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        eng = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    else:
        eng = create_async_engine(TEST_DATABASE_URL, pool_pre_ping=True)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    """원장 서비스의 시계를 고정 시계로 교체합니다."""
    fake = FakeClock(CLOCK_START)
    monkeypatch.setattr(ledger_service, "clock", fake)
    return fake


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def block(db: AsyncSession):
    """블록 A1 생성 — 전체 재고 200, 열 "5"(100), "6"(50)."""
    b = await block_service.create_block(
        db,
        block_name="A1",
        total_stocks=200,
        rows=[("5", 100), ("6", 50)],
    )
    await db.commit()
    return b


def check_in_body(worker_id: str = "w1", worker_name: str = "Alice", row: str = "5", block_name: str = "A1") -> dict:
    return {
        "workerID": worker_id,
        "workerName": worker_name,
        "rowNumber": row,
        "blockName": block_name,
    }


def check_out_body(
    worker_id: str = "w1",
    worker_name: str = "Alice",
    row: str = "5",
    block_name: str = "A1",
    stock_count: int | None = None,
) -> dict:
    body = check_in_body(worker_id, worker_name, row, block_name)
    if stock_count is not None:
        body["stockCount"] = stock_count
    return body
