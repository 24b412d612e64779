"""원장 서비스/레포지토리 단위 테스트.

Service-level tests — Commit boundaries, worker get-or-create and guards that
the HTTP schema normally keeps out of reach.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from harvest_ledger.repositories.block_repository import block_repository
from harvest_ledger.repositories.worker_repository import worker_repository
from harvest_ledger.services.ledger_service import ledger_service
from harvest_ledger.utils.exceptions import BadRequestError, NotFoundError


class TestCommitBoundary:
    """트랜잭션 경계 테스트."""

    async def test_check_out_visible_to_new_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        block,
    ):
        """커밋 후 열과 작업자 변경이 함께 보임."""
        async with session_factory() as session:
            await ledger_service.check_in(session, "w1", "Alice", "5", "A1")
            await ledger_service.check_out(session, "w1", "Alice", "5", "A1", 25)
            await session.commit()

        async with session_factory() as session:
            stored_block = await block_repository.get_by_name(session, "A1")
            row = next(r for r in stored_block.rows if r.row_number == "5")
            assert row.remaining_stock_count == 75
            assert row.stock_count == 25
            assert row.is_occupied is False

            worker = await worker_repository.get_by_worker_id(session, "w1")
            assert worker.total_stock_count == 25
            assert worker.blocks[0].rows[0].stock_count == 25

    async def test_rollback_discards_row_and_worker(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        block,
    ):
        """롤백 시 체크인과 작업자 생성 모두 취소."""
        async with session_factory() as session:
            await ledger_service.check_in(session, "w1", "Alice", "5", "A1")
            await session.rollback()

        async with session_factory() as session:
            stored_block = await block_repository.get_by_name(session, "A1")
            assert stored_block.rows[0].is_occupied is False
            assert await worker_repository.get_by_worker_id(session, "w1") is None


class TestServiceGuards:
    """서비스 계층 검증 테스트."""

    async def test_negative_stock_rejected(self, db: AsyncSession, block):
        await ledger_service.check_in(db, "w1", "Alice", "5", "A1")

        with pytest.raises(BadRequestError):
            await ledger_service.check_out(db, "w1", "Alice", "5", "A1", -5)

    async def test_check_out_unknown_row(self, db: AsyncSession, block):
        with pytest.raises(NotFoundError):
            await ledger_service.check_out(db, "w1", "Alice", "99", "A1", 1)


class TestWorkerGetOrCreate:
    """작업자 조회/생성 테스트."""

    async def test_creates_once(self, db: AsyncSession):
        worker, created = await worker_repository.get_or_create(db, "w1", "Alice")
        assert created is True
        assert worker.total_stock_count == 0
        assert worker.blocks == []

        again, created = await worker_repository.get_or_create(db, "w1", "Someone Else")
        assert created is False
        assert again.id == worker.id
        assert again.name == "Alice"

    async def test_nested_entries_are_reused(self, db: AsyncSession):
        worker, _ = await worker_repository.get_or_create(db, "w1", "Alice")

        entry = worker_repository.get_or_create_block_entry(worker, "A1")
        assert worker_repository.get_or_create_block_entry(worker, "A1") is entry
        assert len(worker.blocks) == 1

        total = worker_repository.get_or_create_row_total(entry, "5")
        assert worker_repository.get_or_create_row_total(entry, "5") is total
        assert total.stock_count == 0
        assert total.time_spent == 0.0


class TestRowEntryOrder:
    """열 체크아웃 기록 정렬 테스트."""

    async def test_same_instant_entries_keep_insertion_order(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        block,
    ):
        """같은 시각에 기록된 체크아웃도 입력 순서대로 조회."""
        async with session_factory() as session:
            for stock_count in (10, 20, 30):
                await ledger_service.check_in(session, "w1", "Alice", "5", "A1")
                await ledger_service.check_out(session, "w1", "Alice", "5", "A1", stock_count)
            await session.commit()

        async with session_factory() as session:
            stored_block = await block_repository.get_by_name(session, "A1")
            row = next(r for r in stored_block.rows if r.row_number == "5")
            assert len({entry.recorded_at for entry in row.daily_entries}) == 1
            assert [entry.stock_count for entry in row.daily_entries] == [10, 20, 30]
