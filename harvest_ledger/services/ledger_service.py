"""재고 원장 서비스 — 체크인/체크아웃 비즈니스 로직.

Ledger Service — Business logic for row check-in and check-out.
Check-in claims a row exclusively for one worker; check-out releases it,
deducts the consumed stock from the row and appends the worker's history.
These are the only two operations that mutate ledger state.

Row state flow: unoccupied -> (check_in) -> occupied(worker) -> (check_out) -> unoccupied

Both operations run inside the caller's transaction and only flush; the
route commits once, so the row update and the worker update are committed
together or not at all.
"""

from collections.abc import Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from harvest_ledger.config import settings
from harvest_ledger.models.block import Block, Row, RowDailyEntry
from harvest_ledger.models.worker import Worker, WorkerBlock, WorkerDailyStockEntry, WorkerRowTotal
from harvest_ledger.repositories.block_repository import block_repository
from harvest_ledger.repositories.worker_repository import worker_repository
from harvest_ledger.utils.exceptions import BadRequestError, ConflictError, InternalError, NotFoundError
from harvest_ledger.utils.timeutils import (
    day_of_week,
    format_duration,
    ledger_date,
    minutes_between,
    utc_now,
)


class LedgerService:
    """체크인/체크아웃 원장 서비스.

    Ledger service handling the row occupancy state machine and stock accounting.

    Attributes:
        clock: 현재 시각 함수 (Callable returning the current aware datetime)
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self.clock: Callable[[], datetime] = clock

    async def _get_block(self, db: AsyncSession, block_name: str) -> Block:
        block: Block | None = await block_repository.get_by_name(db, block_name)
        if block is None:
            raise NotFoundError("Block not found")
        return block

    @staticmethod
    def _is_occupied_by(row: Row, worker_id: str, worker_name: str) -> bool:
        """체크아웃 요청자가 현재 점유자인지 확인합니다.

        The occupant is matched by name unless MATCH_OCCUPANT_BY_ID is set.
        """
        if not row.is_occupied:
            return False
        if settings.MATCH_OCCUPANT_BY_ID:
            return row.worker_id == worker_id
        return row.worker_name == worker_name

    # === 체크인 (Check-in) ===

    async def check_in(
        self,
        db: AsyncSession,
        worker_id: str,
        worker_name: str,
        row_number: str,
        block_name: str,
    ) -> dict:
        """작업자를 열에 체크인합니다.

        Claim a row for a worker and start its timer. Creates an empty worker
        record the first time a worker_id is seen.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            worker_id: 작업자 ID (Worker id)
            worker_name: 작업자 이름 (Worker display name)
            row_number: 열 번호 (Row number)
            block_name: 블록 이름 (Block name)

        Returns:
            dict: 열 번호, 작업 가능 재고, 점유자, 시작 시각
                  (Row number, available stock, occupant and start time)

        Raises:
            NotFoundError: 블록 또는 열이 없을 때 (When the block or row does not exist)
            ConflictError: 다른 작업자가 점유 중일 때 (When the row is already occupied)
        """
        block: Block = await self._get_block(db, block_name)

        row: Row | None = await block_repository.get_row_for_update(db, block.id, row_number)
        if row is None:
            raise NotFoundError("Row not found")

        if row.is_occupied:
            raise ConflictError(
                f"Row {row_number} is already being worked on by {row.worker_name}. "
                "The row must be checked out before another worker can check in."
            )

        now: datetime = self.clock()
        row.worker_id = worker_id
        row.worker_name = worker_name
        row.start_time = now
        await db.flush()

        await worker_repository.get_or_create(db, worker_id, worker_name)

        return {
            "row_number": row.row_number,
            "remaining_stocks": row.available_stock,
            "worker_name": worker_name,
            "start_time": now,
        }

    # === 체크아웃 (Check-out) ===

    async def check_out(
        self,
        db: AsyncSession,
        worker_id: str,
        worker_name: str,
        row_number: str,
        block_name: str,
        stock_count: int | None = None,
    ) -> dict:
        """작업자를 열에서 체크아웃하고 소비 재고를 기록합니다.

        Release a row, deduct the consumed stock and append the worker's
        history. Without ``stock_count`` the worker is taken to have finished
        the row, consuming everything that remains.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            worker_id: 작업자 ID (Worker id)
            worker_name: 작업자 이름 (Worker display name, matched against the occupant)
            row_number: 열 번호 (Row number)
            block_name: 블록 이름 (Block name)
            stock_count: 소비 재고, 선택 (Consumed stock, optional)

        Returns:
            dict: 작업 시간 문자열, 열 번호, 소비 재고, 잔여 재고
                  (Duration string, row number, consumed stock, remaining stock)

        Raises:
            NotFoundError: 블록이 없거나 열/작업자가 일치하지 않을 때
                           (Block missing, or row not occupied by this worker)
            BadRequestError: 소비 재고가 잔여 재고를 초과할 때
                             (Consumed stock exceeds the remaining stock)
            InternalError: 점유 중인 열에 시작 시각이 없을 때
                           (Occupied row without a start time)
        """
        block: Block = await self._get_block(db, block_name)

        row: Row | None = await block_repository.get_row_for_update(db, block.id, row_number)
        if row is None or not self._is_occupied_by(row, worker_id, worker_name):
            raise NotFoundError("Row or worker not found")

        if row.start_time is None:
            raise InternalError(f"Row {row_number} is occupied but has no start time")

        now: datetime = self.clock()
        time_spent_minutes: float = minutes_between(row.start_time, now)

        available: int = row.available_stock
        consumed: int = available if stock_count is None else stock_count
        if consumed < 0:
            raise BadRequestError("Invalid stock count: must not be negative")

        new_remaining: int = available - consumed
        if new_remaining < 0:
            raise BadRequestError("Invalid stock count: exceeds available stocks")

        # 열 원장 갱신 — Row ledger update
        row.daily_entries.append(
            RowDailyEntry(
                worker_id=worker_id,
                stock_count=consumed,
                time_spent_minutes=time_spent_minutes,
                recorded_at=now,
            )
        )
        row.remaining_stock_count = new_remaining
        row.stock_count = row.stock_count + consumed

        # 점유 해제 — Release occupancy
        row.worker_id = None
        row.worker_name = None
        row.start_time = None
        await db.flush()

        # 작업자 이력 갱신 — Worker history update (Row -> Worker lock order)
        worker: Worker
        worker, _ = await worker_repository.get_or_create(db, worker_id, worker_name, for_update=True)
        worker.total_stock_count = worker.total_stock_count + consumed

        block_entry: WorkerBlock = worker_repository.get_or_create_block_entry(worker, block_name)
        row_total: WorkerRowTotal = worker_repository.get_or_create_row_total(block_entry, row.row_number)
        row_total.stock_count = row_total.stock_count + consumed
        row_total.time_spent = row_total.time_spent + time_spent_minutes
        row_total.last_worked_at = now
        row_total.day_of_week = day_of_week(now)

        block_entry.daily_stock_entries.append(
            WorkerDailyStockEntry(
                date=ledger_date(now),
                row_number=row.row_number,
                block_name=block_name,
                stock_count=consumed,
                time_spent=time_spent_minutes,
            )
        )
        await db.flush()

        return {
            "time_spent": format_duration(time_spent_minutes),
            "row_number": row.row_number,
            "stock_count": consumed,
            "remaining_stocks": new_remaining,
        }


# 싱글턴 인스턴스 — Singleton instance
ledger_service: LedgerService = LedgerService()
