"""작업자 레포지토리 — 작업자 및 이력 관련 DB 쿼리 담당.

Worker Repository — Handles worker lookups and owns the get-or-create of
worker records and their nested per-block and per-row history entries.
"""

from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from harvest_ledger.models.worker import Worker, WorkerBlock, WorkerRowTotal
from harvest_ledger.repositories.base import BaseRepository


class WorkerRepository(BaseRepository[Worker]):
    """작업자 레포지토리.

    Worker repository. History records are created here and nowhere else;
    the ledger service only asks for them.

    Extends:
        BaseRepository[Worker]
    """

    def __init__(self) -> None:
        super().__init__(Worker)

    async def get_by_worker_id(
        self,
        db: AsyncSession,
        worker_id: str,
        for_update: bool = False,
    ) -> Worker | None:
        """외부 작업자 ID로 조회합니다.

        Retrieve a worker by external id, history loaded.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            worker_id: 작업자 ID (External worker id)
            for_update: 행 잠금 여부 (Lock the worker row until the transaction ends)

        Returns:
            Worker | None: 작업자 또는 None (Worker or None)
        """
        result = await db.execute(self.worker_query(worker_id, for_update))
        return result.scalar_one_or_none()

    @staticmethod
    def worker_query(worker_id: str, for_update: bool = False) -> Select:
        """작업자 조회 쿼리 — Optionally SELECT ... FOR UPDATE."""
        query: Select = select(Worker).where(Worker.worker_id == worker_id)
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        return query

    async def get_all_workers(self, db: AsyncSession) -> Sequence[Worker]:
        """모든 작업자를 조회합니다 — All workers ordered by name."""
        return await self.get_all(db, order_by=Worker.name)

    async def get_or_create(
        self,
        db: AsyncSession,
        worker_id: str,
        name: str,
        for_update: bool = False,
    ) -> tuple[Worker, bool]:
        """작업자를 조회하거나 빈 이력으로 생성합니다.

        Get the worker or create one with empty history and a zero total.
        Creation runs in a SAVEPOINT; if a concurrent request inserted the
        same worker_id first, the unique constraint fails and the winner's
        record is returned instead.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            worker_id: 작업자 ID (External worker id)
            name: 작업자 이름 (Worker name, used only on creation)
            for_update: 기존 작업자 잠금 여부 (Lock an existing worker row)

        Returns:
            tuple[Worker, bool]: (작업자, 생성 여부) (Worker, whether it was created)
        """
        worker: Worker | None = await self.get_by_worker_id(db, worker_id, for_update=for_update)
        if worker is not None:
            return worker, False

        try:
            async with db.begin_nested():
                worker = await self.create(
                    db,
                    {
                        "worker_id": worker_id,
                        "name": name,
                        "total_stock_count": 0,
                        "blocks": [],
                    },
                )
        except IntegrityError:
            # 동시 생성 경합 — Lost a creation race, read the winner
            worker = await self.get_by_worker_id(db, worker_id, for_update=for_update)
            if worker is None:
                raise
            return worker, False

        return worker, True

    def get_or_create_block_entry(self, worker: Worker, block_name: str) -> WorkerBlock:
        """작업자의 블록 이력을 조회하거나 생성합니다 — Per-block history record."""
        entry: WorkerBlock | None = worker.find_block(block_name)
        if entry is None:
            entry = WorkerBlock(block_name=block_name, rows=[], daily_stock_entries=[])
            worker.blocks.append(entry)
        return entry

    def get_or_create_row_total(self, block_entry: WorkerBlock, row_number: str) -> WorkerRowTotal:
        """블록 이력 내 열 누적을 조회하거나 생성합니다 — Per-row cumulative totals."""
        total: WorkerRowTotal | None = block_entry.find_row(row_number)
        if total is None:
            total = WorkerRowTotal(row_number=row_number, stock_count=0, time_spent=0.0)
            block_entry.rows.append(total)
        return total


# 싱글턴 인스턴스 — Singleton instance
worker_repository: WorkerRepository = WorkerRepository()
