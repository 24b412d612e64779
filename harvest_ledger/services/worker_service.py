"""작업자 서비스 — 작업자 이력 조회.

Worker Service — Read access to worker records and their nested history.
Workers are created by the ledger service on check-in/check-out only.
"""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from harvest_ledger.models.worker import Worker
from harvest_ledger.repositories.worker_repository import worker_repository
from harvest_ledger.utils.exceptions import NotFoundError


class WorkerService:
    """작업자 조회 서비스."""

    async def get_workers(self, db: AsyncSession) -> Sequence[Worker]:
        """모든 작업자를 조회합니다 — All workers, empty when none exist."""
        return await worker_repository.get_all_workers(db)

    async def get_worker(self, db: AsyncSession, worker_id: str) -> Worker:
        """작업자 ID로 조회합니다.

        Raises:
            NotFoundError: 작업자가 없을 때 (When the worker does not exist)
        """
        worker: Worker | None = await worker_repository.get_by_worker_id(db, worker_id)
        if worker is None:
            raise NotFoundError("Worker not found")
        return worker

    @staticmethod
    def build_response(worker: Worker) -> dict:
        """작업자 응답 딕셔너리를 구성합니다 — Nested worker record."""
        return {
            "id": str(worker.id),
            "worker_id": worker.worker_id,
            "name": worker.name,
            "total_stock_count": worker.total_stock_count,
            "created_at": worker.created_at,
            "blocks": [
                {
                    "block_name": entry.block_name,
                    "rows": [
                        {
                            "row_number": total.row_number,
                            "stock_count": total.stock_count,
                            "time_spent": total.time_spent,
                            "last_worked_at": total.last_worked_at,
                            "day_of_week": total.day_of_week,
                        }
                        for total in entry.rows
                    ],
                    "daily_stock_entries": [
                        {
                            "date": daily.date,
                            "row_number": daily.row_number,
                            "block_name": daily.block_name,
                            "stock_count": daily.stock_count,
                            "time_spent": daily.time_spent,
                        }
                        for daily in entry.daily_stock_entries
                    ],
                }
                for entry in worker.blocks
            ],
        }


# 싱글턴 인스턴스 — Singleton instance
worker_service: WorkerService = WorkerService()
