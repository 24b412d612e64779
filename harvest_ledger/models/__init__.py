"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata before ``create_all`` runs.

Modules:
    block: 블록, 열, 열 체크아웃 기록 (Block, Row, RowDailyEntry)
    worker: 작업자 및 이력 (Worker, WorkerBlock, WorkerRowTotal, WorkerDailyStockEntry)
"""

from harvest_ledger.models.block import Block, Row, RowDailyEntry
from harvest_ledger.models.worker import Worker, WorkerBlock, WorkerRowTotal, WorkerDailyStockEntry

__all__ = [
    "Block", "Row", "RowDailyEntry",
    "Worker", "WorkerBlock", "WorkerRowTotal", "WorkerDailyStockEntry",
]
