"""작업자 이력 관련 Pydantic 응답 스키마 정의.

Worker history Pydantic response schema definitions.
Mirrors the nested worker record: totals, per-block rows and daily entries.
"""

from datetime import date as date_type, datetime

from pydantic import BaseModel


class WorkerRowTotalResponse(BaseModel):
    """작업자 열 누적 응답 스키마 (Cumulative totals for one row)."""

    row_number: str
    stock_count: int
    time_spent: float  # 누적 작업 시간(분) (Cumulative minutes)
    last_worked_at: datetime | None = None
    day_of_week: str | None = None


class WorkerDailyStockEntryResponse(BaseModel):
    """작업자 일별 기록 응답 스키마."""

    date: date_type
    row_number: str
    block_name: str
    stock_count: int
    time_spent: float


class WorkerBlockResponse(BaseModel):
    """작업자 블록 이력 응답 스키마."""

    block_name: str
    rows: list[WorkerRowTotalResponse] = []
    daily_stock_entries: list[WorkerDailyStockEntryResponse] = []


class WorkerResponse(BaseModel):
    """작업자 응답 스키마.

    Attributes:
        worker_id: 작업자 ID (External worker id)
        name: 작업자 이름 (Worker name)
        total_stock_count: 누적 소비 재고 (Total stock ever checked out)
        blocks: 블록별 이력 (Per-block history)
    """

    id: str
    worker_id: str
    name: str
    total_stock_count: int
    created_at: datetime
    blocks: list[WorkerBlockResponse] = []
