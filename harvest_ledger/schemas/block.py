"""블록/열 관련 Pydantic 요청/응답 스키마 정의.

Block and row Pydantic request/response schema definitions.
Covers block provisioning and the read projections of blocks and rows.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# === 블록 생성 (Block provisioning) 스키마 ===

class RowCreate(BaseModel):
    """열 생성 요청 스키마.

    Attributes:
        row_number: 열 번호, 블록 내 고유 (Row number, unique within the block)
        initial_stock_count: 초기 재고 (Initial stock assigned to the row)
    """

    row_number: str = Field(..., min_length=1)
    initial_stock_count: int = Field(..., ge=0)


class BlockCreate(BaseModel):
    """블록 생성 요청 스키마.

    Block provisioning request schema. The sum of the rows' initial stock
    may not exceed ``total_stocks``.

    Attributes:
        block_name: 블록 이름 (Unique block name)
        total_stocks: 전체 재고 할당량 (Total stock allotment)
        rows: 열 목록 (Rows to create, in display order)
    """

    block_name: str = Field(..., min_length=1)
    total_stocks: int = Field(..., ge=0)
    rows: list[RowCreate] = Field(default_factory=list)


# === 조회 (Read projections) 스키마 ===

class RowDailyEntryResponse(BaseModel):
    """열 체크아웃 기록 응답 스키마."""

    worker_id: str
    stock_count: int
    time_spent_minutes: float
    recorded_at: datetime


class RowResponse(BaseModel):
    """열 응답 스키마.

    Attributes:
        row_number: 열 번호 (Row number)
        worker_id: 현재 점유자 ID (Current occupant id, None when free)
        worker_name: 현재 점유자 이름 (Current occupant name, None when free)
        start_time: 체크인 시각 (Check-in time, None when free)
        initial_stock_count: 초기 재고 (Initial stock)
        remaining_stock_count: 잔여 재고 필드 (Stored remaining stock, None before first check-out)
        available_stock: 작업 가능 재고 (Effective remaining stock)
        stock_count: 누적 소비 재고 (Cumulative consumed stock)
    """

    block_name: str
    row_number: str
    worker_id: str | None = None
    worker_name: str | None = None
    start_time: datetime | None = None
    initial_stock_count: int
    remaining_stock_count: int | None = None
    available_stock: int
    stock_count: int


class RowDetailResponse(RowResponse):
    """열 상세 응답 스키마 — 체크아웃 기록 포함 (Includes check-out entries)."""

    daily_entries: list[RowDailyEntryResponse] = []


class BlockResponse(BaseModel):
    """블록 응답 스키마."""

    id: str
    block_name: str
    total_stocks: int
    created_at: datetime
    rows: list[RowResponse] = []


class BlockDetailResponse(BlockResponse):
    """블록 전체 데이터 응답 스키마 — 모든 열의 체크아웃 기록 포함."""

    rows: list[RowDetailResponse] = []
