"""블록/열 재고 원장 SQLAlchemy ORM 모델 정의.

Block and row stock-ledger SQLAlchemy ORM model definitions.
A block is a named growing area with a fixed stock allotment; it owns an
ordered set of rows, each of which is individually occupied and stock-tracked.

Tables:
    - blocks: 블록 (Named blocks with their total stock allotment)
    - block_rows: 열 (Rows with occupancy and remaining stock state)
    - row_daily_entries: 열별 체크아웃 기록 (Append-only check-out entries per row)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from harvest_ledger.database import Base


class Block(Base):
    """블록 모델 — 열을 소유하는 루트 애그리거트.

    Block model — Root aggregate owning an ordered collection of rows.
    ``total_stocks`` is fixed at provisioning time.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        block_name: 블록 이름, 고유 (Unique block name)
        total_stocks: 블록 전체 재고 할당량 (Total stock allotment for the block)
        created_at: 생성 일시 UTC (Creation timestamp)
        rows: 블록의 열 목록 (Rows belonging to this block, in provisioning order)
    """

    __tablename__ = "blocks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    block_name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    total_stocks: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    rows: Mapped[list["Row"]] = relationship(
        back_populates="block",
        order_by="Row.sort_order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("total_stocks >= 0", name="ck_blocks_total_stocks_non_negative"),
    )


class Row(Base):
    """열 모델 — 점유 상태와 잔여 재고를 가진 원장 엔티티.

    Row model — Stock ledger entity for one physical row.
    The occupant pair (worker_id, worker_name) and start_time are set together
    on check-in and cleared together on check-out.

    Status flow: unoccupied -> occupied(worker) -> unoccupied

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        block_id: 소속 블록 FK (Owning block)
        row_number: 열 번호, 블록 내 고유 (Row number, unique within the block)
        sort_order: 블록 내 표시 순서 (Position within the block)
        worker_id: 현재 점유 작업자 ID (Current occupant id, None when free)
        worker_name: 현재 점유 작업자 이름 (Current occupant name, None when free)
        start_time: 체크인 시각 (Check-in timestamp, None when free)
        initial_stock_count: 초기 재고 (Stock assigned at creation, immutable)
        remaining_stock_count: 잔여 재고, 최초 체크아웃 전에는 None
                               (Remaining stock; None until the first check-out)
        stock_count: 누적 소비 재고 (Cumulative stock consumed from this row)
        daily_entries: 체크아웃 기록 (Append-only check-out entries)
    """

    __tablename__ = "block_rows"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    block_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("blocks.id", ondelete="CASCADE"), nullable=False)
    row_number: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    # 점유자 — Occupant pair, present iff start_time is present
    worker_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    worker_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    start_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    # 재고 — Stock counters
    initial_stock_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    remaining_stock_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    stock_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    block: Mapped[Block] = relationship(back_populates="rows")
    daily_entries: Mapped[list["RowDailyEntry"]] = relationship(
        back_populates="row",
        order_by=lambda: [RowDailyEntry.recorded_at, RowDailyEntry.created_at],
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("block_id", "row_number", name="uq_block_rows_block_row_number"),
        CheckConstraint("remaining_stock_count >= 0", name="ck_block_rows_remaining_non_negative"),
        CheckConstraint("initial_stock_count >= 0", name="ck_block_rows_initial_non_negative"),
        CheckConstraint(
            "(worker_id IS NULL) = (start_time IS NULL) AND (worker_name IS NULL) = (start_time IS NULL)",
            name="ck_block_rows_occupancy_consistent",
        ),
    )

    @property
    def is_occupied(self) -> bool:
        return self.worker_name is not None

    @property
    def available_stock(self) -> int:
        """현재 작업 가능한 재고 — Effective remaining stock.

        Falls back to ``initial_stock_count`` until the row has been checked
        out at least once.
        """
        if self.remaining_stock_count is None:
            return self.initial_stock_count
        return self.remaining_stock_count


class RowDailyEntry(Base):
    """열 체크아웃 기록 모델.

    Row check-out entry — one per completed check-out, never updated.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        row_id: 대상 열 FK (Row the stock was taken from)
        worker_id: 체크아웃한 작업자 ID (Worker who checked out)
        stock_count: 소비 재고 (Stock consumed by this check-out)
        time_spent_minutes: 작업 시간(분) (Elapsed minutes between check-in and check-out)
        recorded_at: 체크아웃 시각 (Check-out timestamp)
        created_at: 생성 일시 UTC (Insertion timestamp)
    """

    __tablename__ = "row_daily_entries"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    row_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("block_rows.id", ondelete="CASCADE"), nullable=False)
    worker_id: Mapped[str] = mapped_column(String(100), nullable=False)
    stock_count: Mapped[int] = mapped_column(Integer, nullable=False)
    time_spent_minutes: Mapped[float] = mapped_column(Float, nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # 같은 시각 기록의 정렬 보조 — Tie-breaker for entries recorded at the same instant
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    row: Mapped[Row] = relationship(back_populates="daily_entries")
