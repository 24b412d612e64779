"""작업자 이력 SQLAlchemy ORM 모델 정의.

Worker history SQLAlchemy ORM model definitions.
A worker accumulates a running stock total plus, per block, cumulative
per-row totals and an append-only log of daily stock entries.

Tables:
    - workers: 작업자 (Worker identity and running stock total)
    - worker_blocks: 작업자별 블록 이력 (Per-worker, per-block history record)
    - worker_row_totals: 작업자별 열 누적 (Cumulative stock/time per worker per row)
    - worker_daily_stock_entries: 작업자 일별 기록 (One entry per completed check-out)
"""

import uuid
from datetime import date as date_type, datetime, timezone

from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from harvest_ledger.database import Base


class Worker(Base):
    """작업자 모델 — 작업 이력의 루트 애그리거트.

    Worker model — Root aggregate for a worker's harvesting history.
    Identity (worker_id, name) is fixed once created.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        worker_id: 외부 작업자 ID, 고유 (External worker identifier, unique)
        name: 작업자 이름 (Worker display name)
        total_stock_count: 누적 소비 재고 (Running sum of all stock checked out)
        created_at: 생성 일시 UTC (Creation timestamp)
        blocks: 블록별 이력 (Per-block history records)
    """

    __tablename__ = "workers"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    worker_id: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    total_stock_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    blocks: Mapped[list["WorkerBlock"]] = relationship(
        back_populates="worker",
        order_by="WorkerBlock.created_at",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def find_block(self, block_name: str) -> "WorkerBlock | None":
        for entry in self.blocks:
            if entry.block_name == block_name:
                return entry
        return None


class WorkerBlock(Base):
    """작업자 블록 이력 모델.

    Per-worker, per-block history record.

    Attributes:
        worker_record_id: 작업자 FK (Owning worker)
        block_name: 블록 이름 (Block the history refers to)
        rows: 열별 누적 (Cumulative totals per row)
        daily_stock_entries: 일별 기록 (Append-only daily entries)
    """

    __tablename__ = "worker_blocks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    worker_record_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("workers.id", ondelete="CASCADE"), nullable=False)
    block_name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    worker: Mapped[Worker] = relationship(back_populates="blocks")
    rows: Mapped[list["WorkerRowTotal"]] = relationship(
        back_populates="worker_block",
        order_by="WorkerRowTotal.created_at",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    daily_stock_entries: Mapped[list["WorkerDailyStockEntry"]] = relationship(
        back_populates="worker_block",
        order_by="WorkerDailyStockEntry.created_at",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("worker_record_id", "block_name", name="uq_worker_blocks_worker_block"),
    )

    def find_row(self, row_number: str) -> "WorkerRowTotal | None":
        for entry in self.rows:
            if entry.row_number == row_number:
                return entry
        return None


class WorkerRowTotal(Base):
    """작업자 열 누적 모델 — 체크아웃마다 더해지며 덮어쓰지 않음.

    Cumulative stock and time for one worker on one row. Each check-out adds
    to the totals; last_worked_at/day_of_week describe the latest check-out.
    """

    __tablename__ = "worker_row_totals"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    worker_block_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("worker_blocks.id", ondelete="CASCADE"), nullable=False)
    row_number: Mapped[str] = mapped_column(String(50), nullable=False)
    stock_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 누적 작업 시간(분) — Cumulative minutes
    time_spent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    last_worked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    day_of_week: Mapped[str | None] = mapped_column(String(16), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    worker_block: Mapped[WorkerBlock] = relationship(back_populates="rows")

    __table_args__ = (
        UniqueConstraint("worker_block_id", "row_number", name="uq_worker_row_totals_block_row"),
    )


class WorkerDailyStockEntry(Base):
    """작업자 일별 재고 기록 — 체크아웃 1회당 1건."""

    __tablename__ = "worker_daily_stock_entries"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    worker_block_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("worker_blocks.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    row_number: Mapped[str] = mapped_column(String(50), nullable=False)
    block_name: Mapped[str] = mapped_column(String(100), nullable=False)
    stock_count: Mapped[int] = mapped_column(Integer, nullable=False)
    time_spent: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    worker_block: Mapped[WorkerBlock] = relationship(back_populates="daily_stock_entries")
