"""초기 데이터 시드 스크립트 — 테이블 생성 및 데모 블록 생성.

Seed script — Creates the tables and provisions a demo block.
Blocks and rows are normally provisioned by the farm office; this script
bootstraps a fresh database for local use.

Usage:
    python -m harvest_ledger.seed

Creates:
    - 1개 블록: "A1", 전체 재고 1000 (1 block with 1000 total stocks)
    - 10개 열: "1" ~ "10", 열당 재고 100 (10 rows of 100 stocks each)
"""

import asyncio

from harvest_ledger.database import Base, async_session, engine
from harvest_ledger.models import Block  # noqa: F401 — register all models with metadata
from harvest_ledger.repositories.block_repository import block_repository
from harvest_ledger.services.block_service import block_service

DEMO_BLOCK_NAME: str = "A1"
DEMO_ROW_COUNT: int = 10
DEMO_ROW_STOCK: int = 100


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with a demo block.
    Creates tables if they don't exist, then provisions the block.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        if await block_repository.exists(db, {"block_name": DEMO_BLOCK_NAME}):
            print("Already seeded. Skipping.")
            return

        rows: list[tuple[str, int]] = [
            (str(number), DEMO_ROW_STOCK) for number in range(1, DEMO_ROW_COUNT + 1)
        ]
        await block_service.create_block(
            db,
            block_name=DEMO_BLOCK_NAME,
            total_stocks=DEMO_ROW_STOCK * DEMO_ROW_COUNT,
            rows=rows,
        )
        await db.commit()

    print(f"Seeded block {DEMO_BLOCK_NAME} with {DEMO_ROW_COUNT} rows.")


if __name__ == "__main__":
    asyncio.run(seed())
