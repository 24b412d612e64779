"""블록/열 레포지토리 — 블록과 열 관련 DB 쿼리 담당.

Block Repository — Handles block and row database queries, including the
row-level locking reads used by check-in and check-out.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from harvest_ledger.models.block import Block, Row
from harvest_ledger.repositories.base import BaseRepository


class BlockRepository(BaseRepository[Block]):
    """블록 레포지토리.

    Block repository with name lookups, row lookups and provisioning.

    Extends:
        BaseRepository[Block]
    """

    def __init__(self) -> None:
        super().__init__(Block)

    async def get_by_name(
        self,
        db: AsyncSession,
        block_name: str,
    ) -> Block | None:
        """블록 이름으로 조회합니다 (열 포함).

        Retrieve a block by its unique name, rows loaded.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            block_name: 블록 이름 (Block name)

        Returns:
            Block | None: 블록 또는 None (Block or None)
        """
        query: Select = select(Block).where(Block.block_name == block_name)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_all_blocks(self, db: AsyncSession) -> Sequence[Block]:
        """모든 블록을 이름순으로 조회합니다 — All blocks ordered by name."""
        return await self.get_all(db, order_by=Block.block_name)

    async def find_block_by_row_number(
        self,
        db: AsyncSession,
        row_number: str,
    ) -> Block | None:
        """해당 열 번호를 가진 첫 번째 블록을 조회합니다.

        Find the first block (by name) that contains a row with this number.
        Row numbers are only unique within a block, so callers that know the
        block should pass it instead.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            row_number: 열 번호 (Row number)

        Returns:
            Block | None: 블록 또는 None (Block or None)
        """
        query: Select = (
            select(Block)
            .join(Row, Row.block_id == Block.id)
            .where(Row.row_number == row_number)
            .order_by(Block.block_name)
            .limit(1)
        )
        result = await db.execute(query)
        return result.scalars().first()

    async def get_row_for_update(
        self,
        db: AsyncSession,
        block_id: UUID,
        row_number: str,
    ) -> Row | None:
        """열을 잠금과 함께 조회합니다 (SELECT ... FOR UPDATE).

        Retrieve a row of a block while holding a row lock until the
        transaction ends. ``populate_existing`` refreshes any copy already in
        the identity map so the caller sees the locked state.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            block_id: 블록 UUID (Block UUID)
            row_number: 열 번호 (Row number)

        Returns:
            Row | None: 잠긴 열 또는 None (Locked row or None)
        """
        result = await db.execute(self.row_lock_query(block_id, row_number))
        return result.scalar_one_or_none()

    @staticmethod
    def row_lock_query(block_id: UUID, row_number: str) -> Select:
        """열 잠금 쿼리 — SELECT ... FOR UPDATE on one row of a block."""
        return (
            select(Row)
            .where(Row.block_id == block_id)
            .where(Row.row_number == row_number)
            .with_for_update()
            .execution_options(populate_existing=True)
        )

    async def create_with_rows(
        self,
        db: AsyncSession,
        block_name: str,
        total_stocks: int,
        rows: list[tuple[str, int]],
    ) -> Block:
        """블록과 열을 함께 생성합니다.

        Provision a block and its rows in one flush.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            block_name: 블록 이름 (Block name)
            total_stocks: 전체 재고 할당량 (Total stock allotment)
            rows: (열 번호, 초기 재고) 목록 (List of (row_number, initial_stock_count))

        Returns:
            Block: 생성된 블록 (Created block)
        """
        block: Block = Block(block_name=block_name, total_stocks=total_stocks)
        for index, (row_number, initial_stock_count) in enumerate(rows):
            block.rows.append(
                Row(
                    row_number=row_number,
                    sort_order=index,
                    initial_stock_count=initial_stock_count,
                    stock_count=0,
                    daily_entries=[],
                )
            )
        db.add(block)
        await db.flush()
        return block


# 싱글턴 인스턴스 — Singleton instance
block_repository: BlockRepository = BlockRepository()
