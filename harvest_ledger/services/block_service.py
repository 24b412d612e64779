"""블록 서비스 — 블록/열 조회, 잔여 재고 계산, 블록 생성.

Block Service — Read projections over blocks and rows, the two
remaining-stock computations, and block provisioning.

Remaining stock is reported two ways, and the figures can differ:
    - per row, the stored ``remaining_stock_count`` (see RowResponse);
    - per block, ``total_stocks`` minus the stock consumed across its rows.
"""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from harvest_ledger.models.block import Block, Row
from harvest_ledger.repositories.block_repository import block_repository
from harvest_ledger.utils.exceptions import BadRequestError, DuplicateError, NotFoundError


class BlockService:
    """블록 조회 및 생성 서비스."""

    # === 조회 (Queries) ===

    async def get_block_by_name(self, db: AsyncSession, block_name: str) -> Block:
        """블록 이름으로 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            block_name: 블록 이름 (Block name)

        Returns:
            Block: 블록 (Block with rows)

        Raises:
            NotFoundError: 블록이 없을 때 (When the block does not exist)
        """
        block: Block | None = await block_repository.get_by_name(db, block_name)
        if block is None:
            raise NotFoundError("Block not found")
        return block

    async def list_blocks(self, db: AsyncSession) -> Sequence[Block]:
        return await block_repository.get_all_blocks(db)

    async def _resolve_row_block(
        self,
        db: AsyncSession,
        row_number: str,
        block_name: str | None,
    ) -> Block:
        # 블록 미지정 시 해당 열 번호를 가진 첫 블록 사용 — Fall back to the first block holding the row
        if block_name is not None:
            return await self.get_block_by_name(db, block_name)
        block: Block | None = await block_repository.find_block_by_row_number(db, row_number)
        if block is None:
            raise NotFoundError("Block or Row not found")
        return block

    @staticmethod
    def _find_row(block: Block, row_number: str) -> Row:
        for row in block.rows:
            if row.row_number == row_number:
                return row
        raise NotFoundError("Row not found")

    async def get_row_by_number(
        self,
        db: AsyncSession,
        row_number: str,
        block_name: str | None = None,
    ) -> tuple[Block, Row]:
        """열 번호로 열을 조회합니다.

        Look up a row by number, optionally scoped to a block.

        Returns:
            tuple[Block, Row]: (소속 블록, 열) (Owning block and the row)

        Raises:
            NotFoundError: 블록 또는 열이 없을 때 (When the block or row does not exist)
        """
        block: Block = await self._resolve_row_block(db, row_number, block_name)
        return block, self._find_row(block, row_number)

    @staticmethod
    def used_stocks(block: Block) -> int:
        """블록 전체 소비 재고 — Stock consumed across all rows of the block."""
        return sum(row.stock_count for row in block.rows)

    async def get_remaining_stocks(self, db: AsyncSession, block_name: str) -> dict:
        """블록 잔여 재고를 계산합니다.

        ``total_stocks - sum(row.stock_count)``. Computed from consumed totals,
        independently of each row's own remaining counter.
        """
        block: Block = await self.get_block_by_name(db, block_name)
        used: int = self.used_stocks(block)
        return {
            "block_name": block.block_name,
            "total_stocks": block.total_stocks,
            "used_stocks": used,
            "remaining_stocks": block.total_stocks - used,
        }

    async def get_remaining_stocks_for_row(
        self,
        db: AsyncSession,
        row_number: str,
        block_name: str | None = None,
    ) -> dict:
        """열 잔여 재고를 계산합니다.

        Block total minus everything consumed by the other rows, i.e. the
        row's own consumption is attributed back to it.
        """
        block, row = await self.get_row_by_number(db, row_number, block_name)
        remaining: int = block.total_stocks - self.used_stocks(block) + row.stock_count
        return {
            "block_name": block.block_name,
            "row_number": row.row_number,
            "remaining_stocks": remaining,
        }

    # === 생성 (Provisioning) ===

    async def create_block(
        self,
        db: AsyncSession,
        block_name: str,
        total_stocks: int,
        rows: list[tuple[str, int]],
    ) -> Block:
        """블록과 열을 생성합니다.

        Provision a block. Row numbers must be unique and the rows' initial
        stock may not add up to more than the block allotment, which keeps
        total consumption within ``total_stocks``.

        Raises:
            DuplicateError: 같은 이름의 블록이 있을 때 (Block name already exists)
            BadRequestError: 열 번호 중복 또는 재고 초과 (Duplicate row numbers or over-allocation)
        """
        if await block_repository.exists(db, {"block_name": block_name}):
            raise DuplicateError(f"Block {block_name} already exists")

        row_numbers: list[str] = [row_number for row_number, _ in rows]
        if len(set(row_numbers)) != len(row_numbers):
            raise BadRequestError("Row numbers must be unique within a block")

        allocated: int = sum(initial for _, initial in rows)
        if allocated > total_stocks:
            raise BadRequestError(
                f"Rows allocate {allocated} stocks but the block only has {total_stocks}"
            )

        return await block_repository.create_with_rows(db, block_name, total_stocks, rows)

    # === 응답 구성 (Response builders) ===

    @staticmethod
    def build_row_response(block: Block, row: Row, include_entries: bool = False) -> dict:
        response: dict = {
            "block_name": block.block_name,
            "row_number": row.row_number,
            "worker_id": row.worker_id,
            "worker_name": row.worker_name,
            "start_time": row.start_time,
            "initial_stock_count": row.initial_stock_count,
            "remaining_stock_count": row.remaining_stock_count,
            "available_stock": row.available_stock,
            "stock_count": row.stock_count,
        }
        if include_entries:
            response["daily_entries"] = [
                {
                    "worker_id": entry.worker_id,
                    "stock_count": entry.stock_count,
                    "time_spent_minutes": entry.time_spent_minutes,
                    "recorded_at": entry.recorded_at,
                }
                for entry in row.daily_entries
            ]
        return response

    def build_block_response(self, block: Block, include_entries: bool = False) -> dict:
        return {
            "id": str(block.id),
            "block_name": block.block_name,
            "total_stocks": block.total_stocks,
            "created_at": block.created_at,
            "rows": [self.build_row_response(block, row, include_entries) for row in block.rows],
        }


# 싱글턴 인스턴스 — Singleton instance
block_service: BlockService = BlockService()
