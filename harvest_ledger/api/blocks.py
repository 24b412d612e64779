"""블록 라우터 — 블록 생성 및 조회 API.

Block Router — Block provisioning, block lookups and block-level remaining stock.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from harvest_ledger.database import get_db
from harvest_ledger.schemas.block import BlockCreate, BlockDetailResponse, BlockResponse
from harvest_ledger.schemas.ledger import BlockRemainingStocksResponse
from harvest_ledger.services.block_service import block_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[BlockResponse])
async def list_blocks(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    """모든 블록을 조회합니다 — All blocks with their rows."""
    blocks = await block_service.list_blocks(db)
    return [block_service.build_block_response(block) for block in blocks]


@router.post("", response_model=BlockResponse, status_code=status.HTTP_201_CREATED)
async def create_block(
    data: BlockCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """블록과 열을 생성합니다.

    Provision a block with its rows.

    Args:
        data: 블록 생성 요청 데이터 (Block provisioning data)
        db: 비동기 데이터베이스 세션 (Async database session)

    Returns:
        dict: 생성된 블록 (Created block)
    """
    block = await block_service.create_block(
        db,
        block_name=data.block_name,
        total_stocks=data.total_stocks,
        rows=[(row.row_number, row.initial_stock_count) for row in data.rows],
    )
    await db.commit()
    return block_service.build_block_response(block)


@router.get("/{block_name}", response_model=BlockResponse)
async def get_block_by_name(
    block_name: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """블록 이름으로 조회합니다 — Block with its rows."""
    block = await block_service.get_block_by_name(db, block_name)
    return block_service.build_block_response(block)


@router.get("/{block_name}/all", response_model=BlockDetailResponse)
async def get_all_block_data(
    block_name: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """블록 전체 데이터를 조회합니다 — Block, rows and every row's check-out entries."""
    block = await block_service.get_block_by_name(db, block_name)
    return block_service.build_block_response(block, include_entries=True)


@router.get("/{block_name}/remaining-stocks", response_model=BlockRemainingStocksResponse)
async def get_remaining_stocks(
    block_name: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """블록 잔여 재고를 조회합니다 — total_stocks minus stock consumed across rows."""
    return await block_service.get_remaining_stocks(db, block_name)
