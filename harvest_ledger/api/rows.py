"""열 라우터 — 체크인/체크아웃 및 열 조회 API.

Row Router — Check-in/check-out endpoints and row lookups.
Check-in and check-out commit once after the ledger service returns, so
the row and worker updates land together.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from harvest_ledger.database import get_db
from harvest_ledger.schemas.block import RowDetailResponse
from harvest_ledger.schemas.ledger import (
    CheckInRequest,
    CheckInResponse,
    CheckOutRequest,
    CheckOutResponse,
    RowRemainingStocksResponse,
)
from harvest_ledger.services.block_service import block_service
from harvest_ledger.services.ledger_service import ledger_service

router: APIRouter = APIRouter()


@router.post("/check-in", response_model=CheckInResponse)
async def check_in(
    data: CheckInRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """작업자를 열에 체크인합니다.

    Claim a row for a worker. Returns 409 while another worker occupies it.

    Args:
        data: 체크인 요청 데이터 (Check-in request data)
        db: 비동기 데이터베이스 세션 (Async database session)

    Returns:
        dict: 열 번호와 작업 가능 재고 (Row number and available stock)
    """
    result: dict = await ledger_service.check_in(
        db,
        worker_id=data.worker_id,
        worker_name=data.worker_name,
        row_number=data.row_number,
        block_name=data.block_name,
    )
    await db.commit()
    return result


@router.post("/check-out", response_model=CheckOutResponse)
async def check_out(
    data: CheckOutRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """작업자를 열에서 체크아웃합니다.

    Release a row and record the consumed stock.

    Args:
        data: 체크아웃 요청 데이터 (Check-out request data)
        db: 비동기 데이터베이스 세션 (Async database session)

    Returns:
        dict: 작업 시간, 열 번호, 소비 재고, 잔여 재고
              (Duration, row number, consumed and remaining stock)
    """
    result: dict = await ledger_service.check_out(
        db,
        worker_id=data.worker_id,
        worker_name=data.worker_name,
        row_number=data.row_number,
        block_name=data.block_name,
        stock_count=data.stock_count,
    )
    await db.commit()
    return result


@router.get("/{row_number}", response_model=RowDetailResponse)
async def get_row_by_number(
    row_number: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    block_name: Annotated[str | None, Query()] = None,
) -> dict:
    """열 번호로 열을 조회합니다.

    Without ``block_name`` the first block (by name) holding the row is used.
    """
    block, row = await block_service.get_row_by_number(db, row_number, block_name)
    return block_service.build_row_response(block, row, include_entries=True)


@router.get("/{row_number}/remaining-stocks", response_model=RowRemainingStocksResponse)
async def get_remaining_stocks_for_row(
    row_number: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    block_name: Annotated[str | None, Query()] = None,
) -> dict:
    """열 잔여 재고를 조회합니다 — Block total minus stock consumed by the other rows."""
    return await block_service.get_remaining_stocks_for_row(db, row_number, block_name)
