"""작업자 라우터 — 작업자 이력 조회 API.

Worker Router — Worker listing and single-worker history.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from harvest_ledger.database import get_db
from harvest_ledger.schemas.worker import WorkerResponse
from harvest_ledger.services.worker_service import worker_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[WorkerResponse])
async def get_workers(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    """모든 작업자를 조회합니다.

    List all workers with their nested history. Empty list when none exist.
    """
    workers = await worker_service.get_workers(db)
    return [worker_service.build_response(worker) for worker in workers]


@router.get("/{worker_id}", response_model=WorkerResponse)
async def get_worker(
    worker_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """작업자 ID로 이력을 조회합니다 — One worker's history; 404 if unknown."""
    worker = await worker_service.get_worker(db, worker_id)
    return worker_service.build_response(worker)
