"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates all endpoints into a single router for
inclusion in the FastAPI application.

Included routers:
    - rows: 체크인/체크아웃 및 열 조회 (Check-in, check-out, row lookups)
    - blocks: 블록 생성 및 조회 (Block provisioning and lookups)
    - workers: 작업자 이력 (Worker history)
"""

from fastapi import APIRouter

from harvest_ledger.api.blocks import router as blocks_router
from harvest_ledger.api.rows import router as rows_router
from harvest_ledger.api.workers import router as workers_router

api_router: APIRouter = APIRouter()

# 열: /rows 하위 (Check-in/check-out and row lookups)
api_router.include_router(rows_router, prefix="/rows", tags=["Rows"])
# 블록: /blocks 하위 (Block provisioning and lookups)
api_router.include_router(blocks_router, prefix="/blocks", tags=["Blocks"])
# 작업자: /workers 하위 (Worker history)
api_router.include_router(workers_router, prefix="/workers", tags=["Workers"])
