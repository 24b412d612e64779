"""체크인/체크아웃 및 잔여 재고 Pydantic 요청/응답 스키마 정의.

Check-in/check-out and remaining-stock Pydantic request/response schemas.
These payloads travel in camelCase (``workerID``, ``rowNumber``,
``remainingStocks``) to stay compatible with the mobile client;
snake_case field names are accepted on input as well.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase 직렬화 베이스 — Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CheckInRequest(CamelModel):
    """체크인 요청 스키마.

    Check-in request schema.

    Attributes:
        worker_id: 작업자 ID (Worker id, wire name "workerID")
        worker_name: 작업자 이름 (Worker display name)
        row_number: 열 번호 (Row number)
        block_name: 블록 이름 (Block name)
    """

    worker_id: str = Field(..., alias="workerID", min_length=1)
    worker_name: str = Field(..., min_length=1)
    row_number: str = Field(..., min_length=1)
    block_name: str = Field(..., min_length=1)


class CheckOutRequest(CheckInRequest):
    """체크아웃 요청 스키마.

    Check-out request schema. ``stock_count`` is optional; when omitted the
    worker consumes everything left in the row. Negative or non-integer
    values are rejected here, before reaching the ledger. A malformed count
    is a 422, never silently read as "consume everything left".

    Attributes:
        stock_count: 소비 재고, 선택 (Consumed stock, optional, >= 0)
    """

    stock_count: int | None = Field(default=None, ge=0, strict=True)


class CheckInResponse(CamelModel):
    """체크인 응답 스키마."""

    message: str = "Check-in successful"
    row_number: str
    remaining_stocks: int  # 작업 가능 재고 (Stock available to work)
    worker_name: str
    start_time: datetime


class CheckOutResponse(CamelModel):
    """체크아웃 응답 스키마."""

    message: str = "Check-out successful"
    time_spent: str  # "<시간>hr <분>min" 형식 (Formatted duration)
    row_number: str
    stock_count: int  # 소비 재고 (Consumed stock)
    remaining_stocks: int  # 열 잔여 재고 (Row's remaining stock after check-out)


class BlockRemainingStocksResponse(CamelModel):
    """블록 잔여 재고 응답 스키마 — total_stocks minus stock consumed by all rows."""

    block_name: str
    total_stocks: int
    used_stocks: int
    remaining_stocks: int


class RowRemainingStocksResponse(CamelModel):
    """열 잔여 재고 응답 스키마 — total minus stock consumed by the other rows."""

    block_name: str
    row_number: str
    remaining_stocks: int
