"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the ledger's error
taxonomy (NotFound, Conflict, InvalidArgument, Internal). Services raise
these directly; FastAPI renders them as ``{"detail": ...}`` responses.

Usage:
    from harvest_ledger.utils.exceptions import NotFoundError, ConflictError
    raise NotFoundError("Block not found")
    raise ConflictError("Row 5 is already being worked on by Alice.")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 블록/열/작업자를 찾을 수 없을 때 사용.

    Raised when a block, a row, or the row/worker pair of a check-out does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    """409 Conflict 예외 — 다른 작업자가 이미 열을 점유 중일 때 사용.

    Raised when a check-in targets a row that already has an occupant.

    Args:
        detail: 오류 메시지, 현재 점유자 이름 포함 (Error message naming the occupant)
    """

    def __init__(self, detail: str = "Resource is in use") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    Raised when provisioning a block whose name already exists.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    Raised when the request is well-formed but inconsistent with ledger state
    (e.g. consuming more stock than remains, row stock exceeding the block allotment).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InternalError(HTTPException):
    """500 Internal Server Error 예외 — 원장 상태가 불일치할 때 사용.

    Raised when persisted state breaks an internal invariant
    (e.g. an occupied row without a start time).

    Args:
        detail: 오류 메시지 (Error message, default: "Internal ledger error")
    """

    def __init__(self, detail: str = "Internal ledger error") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
