"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns.
Services and domain models raise these directly; FastAPI renders them as
``{"detail": "..."}`` responses.

Usage:
    from app.utils.exceptions import NotFoundError, NotEnoughStockError
    raise NotFoundError("Member not found")
    raise NotEnoughStockError("need more stock")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested member, item, or order does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    409 Conflict exception.
    Raised when a member joins with a name that is already registered.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when the request data is invalid beyond what Pydantic validation catches.

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotEnoughStockError(BadRequestError):
    """재고 부족 예외 — 주문 수량이 재고보다 많을 때 사용.

    Raised by Item.remove_stock when the remaining stock would go negative.
    """

    def __init__(self, detail: str = "need more stock") -> None:
        super().__init__(detail=detail)


class OrderCancelError(BadRequestError):
    """주문 취소 불가 예외 — 배송완료 또는 이미 취소된 주문.

    Raised when cancelling an order whose delivery is complete or which
    has already been cancelled.
    """

    def __init__(self, detail: str = "Order cannot be cancelled") -> None:
        super().__init__(detail=detail)
