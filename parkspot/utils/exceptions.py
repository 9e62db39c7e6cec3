"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Pre-configured HTTPException subclasses so services can raise domain errors
without repeating status codes at each call site.

Usage:
    from parkspot.utils.exceptions import NotFoundError, ConflictError
    raise NotFoundError("Listing not found")
    raise ConflictError("Not available")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found — 요청한 리소스(사용자, 주차 공간, 예약)가 없을 때."""

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict — 고유 제약 위반 (e.g. 이미 존재하는 사용자명).

    Raised when creating a resource that violates a uniqueness constraint.
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ConflictError(HTTPException):
    """409 Conflict — 예약 시간 충돌 또는 예약 불가 상태의 주차 공간.

    Raised when a booking span overlaps an active booking on the same listing,
    or the listing is not open for booking.
    """

    def __init__(self, detail: str = "Not available") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden — 권한 부족.

    Raised when the authenticated user lacks the required role or ownership
    (e.g. a renter cancelling someone else's booking).
    """

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized — 인증 실패 (잘못된 자격 증명, 만료된 토큰)."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request — Pydantic 검증 이후의 비즈니스 규칙 위반.

    e.g. a booking whose end time is not after its start time.
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
