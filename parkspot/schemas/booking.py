"""예약 관련 Pydantic 요청/응답 스키마 정의.

Booking Pydantic request/response schema definitions.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, field_validator

from parkspot.utils.pricing import DurationType, as_utc


class BookingCreate(BaseModel):
    """예약 생성 요청 스키마.

    Attributes:
        listing_id: 예약할 주차 공간 UUID (Listing to book)
        start_time: 시작 시각 (Span start; naive values are UTC)
        end_time: 종료 시각 (Span end; must be after start)
        duration_type: 요금 방식 (hourly | daily | monthly | optimal, default optimal)
    """

    listing_id: UUID
    start_time: datetime
    end_time: datetime
    duration_type: DurationType = DurationType.OPTIMAL

    @field_validator("start_time", "end_time")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @field_validator("duration_type", mode="before")
    @classmethod
    def _parse_duration_type(cls, value: Any) -> DurationType:
        return DurationType.parse(value)


class BookingResponse(BaseModel):
    """예약 응답 스키마.

    Attributes:
        id: 예약 UUID (Booking identifier)
        listing_id: 주차 공간 UUID (Listing identifier)
        location: 주차 공간 위치 (Listing location, joined)
        renter: 예약자 사용자명 (Renter username)
        renter_contact: 예약자 연락처 (Renter contact, for listing owners)
        start_time / end_time: 예약 기간 (Booked span)
        duration_type: 요금 방식 (Duration type used for pricing)
        total_price: 확정 요금 (Price fixed at booking time)
        status: 예약 상태 (pending | confirmed | cancelled)
        payment_status: 결제 상태 (Payment status, None if no payment row)
    """

    id: str
    listing_id: str
    location: str
    renter: str
    renter_contact: str | None = None
    start_time: datetime
    end_time: datetime
    duration_type: str
    total_price: float
    status: str
    payment_status: str | None = None
    created_at: datetime | None = None


class BookingEnvelope(BaseModel):
    """단일 예약 응답 — {"booking": {...}}."""

    booking: BookingResponse


class BookingListResponse(BaseModel):
    """예약 목록 응답 — {"bookings": [...]}."""

    bookings: list[BookingResponse]


class EarningsResponse(BaseModel):
    """소유자 수익 요약 — Sum of confirmed bookings on the caller's listings."""

    total_earnings: float
    booking_count: int
