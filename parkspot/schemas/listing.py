"""주차 공간 관련 Pydantic 요청/응답 스키마 정의.

Listing Pydantic request/response schema definitions, including the
price quote returned by the estimate endpoint.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from parkspot.models.listing import Availability

# 문자열로 전달된 예약 가능 여부 정규화 표 (Accepted availability spellings)
_AVAILABILITY_ALIASES: dict[str, Availability] = {
    "available": Availability.AVAILABLE,
    "true": Availability.AVAILABLE,
    "unavailable": Availability.UNAVAILABLE,
    "false": Availability.UNAVAILABLE,
}


def _normalize_availability(value: Any) -> str | None:
    """bool 또는 문자열을 Available/Unavailable로 변환합니다.

    Accepts a boolean (true = Available) or a case-insensitive string.
    An empty string counts as missing.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return (Availability.AVAILABLE if value else Availability.UNAVAILABLE).value
    if isinstance(value, str):
        if not value.strip():
            return None
        normalized = _AVAILABILITY_ALIASES.get(value.strip().lower())
        if normalized is not None:
            return normalized.value
    raise ValueError("availability must be a boolean, 'Available' or 'Unavailable'")


class ListingCreate(BaseModel):
    """주차 공간 등록 요청 스키마.

    Attributes:
        location: 위치 (Free-text location, required)
        price_hourly: 시간 요금 (Hourly rate, default 0)
        price_daily: 일 요금 (Daily rate, default 0)
        price_monthly: 월 요금 (Monthly rate, default 0)
        availability: 예약 가능 여부 (bool or string, default Available)
    """

    location: str = Field(..., min_length=1, max_length=255)
    price_hourly: float = Field(0.0, ge=0)
    price_daily: float = Field(0.0, ge=0)
    price_monthly: float = Field(0.0, ge=0)
    availability: str = Availability.AVAILABLE.value

    @field_validator("price_hourly", "price_daily", "price_monthly", mode="before")
    @classmethod
    def _none_price_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("availability", mode="before")
    @classmethod
    def _check_availability(cls, value: Any) -> str:
        return _normalize_availability(value) or Availability.AVAILABLE.value


class ListingUpdate(BaseModel):
    """주차 공간 수정 요청 스키마 (부분 업데이트, partial update)."""

    location: str | None = Field(None, min_length=1, max_length=255)
    price_hourly: float | None = Field(None, ge=0)
    price_daily: float | None = Field(None, ge=0)
    price_monthly: float | None = Field(None, ge=0)
    availability: str | None = None

    @field_validator("availability", mode="before")
    @classmethod
    def _check_availability(cls, value: Any) -> str | None:
        return _normalize_availability(value)


class ListingResponse(BaseModel):
    """주차 공간 응답 스키마.

    Attributes:
        id: 주차 공간 UUID (Listing identifier)
        owner: 소유자 사용자명 (Owner username)
        owner_id: 소유자 UUID (Owner identifier)
        location: 위치 (Location)
        price_hourly / price_daily / price_monthly: 요금표 (Rates)
        availability: 예약 가능 여부 (Available | Unavailable)
    """

    id: str
    owner: str
    owner_id: str
    location: str
    price_hourly: float
    price_daily: float
    price_monthly: float
    availability: str
    created_at: datetime | None = None


class ListingEnvelope(BaseModel):
    """단일 주차 공간 응답 — {"listing": {...}}."""

    listing: ListingResponse


class ListingListResponse(BaseModel):
    """주차 공간 목록 응답 — {"listings": [...]}."""

    listings: list[ListingResponse]


class PriceQuoteResponse(BaseModel):
    """요금 견적 응답 스키마.

    Estimate for booking a listing over a span, without creating a booking.

    Attributes:
        total_hours: 과금 시간, 올림 (Billable hours)
        total_price: 요청한 요금 방식의 요금 (Price for duration_type)
        duration_type: 적용된 요금 방식 (Applied duration type)
        breakdown: 전략별 요금 (Cost per fixed strategy)
    """

    listing_id: str
    start_time: datetime
    end_time: datetime
    duration_type: str
    total_hours: int
    total_price: float
    breakdown: dict[str, float]
