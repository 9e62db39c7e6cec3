"""주차 공간(리스팅) SQLAlchemy ORM 모델 정의.

Listing SQLAlchemy ORM model definitions.
A listing is a parking spot offered by an owner with three price tiers.

Tables:
    - listings: 주차 공간 (Parking spots with hourly/daily/monthly rates)
"""

import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import String, DateTime, Float, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from parkspot.database import Base


class Availability(str, Enum):
    """예약 가능 여부 — Whether the owner currently accepts bookings."""

    AVAILABLE = "Available"
    UNAVAILABLE = "Unavailable"


class Listing(Base):
    """주차 공간 모델.

    Listing model — a parking spot with tiered pricing.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        owner_id: 소유자 FK (Owner user foreign key)
        location: 위치 설명 (Free-text location)
        price_hourly: 시간 요금 (Hourly rate, 0 = not offered)
        price_daily: 일 요금 (Daily rate)
        price_monthly: 월 요금 (Monthly rate, 30-day month)
        availability: 예약 가능 여부 (Available | Unavailable)
        created_at: 생성 일시 UTC (Creation timestamp)

    Relationships:
        owner: 소유 사용자 (Owning user)
        bookings: 예약 목록 (Bookings on this spot, deleted with the listing)
    """

    __tablename__ = "listings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소유자 FK: Owner (CASCADE: 사용자 삭제 시 주차 공간도 삭제)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    price_hourly: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    price_daily: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    price_monthly: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    availability: Mapped[str] = mapped_column(String(20), nullable=False, default=Availability.AVAILABLE.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    owner = relationship("User", back_populates="listings")
    bookings = relationship("Booking", back_populates="listing", cascade="all, delete-orphan", passive_deletes=True)
