"""예약 및 결제 SQLAlchemy ORM 모델 정의.

Booking and Payment SQLAlchemy ORM model definitions.

Tables:
    - bookings: 주차 공간 예약 (Reservations of a listing for a time span)
    - payments: 예약별 결제 기록 (One payment record per booking)
"""

import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import String, DateTime, Float, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from parkspot.database import Base


class BookingStatus(str, Enum):
    """예약 상태 — Booking lifecycle status."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Booking(Base):
    """예약 모델.

    Booking model — reservation of a listing for [start_time, end_time].
    취소된 예약은 삭제하지 않고 status만 cancelled로 변경합니다
    (Cancellation keeps the row and flips status).

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        listing_id: 주차 공간 FK (Listing foreign key)
        renter_id: 예약자 FK (Renter user foreign key)
        start_time: 시작 시각 (Span start)
        end_time: 종료 시각 (Span end)
        duration_type: 요금 방식 (hourly | daily | monthly | optimal)
        total_price: 예약 시점 확정 요금 (Price fixed at booking time)
        status: 예약 상태 (pending | confirmed | cancelled)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    listing_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False)
    renter_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration_type: Mapped[str] = mapped_column(String(20), nullable=False, default="optimal")
    total_price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=BookingStatus.PENDING.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    listing = relationship("Listing", back_populates="bookings")
    renter = relationship("User", back_populates="bookings")
    payment = relationship("Payment", back_populates="booking", uselist=False, cascade="all, delete-orphan", passive_deletes=True)


class Payment(Base):
    """결제 모델 — 예약 생성 시 함께 생성되는 결제 기록.

    Payment record created alongside each booking. No payment gateway is
    involved; the method is recorded as "dummy" and stays pending.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        booking_id: 예약 FK (Booking foreign key, one-to-one)
        amount: 결제 금액 (Amount, equals booking total_price)
        payment_method: 결제 수단 (Payment method label)
        status: 결제 상태 (Payment status)
    """

    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    booking_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("bookings.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    payment_method: Mapped[str] = mapped_column(String(50), nullable=False, default="dummy")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    booking = relationship("Booking", back_populates="payment")
