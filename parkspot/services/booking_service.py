"""예약 서비스 — 예약 생성/조회/취소 및 소유자 수익.

Booking Service — Business logic for bookings.

Booking flow:
    1. 종료 시각 > 시작 시각 검증 (end must be after start)
    2. 주차 공간 존재 및 예약 가능 여부 확인 (listing exists and is Available)
    3. 시간 충돌 검사 — 취소되지 않은 예약과 겹치면 409 (overlap check)
    4. 요금 계산 — duration_type별 요금, 기본 optimal (tiered pricing)
    5. 예약(confirmed) + 결제(dummy, pending) 생성 (booking and payment rows)

Visibility (GET /bookings):
    Admin 전체, Owner 자기 주차 공간의 예약, 그 외 자기 예약
    (Admins see all, owners see bookings on their listings, others their own)
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from parkspot.models.booking import Booking, BookingStatus
from parkspot.models.listing import Availability, Listing
from parkspot.models.user import User, UserRole
from parkspot.repositories.booking_repository import booking_repository
from parkspot.repositories.listing_repository import listing_repository
from parkspot.schemas.booking import (
    BookingCreate,
    BookingEnvelope,
    BookingListResponse,
    BookingResponse,
    EarningsResponse,
)
from parkspot.services.listing_service import rates_of
from parkspot.utils.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from parkspot.utils.pricing import PriceQuote, calculate_price


class BookingService:
    """예약 관련 비즈니스 로직을 처리하는 서비스."""

    def _to_response(self, booking: Booking) -> BookingResponse:
        return BookingResponse(
            id=str(booking.id),
            listing_id=str(booking.listing_id),
            location=booking.listing.location,
            renter=booking.renter.username,
            renter_contact=booking.renter.contact,
            start_time=booking.start_time,
            end_time=booking.end_time,
            duration_type=booking.duration_type,
            total_price=booking.total_price,
            status=booking.status,
            payment_status=booking.payment.status if booking.payment is not None else None,
            created_at=booking.created_at,
        )

    async def list_bookings(self, db: AsyncSession, user: User) -> BookingListResponse:
        """역할에 따라 보이는 예약 목록을 조회합니다.

        List the bookings visible to the caller's role.
        """
        if user.role == UserRole.ADMIN.value:
            bookings = await booking_repository.list_bookings(db)
        elif user.role == UserRole.OWNER.value:
            bookings = await booking_repository.list_bookings(db, owner_id=user.id)
        else:
            bookings = await booking_repository.list_bookings(db, renter_id=user.id)
        return BookingListResponse(bookings=[self._to_response(b) for b in bookings])

    async def create_booking(
        self,
        db: AsyncSession,
        renter: User,
        data: BookingCreate,
    ) -> BookingEnvelope:
        """새 예약을 생성합니다.

        Book a listing for [start_time, end_time] on behalf of the caller.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            renter: 예약자 (Authenticated caller)
            data: 예약 요청 데이터 (Booking request)

        Returns:
            BookingEnvelope: 생성된 예약 (Created booking, status confirmed)

        Raises:
            BadRequestError: 종료 시각이 시작 시각 이후가 아닐 때 (end <= start)
            NotFoundError: 주차 공간을 찾을 수 없을 때 (Listing not found)
            ConflictError: 예약 불가 상태이거나 시간이 겹칠 때 (Unavailable or overlapping)
        """
        if data.end_time <= data.start_time:
            raise BadRequestError("End time must be after start time")

        listing: Listing | None = await listing_repository.get_by_id(db, data.listing_id)
        if listing is None:
            raise NotFoundError("Listing not found")
        if listing.availability != Availability.AVAILABLE.value:
            raise ConflictError("Listing is not available for booking")

        taken: bool = await booking_repository.has_overlap(
            db, listing.id, data.start_time, data.end_time
        )
        if taken:
            raise ConflictError("Not available")

        quote: PriceQuote = calculate_price(
            rates_of(listing), data.start_time, data.end_time, data.duration_type
        )

        booking: Booking = await booking_repository.create(
            db,
            {
                "listing_id": listing.id,
                "renter_id": renter.id,
                "start_time": data.start_time,
                "end_time": data.end_time,
                "duration_type": quote.duration_type.value,
                "total_price": quote.total_price,
                "status": BookingStatus.CONFIRMED.value,
            },
        )
        await booking_repository.create_payment(db, booking.id, quote.total_price)

        detail: Booking | None = await booking_repository.get_detail(db, booking.id)
        return BookingEnvelope(booking=self._to_response(detail))

    async def cancel_booking(
        self,
        db: AsyncSession,
        booking_id: UUID,
        user: User,
    ) -> None:
        """예약을 취소합니다 (행은 유지, status=cancelled).

        Cancel a booking. Allowed for the renter, the listing's owner and Admins.

        Raises:
            NotFoundError: 예약을 찾을 수 없을 때 (Booking not found)
            ForbiddenError: 권한이 없을 때 (Caller may not cancel this booking)
        """
        booking: Booking | None = await booking_repository.get_detail(db, booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")

        allowed: bool = (
            booking.renter_id == user.id
            or booking.listing.owner_id == user.id
            or user.is_admin
        )
        if not allowed:
            raise ForbiddenError("Forbidden")

        await booking_repository.update(
            db, booking_id, {"status": BookingStatus.CANCELLED.value}
        )

    async def owner_earnings(self, db: AsyncSession, owner: User) -> EarningsResponse:
        """소유자의 확정 예약 수익 합계 (Sum of confirmed bookings on own listings)."""
        total, count = await booking_repository.confirmed_earnings(db, owner.id)
        return EarningsResponse(total_earnings=round(total, 2), booking_count=count)


# 싱글턴 인스턴스: Singleton instance
booking_service: BookingService = BookingService()
