"""예약 레포지토리 — 예약 조회, 시간 충돌 검사, 결제 기록.

Booking Repository — Booking queries, overlap detection and payment rows.

Overlap rule:
    새 기간 [s, e]는 같은 주차 공간의 취소되지 않은 예약 [bs, be]와 다음 중 하나라도
    만족하면 충돌합니다 (A new span conflicts with a non-cancelled booking when):
        (bs <= s AND be >= s)    기존 예약이 시작 시각을 포함 (covers the start)
        (bs <= e AND be >= e)    기존 예약이 종료 시각을 포함 (covers the end)
        (bs >= s AND be <= e)    기존 예약이 새 기간 안에 포함 (lies inside)
    경계는 포함이므로 끝과 시작이 맞닿은 예약도 충돌합니다 (Bounds are inclusive).
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from parkspot.models.booking import Booking, BookingStatus, Payment
from parkspot.models.listing import Listing
from parkspot.repositories.base import BaseRepository


class BookingRepository(BaseRepository[Booking]):
    """예약/결제 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Booking)

    def _detail_query(self) -> Select:
        # 응답에 필요한 위치/예약자/결제 정보를 함께 로드 (Location, renter, payment)
        return (
            select(Booking)
            .options(
                selectinload(Booking.listing),
                selectinload(Booking.renter),
                selectinload(Booking.payment),
            )
            .execution_options(populate_existing=True)
        )

    async def has_overlap(
        self,
        db: AsyncSession,
        listing_id: UUID,
        start_time: datetime,
        end_time: datetime,
    ) -> bool:
        """같은 주차 공간에 겹치는 활성 예약이 있는지 확인합니다.

        Check whether any non-cancelled booking on the listing overlaps
        [start_time, end_time] (inclusive bounds).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            listing_id: 주차 공간 ID (Listing UUID)
            start_time: 새 예약 시작 시각 (Requested start)
            end_time: 새 예약 종료 시각 (Requested end)

        Returns:
            bool: 충돌 여부 (True when the span is taken)
        """
        overlap = or_(
            and_(Booking.start_time <= start_time, Booking.end_time >= start_time),
            and_(Booking.start_time <= end_time, Booking.end_time >= end_time),
            and_(Booking.start_time >= start_time, Booking.end_time <= end_time),
        )
        query: Select = (
            select(func.count())
            .select_from(Booking)
            .where(
                Booking.listing_id == listing_id,
                Booking.status != BookingStatus.CANCELLED.value,
                overlap,
            )
        )
        count: int = (await db.execute(query)).scalar() or 0
        return count > 0

    async def get_detail(
        self,
        db: AsyncSession,
        booking_id: UUID,
    ) -> Booking | None:
        """관련 정보를 포함한 단일 예약 조회 (Booking with listing, renter, payment)."""
        result = await db.execute(self._detail_query().where(Booking.id == booking_id))
        return result.scalar_one_or_none()

    async def list_bookings(
        self,
        db: AsyncSession,
        renter_id: UUID | None = None,
        owner_id: UUID | None = None,
    ) -> list[Booking]:
        """예약 목록을 조회합니다.

        List bookings, optionally restricted to one renter or to the listings
        of one owner. With neither filter every booking is returned.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            renter_id: 예약자 필터 (Only this renter's bookings)
            owner_id: 소유자 필터 (Only bookings on this owner's listings)

        Returns:
            list[Booking]: 예약 목록, 시작 시각 순 (Bookings ordered by start time)
        """
        query: Select = self._detail_query()
        if renter_id is not None:
            query = query.where(Booking.renter_id == renter_id)
        if owner_id is not None:
            query = query.join(Listing, Booking.listing_id == Listing.id).where(
                Listing.owner_id == owner_id
            )
        result = await db.execute(query.order_by(Booking.start_time))
        return list(result.scalars().all())

    async def confirmed_earnings(
        self,
        db: AsyncSession,
        owner_id: UUID,
    ) -> tuple[float, int]:
        """소유자 주차 공간의 확정 예약 요금 합계와 건수를 계산합니다.

        Sum total_price over confirmed bookings on the owner's listings.

        Returns:
            tuple[float, int]: (합계, 건수) (Total earnings, booking count)
        """
        query: Select = (
            select(func.coalesce(func.sum(Booking.total_price), 0.0), func.count(Booking.id))
            .join(Listing, Booking.listing_id == Listing.id)
            .where(
                Listing.owner_id == owner_id,
                Booking.status == BookingStatus.CONFIRMED.value,
            )
        )
        total, count = (await db.execute(query)).one()
        return float(total or 0.0), int(count or 0)

    async def create_payment(
        self,
        db: AsyncSession,
        booking_id: UUID,
        amount: float,
        payment_method: str = "dummy",
        status: str = "pending",
    ) -> Payment:
        """예약에 대한 결제 기록을 생성합니다 (Payment row for a booking)."""
        payment: Payment = Payment(
            booking_id=booking_id,
            amount=amount,
            payment_method=payment_method,
            status=status,
        )
        db.add(payment)
        await db.flush()
        return payment


# 싱글턴 인스턴스: Singleton instance
booking_repository: BookingRepository = BookingRepository()
