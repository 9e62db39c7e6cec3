"""주차 공간 서비스 — 리스팅 CRUD 및 요금 견적.

Listing Service — Business logic for listing CRUD and price quotes.

Permission rules:
    - 목록/상세/견적: 누구나 (anyone)
    - 등록: Owner, Admin
    - 수정/삭제: 해당 공간 소유자 또는 Admin (the listing's owner or an Admin)
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from parkspot.models.listing import Listing
from parkspot.models.user import User, UserRole
from parkspot.repositories.listing_repository import listing_repository
from parkspot.schemas.listing import (
    ListingCreate,
    ListingEnvelope,
    ListingListResponse,
    ListingResponse,
    ListingUpdate,
    PriceQuoteResponse,
)
from parkspot.utils.exceptions import BadRequestError, ForbiddenError, NotFoundError
from parkspot.utils.pricing import DurationType, PriceQuote, Rates, calculate_price


def rates_of(listing: Listing) -> Rates:
    """주차 공간의 요금표 — Rates of a listing."""
    return Rates.of(listing.price_hourly, listing.price_daily, listing.price_monthly)


class ListingService:
    """주차 공간 관련 비즈니스 로직을 처리하는 서비스."""

    def _to_response(self, listing: Listing) -> ListingResponse:
        return ListingResponse(
            id=str(listing.id),
            owner=listing.owner.username,
            owner_id=str(listing.owner_id),
            location=listing.location,
            price_hourly=listing.price_hourly,
            price_daily=listing.price_daily,
            price_monthly=listing.price_monthly,
            availability=listing.availability,
            created_at=listing.created_at,
        )

    async def _get_or_404(self, db: AsyncSession, listing_id: UUID) -> Listing:
        listing: Listing | None = await listing_repository.get_detail(db, listing_id)
        if listing is None:
            raise NotFoundError("Listing not found")
        return listing

    def _check_manage(self, listing: Listing, user: User) -> None:
        # 소유자 또는 Admin만 수정/삭제 가능 (Owner of the listing or Admin)
        if listing.owner_id != user.id and not user.is_admin:
            raise ForbiddenError("Forbidden")

    async def list_listings(
        self,
        db: AsyncSession,
        owner: User | None = None,
    ) -> ListingListResponse:
        """주차 공간 목록을 조회합니다.

        List every listing, or only the given owner's listings.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            owner: 소유자 필터, None이면 전체 (Owner filter; None lists all)

        Returns:
            ListingListResponse: {"listings": [...]}
        """
        listings = await listing_repository.list_listings(
            db, owner_id=owner.id if owner is not None else None
        )
        return ListingListResponse(listings=[self._to_response(item) for item in listings])

    async def get_listing(self, db: AsyncSession, listing_id: UUID) -> ListingEnvelope:
        """단일 주차 공간을 조회합니다 (Raises NotFoundError if missing)."""
        return ListingEnvelope(listing=self._to_response(await self._get_or_404(db, listing_id)))

    async def create_listing(
        self,
        db: AsyncSession,
        owner: User,
        data: ListingCreate,
    ) -> ListingEnvelope:
        """새 주차 공간을 등록합니다.

        Create a listing owned by the caller.

        Raises:
            ForbiddenError: Renter가 등록하려 할 때 (Renters cannot list spots)
        """
        if owner.role not in (UserRole.OWNER.value, UserRole.ADMIN.value):
            raise ForbiddenError("Only owners can create listings")

        created: Listing = await listing_repository.create(
            db,
            {
                "owner_id": owner.id,
                "location": data.location,
                "price_hourly": data.price_hourly,
                "price_daily": data.price_daily,
                "price_monthly": data.price_monthly,
                "availability": data.availability,
            },
        )
        return ListingEnvelope(listing=self._to_response(await self._get_or_404(db, created.id)))

    async def update_listing(
        self,
        db: AsyncSession,
        listing_id: UUID,
        user: User,
        data: ListingUpdate,
    ) -> ListingEnvelope:
        """주차 공간 정보를 수정합니다 (부분 업데이트).

        Raises:
            NotFoundError: 주차 공간을 찾을 수 없을 때 (Listing not found)
            ForbiddenError: 소유자/Admin이 아닐 때 (Not the owner or an admin)
        """
        listing: Listing = await self._get_or_404(db, listing_id)
        self._check_manage(listing, user)

        # None으로 명시된 필드는 무시: 요금/위치는 NOT NULL (Explicit nulls are ignored)
        update_data: dict = {
            k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None
        }
        await listing_repository.update(db, listing_id, update_data)
        return ListingEnvelope(listing=self._to_response(await self._get_or_404(db, listing_id)))

    async def delete_listing(
        self,
        db: AsyncSession,
        listing_id: UUID,
        user: User,
    ) -> None:
        """주차 공간을 삭제합니다. 예약과 결제 기록도 함께 삭제됩니다.

        Raises:
            NotFoundError: 주차 공간을 찾을 수 없을 때 (Listing not found)
            ForbiddenError: 소유자/Admin이 아닐 때 (Not the owner or an admin)
        """
        listing: Listing = await self._get_or_404(db, listing_id)
        self._check_manage(listing, user)
        await listing_repository.delete(db, listing_id)

    async def quote(
        self,
        db: AsyncSession,
        listing_id: UUID,
        start_time: datetime,
        end_time: datetime,
        duration_type: DurationType,
    ) -> PriceQuoteResponse:
        """예약 없이 요금 견적을 계산합니다.

        Estimate the price of booking a listing over [start_time, end_time].

        Raises:
            NotFoundError: 주차 공간을 찾을 수 없을 때 (Listing not found)
            BadRequestError: 종료 시각이 시작 시각 이후가 아닐 때 (end <= start)
        """
        listing: Listing = await self._get_or_404(db, listing_id)
        try:
            quote: PriceQuote = calculate_price(rates_of(listing), start_time, end_time, duration_type)
        except ValueError as exc:
            raise BadRequestError(str(exc))

        return PriceQuoteResponse(
            listing_id=str(listing.id),
            start_time=start_time,
            end_time=end_time,
            duration_type=quote.duration_type.value,
            total_hours=quote.total_hours,
            total_price=quote.total_price,
            breakdown=quote.breakdown,
        )


# 싱글턴 인스턴스: Singleton instance
listing_service: ListingService = ListingService()
