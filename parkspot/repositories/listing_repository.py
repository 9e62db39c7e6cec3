"""주차 공간 레포지토리 — 리스팅 CRUD 및 소유자별 조회.

Listing Repository — CRUD and owner-scoped queries for listings.
Owner is eager-loaded so responses can show the owner username.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from parkspot.models.listing import Listing
from parkspot.repositories.base import BaseRepository


class ListingRepository(BaseRepository[Listing]):
    """주차 공간 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Listing)

    async def list_listings(
        self,
        db: AsyncSession,
        owner_id: UUID | None = None,
    ) -> list[Listing]:
        """주차 공간 목록을 조회합니다.

        List listings, optionally only those owned by one user.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            owner_id: 소유자 필터, None이면 전체 (Owner filter; None lists all)

        Returns:
            list[Listing]: 소유자가 로드된 주차 공간 목록 (Listings with owner loaded)
        """
        query: Select = (
            select(Listing)
            .options(selectinload(Listing.owner))
            .execution_options(populate_existing=True)
        )
        if owner_id is not None:
            query = query.where(Listing.owner_id == owner_id)
        result = await db.execute(query.order_by(Listing.created_at))
        return list(result.scalars().all())

    async def get_detail(
        self,
        db: AsyncSession,
        listing_id: UUID,
    ) -> Listing | None:
        """소유자와 함께 단일 주차 공간을 조회합니다 (Single listing with owner)."""
        query: Select = (
            select(Listing)
            .options(selectinload(Listing.owner))
            .where(Listing.id == listing_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()


# 싱글턴 인스턴스: Singleton instance
listing_repository: ListingRepository = ListingRepository()
