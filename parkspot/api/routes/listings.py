"""주차 공간 라우터 — 리스팅 CRUD 및 요금 견적 엔드포인트.

Listings Router — CRUD endpoints for parking listings plus price quotes.

Permission Matrix (역할별 권한):
    - 목록/상세/견적: 인증 불필요 (public). ?owner=true는 로그인 필요
    - 등록: Owner, Admin
    - 수정/삭제: 해당 공간 소유자 또는 Admin
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from parkspot.api.deps import get_current_user, get_optional_user, require_owner
from parkspot.database import get_db
from parkspot.models.user import User
from parkspot.schemas.auth import OkResponse
from parkspot.schemas.listing import (
    ListingCreate,
    ListingEnvelope,
    ListingListResponse,
    ListingUpdate,
    PriceQuoteResponse,
)
from parkspot.services.listing_service import listing_service
from parkspot.utils.exceptions import UnauthorizedError
from parkspot.utils.pricing import DurationType, as_utc

router: APIRouter = APIRouter()


@router.get("", response_model=ListingListResponse)
async def list_listings(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User | None, Depends(get_optional_user)],
    owner: Annotated[bool, Query(description="내 주차 공간만 (Only the caller's listings)")] = False,
) -> ListingListResponse:
    """주차 공간 목록을 조회합니다. owner=true이면 내 공간만.

    List every listing; with ?owner=true only the caller's own listings.
    """
    if owner:
        if current_user is None:
            raise UnauthorizedError()
        return await listing_service.list_listings(db, owner=current_user)
    return await listing_service.list_listings(db)


@router.post("", response_model=ListingEnvelope, status_code=201)
async def create_listing(
    data: ListingCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_owner)],
) -> ListingEnvelope:
    """새 주차 공간을 등록합니다. Owner/Admin만 가능.

    Create a listing owned by the caller.
    """
    result: ListingEnvelope = await listing_service.create_listing(db, current_user, data)
    await db.commit()
    return result


@router.get("/{listing_id}", response_model=ListingEnvelope)
async def get_listing(
    listing_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ListingEnvelope:
    """주차 공간 상세 조회."""
    return await listing_service.get_listing(db, listing_id)


@router.get("/{listing_id}/quote", response_model=PriceQuoteResponse)
async def quote_listing(
    listing_id: UUID,
    start_time: datetime,
    end_time: datetime,
    db: Annotated[AsyncSession, Depends(get_db)],
    duration_type: str = "optimal",
) -> PriceQuoteResponse:
    """예약 없이 요금 견적을 계산합니다.

    Price a hypothetical booking. Unknown duration types fall back to optimal.
    """
    return await listing_service.quote(
        db,
        listing_id,
        as_utc(start_time),
        as_utc(end_time),
        DurationType.parse(duration_type),
    )


@router.put("/{listing_id}", response_model=ListingEnvelope)
async def update_listing(
    listing_id: UUID,
    data: ListingUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ListingEnvelope:
    """주차 공간 정보를 수정합니다. 소유자/Admin만 가능.

    Partially update a listing.
    """
    result: ListingEnvelope = await listing_service.update_listing(db, listing_id, current_user, data)
    await db.commit()
    return result


@router.delete("/{listing_id}", response_model=OkResponse)
async def delete_listing(
    listing_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> OkResponse:
    """주차 공간을 삭제합니다. 관련 예약/결제도 함께 삭제됩니다."""
    await listing_service.delete_listing(db, listing_id, current_user)
    await db.commit()
    return OkResponse()
