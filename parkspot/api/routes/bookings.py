"""예약 라우터 — 예약 생성/조회/취소 및 소유자 수익 엔드포인트.

Bookings Router — Booking endpoints.

Permission Matrix:
    - 목록: 로그인 사용자 (Admin 전체, Owner 자기 공간의 예약, Renter 자기 예약)
    - 생성: 로그인 사용자 누구나 (any authenticated user)
    - 취소: 예약자, 주차 공간 소유자, Admin
    - 수익: Owner, Admin
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from parkspot.api.deps import get_current_user, require_owner
from parkspot.database import get_db
from parkspot.models.user import User
from parkspot.schemas.auth import OkResponse
from parkspot.schemas.booking import (
    BookingCreate,
    BookingEnvelope,
    BookingListResponse,
    EarningsResponse,
)
from parkspot.services.booking_service import booking_service

router: APIRouter = APIRouter()


@router.get("", response_model=BookingListResponse)
async def list_bookings(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> BookingListResponse:
    """역할에 따라 예약 목록을 조회합니다.

    List bookings visible to the caller, ordered by start time.
    """
    return await booking_service.list_bookings(db, current_user)


@router.get("/earnings", response_model=EarningsResponse)
async def get_earnings(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_owner)],
) -> EarningsResponse:
    """내 주차 공간의 확정 예약 수익 합계."""
    return await booking_service.owner_earnings(db, current_user)


@router.post("", response_model=BookingEnvelope, status_code=201)
async def create_booking(
    data: BookingCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> BookingEnvelope:
    """주차 공간을 예약합니다. 시간이 겹치면 409 "Not available".

    Book a listing. Price is computed server-side from the listing's rates.
    """
    result: BookingEnvelope = await booking_service.create_booking(db, current_user, data)
    await db.commit()
    return result


@router.delete("/{booking_id}", response_model=OkResponse)
async def cancel_booking(
    booking_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> OkResponse:
    """예약을 취소합니다 (status=cancelled). 취소된 시간대는 다시 예약 가능.

    Cancel a booking; the freed span becomes bookable again.
    """
    await booking_service.cancel_booking(db, booking_id, current_user)
    await db.commit()
    return OkResponse()
