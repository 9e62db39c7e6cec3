"""사용자 관리 라우터 — Admin 전용.

Users Router — Admin-only user listing and deletion.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from parkspot.api.deps import require_admin
from parkspot.database import get_db
from parkspot.models.user import User
from parkspot.schemas.auth import OkResponse, UserListResponse
from parkspot.services.user_service import user_service

router: APIRouter = APIRouter()


@router.get("", response_model=UserListResponse)
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    _admin: Annotated[User, Depends(require_admin)],
) -> UserListResponse:
    """전체 사용자 목록 (Every registered user)."""
    return await user_service.list_users(db)


@router.delete("/{user_id}", response_model=OkResponse)
async def delete_user(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> OkResponse:
    """사용자를 삭제합니다. 소유 주차 공간, 예약, 결제 기록도 함께 삭제됩니다.

    Delete a user and everything hanging off them.
    """
    await user_service.delete_user(db, user_id, current_user)
    await db.commit()
    return OkResponse()
