"""사용자 관리 서비스 — 관리자용 사용자 목록/삭제.

User Service — Admin user management.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from parkspot.models.user import User
from parkspot.repositories.user_repository import user_repository
from parkspot.schemas.auth import UserListResponse
from parkspot.services.auth_service import to_user_response
from parkspot.utils.exceptions import BadRequestError, NotFoundError


class UserService:
    """관리자 사용자 관리 비즈니스 로직."""

    async def list_users(self, db: AsyncSession) -> UserListResponse:
        """전체 사용자 목록을 조회합니다 (All users, oldest first)."""
        users = await user_repository.list_users(db)
        return UserListResponse(users=[to_user_response(u) for u in users])

    async def delete_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        current_user: User,
    ) -> None:
        """사용자를 삭제합니다. 소유한 주차 공간과 예약도 함께 삭제됩니다.

        Delete a user; their listings (with bookings on them), their own
        bookings and refresh tokens go with them.

        Raises:
            BadRequestError: 자기 자신을 삭제하려 할 때 (Deleting own account)
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        if user_id == current_user.id:
            raise BadRequestError("Cannot delete your own account")

        deleted: bool = await user_repository.delete(db, user_id)
        if not deleted:
            raise NotFoundError("User not found")


# 싱글턴 인스턴스: Singleton instance
user_service: UserService = UserService()
