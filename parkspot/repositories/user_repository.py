"""사용자 레포지토리 — 사용자 CRUD 및 로그인 조회.

User Repository — CRUD and credential lookups for user accounts.
"""

from typing import Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from parkspot.models.user import User
from parkspot.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> User | None:
        """사용자명으로 정확히 일치하는 사용자를 조회합니다 (Exact match)."""
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_for_login(
        self,
        db: AsyncSession,
        username: str,
        role: str,
    ) -> User | None:
        """로그인용 사용자 조회 — 사용자명은 대소문자 무시, 역할은 정확히 일치.

        Look up a user for login: case-insensitive username, exact role.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 입력된 사용자명 (Username as typed)
            role: 선택한 역할 (Role selected on the login form)

        Returns:
            User | None: 조회된 사용자 또는 None (Found user or None)
        """
        query: Select = (
            select(User)
            .where(func.lower(User.username) == username.lower(), User.role == role)
            .order_by(User.created_at)
            .limit(1)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def list_users(self, db: AsyncSession) -> Sequence[User]:
        """전체 사용자를 가입 순으로 조회합니다 (All users, oldest first)."""
        return await self.get_all(db, order_by=User.created_at)


# 싱글턴 인스턴스: Singleton instance
user_repository: UserRepository = UserRepository()
