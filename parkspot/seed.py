"""초기화 스크립트 — 테이블 생성 및 기본 관리자 계정 시드.

Init script — Creates tables and upserts the built-in admin accounts.
Runs automatically on startup when INIT_DB_ON_STARTUP is set, or by hand.

Usage:
    python -m parkspot.seed

Creates:
    - 모든 테이블 (users, refresh_tokens, listings, bookings, payments)
    - 관리자 계정: SEED_ADMIN_USERNAMES / SEED_ADMIN_PASSWORD (Admin role)
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from parkspot.config import settings
from parkspot.database import async_session, engine, Base
from parkspot.models import User
from parkspot.models.user import UserRole
from parkspot.repositories.user_repository import user_repository
from parkspot.utils.password import hash_password


async def seed_admins(
    db: AsyncSession,
    usernames: list[str],
    password: str,
) -> int:
    """기본 관리자 계정을 업서트합니다.

    Upsert the built-in admins: missing accounts are created, existing ones
    are forced back to the Admin role with the configured password.

    Returns:
        int: 새로 생성된 계정 수 (Number of accounts created)
    """
    created: int = 0
    password_hash: str = hash_password(password)
    for username in usernames:
        user: User | None = await user_repository.get_by_username(db, username)
        if user is None:
            await user_repository.create(
                db,
                {"username": username, "password_hash": password_hash, "role": UserRole.ADMIN.value},
            )
            created += 1
        else:
            user.role = UserRole.ADMIN.value
            user.password_hash = password_hash
    await db.flush()
    return created


async def init_db() -> None:
    """테이블을 생성하고 관리자 계정을 시드합니다 (Idempotent)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        created: int = await seed_admins(
            db, settings.SEED_ADMIN_USERNAMES, settings.SEED_ADMIN_PASSWORD
        )
        await db.commit()
    print(f"Seeded admins: {created} created, {len(settings.SEED_ADMIN_USERNAMES) - created} updated")


if __name__ == "__main__":
    asyncio.run(init_db())
