"""FastAPI 의존성 주입 모듈 — 인증 및 역할 검사.

FastAPI dependency injection module — Authentication and authorization.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies the JWT and returns its payload)
    3. 페이로드의 "sub"로 DB에서 사용자를 조회 — 삭제된 사용자는 401
       (User is fetched by "sub"; deleted users get 401)

Authorization:
    require_roles(...)로 허용 역할을 제한합니다. 소유권 검사(자기 주차 공간/예약)는
    서비스 계층에서 수행합니다 (Ownership checks live in the services).
"""

from typing import Annotated, Callable, Awaitable
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from parkspot.database import get_db
from parkspot.models.user import User, UserRole
from parkspot.repositories.user_repository import user_repository
from parkspot.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기: 헤더가 없으면 403 (Missing header yields 403)
security: HTTPBearer = HTTPBearer()
# 선택적 인증용: 헤더가 없어도 통과 (Lets anonymous requests through)
optional_security: HTTPBearer = HTTPBearer(auto_error=False)


async def _user_from_token(db: AsyncSession, token: str) -> User:
    try:
        payload: dict = decode_token(token)
        if payload.get("type") != "access":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")
        user_id: str | None = payload.get("sub")
        if user_id is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
        user: User | None = await user_repository.get_by_id(db, UUID(user_id))
    except HTTPException:
        raise
    except (jwt.InvalidTokenError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """JWT 토큰에서 현재 인증된 사용자를 추출합니다.

    Decode the bearer token and return the authenticated user.

    Raises:
        HTTPException(401): 토큰이 유효하지 않거나 사용자가 없음 (Invalid token or unknown user)
    """
    return await _user_from_token(db, credentials.credentials)


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(optional_security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """토큰이 있으면 사용자, 없으면 None (Authenticated user or None for anonymous calls)."""
    if credentials is None:
        return None
    return await _user_from_token(db, credentials.credentials)


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[User]]:
    """역할 기반 권한 검사 의존성 팩토리.

    Dependency factory allowing only the given roles; others get 403.

    Args:
        roles: 허용할 역할 목록 (Allowed roles)

    Returns:
        FastAPI 의존성 함수 — 인증된 사용자 반환 또는 403 발생
        (Dependency returning the User or raising 403)
    """
    allowed: set[str] = {r.value for r in roles}

    async def _check(
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if current_user.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return current_user
    return _check


# 편의 의존성: Pre-configured role dependencies
require_admin = require_roles(UserRole.ADMIN)
require_owner = require_roles(UserRole.OWNER, UserRole.ADMIN)
