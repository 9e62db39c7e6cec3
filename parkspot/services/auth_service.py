"""인증 서비스 — 회원가입, 로그인, 토큰 갱신 비즈니스 로직.

Auth Service — Business logic for registration, login and the JWT token
lifecycle (access token + DB-stored refresh token).
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from parkspot.config import settings
from parkspot.models.token import RefreshToken
from parkspot.models.user import User, UserRole
from parkspot.repositories.auth_repository import auth_repository
from parkspot.repositories.user_repository import user_repository
from parkspot.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserResponse,
)
from parkspot.utils.exceptions import DuplicateError, ForbiddenError, UnauthorizedError
from parkspot.utils.jwt import create_access_token, create_refresh_token, decode_token
from parkspot.utils.password import hash_password, verify_password


def to_user_response(user: User) -> UserResponse:
    """사용자 모델을 공개 응답 스키마로 변환합니다 (User model to public schema)."""
    return UserResponse(
        id=str(user.id),
        username=user.username,
        role=user.role,
        contact=user.contact,
    )


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling registration, login, token refresh and logout.
    """

    def _build_jwt_payload(self, user: User) -> dict[str, str]:
        return {
            "sub": str(user.id),
            "username": user.username,
            "role": user.role,
        }

    async def _generate_tokens(
        self,
        db: AsyncSession,
        user: User,
    ) -> TokenResponse:
        """액세스 토큰과 리프레시 토큰을 생성합니다.

        Generate an access/refresh token pair and persist the refresh token.
        기존 리프레시 토큰은 정리됩니다 (Older refresh tokens are removed).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 사용자 모델 (User model instance)

        Returns:
            TokenResponse: 토큰 응답 (Token response with access and refresh tokens)
        """
        payload: dict[str, str] = self._build_jwt_payload(user)
        access_token: str = create_access_token(payload)
        refresh_token: str = create_refresh_token(payload)

        await auth_repository.delete_user_refresh_tokens(db, user.id)

        expires_at: datetime = datetime.now(timezone.utc) + timedelta(
            days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS
        )
        await auth_repository.create_refresh_token(
            db, user_id=user.id, token=refresh_token, expires_at=expires_at
        )

        return TokenResponse(access_token=access_token, refresh_token=refresh_token)

    async def register(
        self,
        db: AsyncSession,
        data: RegisterRequest,
    ) -> RegisterResponse:
        """새 사용자를 등록합니다.

        Register a Renter or Owner account. Admin accounts are seeded only.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 회원가입 요청 데이터 (Registration request data)

        Returns:
            RegisterResponse: 생성된 사용자 (Created user)

        Raises:
            ForbiddenError: Admin 역할로 가입을 시도할 때 (Admin self-registration)
            DuplicateError: 이미 존재하는 사용자명일 때 (Username taken)
        """
        if data.role is UserRole.ADMIN:
            raise ForbiddenError("Admin registration not allowed")

        if await user_repository.exists(db, {"username": data.username}):
            raise DuplicateError("Username already exists")

        try:
            user: User = await user_repository.create(
                db,
                {
                    "username": data.username,
                    "password_hash": hash_password(data.password),
                    "role": data.role.value,
                    "contact": data.contact_value,
                },
            )
        except IntegrityError:
            # 동시 가입으로 exists 검사를 통과한 경우 고유 제약에서 걸림 (Concurrent signup)
            await db.rollback()
            raise DuplicateError("Username already exists")
        return RegisterResponse(user=to_user_response(user))

    async def login(
        self,
        db: AsyncSession,
        data: LoginRequest,
    ) -> LoginResponse:
        """로그인을 처리합니다.

        Authenticate by case-insensitive username, exact role and password.

        Raises:
            UnauthorizedError: 잘못된 인증 정보일 때 (Invalid credentials)
        """
        user: User | None = await user_repository.get_for_login(
            db, data.username, data.role.value
        )
        if user is None or not verify_password(data.password, user.password_hash):
            raise UnauthorizedError("Invalid credentials")

        tokens: TokenResponse = await self._generate_tokens(db, user)
        return LoginResponse(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            user=to_user_response(user),
        )

    async def refresh_tokens(
        self,
        db: AsyncSession,
        data: RefreshRequest,
    ) -> TokenResponse:
        """리프레시 토큰으로 새 토큰 쌍을 발급합니다.

        Exchange a valid, stored refresh token for a new token pair.

        Raises:
            UnauthorizedError: 토큰이 유효하지 않거나 폐기되었거나 만료됨
                               (Invalid, revoked or expired refresh token)
        """
        try:
            payload: dict = decode_token(data.refresh_token)
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid refresh token")

        if payload.get("type") != "refresh":
            raise UnauthorizedError("Invalid token type")

        stored: RefreshToken | None = await auth_repository.get_refresh_token(
            db, data.refresh_token
        )
        if stored is None:
            raise UnauthorizedError("Refresh token has been revoked")

        user: User | None = await user_repository.get_by_id(db, UUID(payload["sub"]))
        if user is None:
            raise UnauthorizedError("User not found")

        return await self._generate_tokens(db, user)

    async def logout(self, db: AsyncSession, refresh_token: str) -> None:
        """리프레시 토큰을 폐기합니다. 이미 없는 토큰이어도 성공 처리 (Idempotent)."""
        await auth_repository.delete_refresh_token(db, refresh_token)


# 싱글턴 인스턴스: Singleton instance
auth_service: AuthService = AuthService()
