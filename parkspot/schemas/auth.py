"""인증 및 사용자 관련 Pydantic 요청/응답 스키마 정의.

Authentication and user Pydantic request/response schema definitions.
Covers registration, login, token refresh, current user info and the
admin user list.
"""

from pydantic import BaseModel, Field

from parkspot.models.user import UserRole


class RegisterRequest(BaseModel):
    """회원가입 요청 스키마.

    Self-registration request. Admin accounts cannot self-register;
    the service rejects role "Admin" with 403.

    Attributes:
        username: 사용자 아이디 (Desired login username)
        password: 비밀번호 (Plain text, bcrypt-hashed on server)
        role: 역할 (Renter | Owner)
        contact: 연락처 (Contact number, optional)
        contact_number: contact의 별칭 (Alias accepted from older clients)
    """

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    role: UserRole
    contact: str | None = None
    contact_number: str | None = None  # 구버전 클라이언트 호환 (Older frontend field name)

    @property
    def contact_value(self) -> str | None:
        return self.contact or self.contact_number or None


class LoginRequest(BaseModel):
    """로그인 요청 스키마 — 사용자명은 대소문자 구분 없이, 역할은 정확히 일치해야 합니다.

    Login request. Username matches case-insensitively; role must match exactly.
    """

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    role: UserRole


class UserResponse(BaseModel):
    """사용자 응답 스키마 — 비밀번호 해시는 절대 포함하지 않습니다.

    Public user representation (never includes the password hash).
    """

    id: str
    username: str
    role: str
    contact: str | None = None


class RegisterResponse(BaseModel):
    """회원가입 응답 — {"user": {...}}."""

    user: UserResponse


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    Attributes:
        access_token: JWT 액세스 토큰 (Access token for the Authorization header)
        refresh_token: JWT 리프레시 토큰 (Long-lived refresh token)
        token_type: 토큰 유형 (Always "bearer")
    """

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class LoginResponse(TokenResponse):
    """로그인 응답 — 토큰과 함께 사용자 정보 반환 (Tokens plus the logged-in user)."""

    user: UserResponse


class RefreshRequest(BaseModel):
    """토큰 갱신/로그아웃 요청 스키마 (Refresh or logout request)."""

    refresh_token: str


class UserListResponse(BaseModel):
    """관리자 사용자 목록 응답 — {"users": [...]}."""

    users: list[UserResponse]


class OkResponse(BaseModel):
    """단순 성공 응답 — {"ok": true}."""

    ok: bool = True
