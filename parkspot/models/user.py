"""사용자 관련 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definitions.
Every account carries exactly one marketplace role:
    Renter — 주차 공간을 검색하고 예약 (browses and books spots)
    Owner  — 주차 공간을 등록하고 예약 현황 확인 (lists spots, sees bookings on them)
    Admin  — 전체 사용자/공간/예약 관리 (manages users, listings and bookings)

Tables:
    - users: 사용자 계정 (User accounts)
"""

import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from parkspot.database import Base


class UserRole(str, Enum):
    """사용자 역할 — Marketplace role stored verbatim in users.role."""

    RENTER = "Renter"
    OWNER = "Owner"
    ADMIN = "Admin"


class User(Base):
    """사용자 모델 — 시스템 사용자 계정 정보.

    User model. Username is globally unique; login compares it case-insensitively.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        username: 로그인 아이디 (Login username, unique)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        role: 역할 (Renter | Owner | Admin)
        contact: 연락처 (Contact number shown to listing owners, optional)
        created_at: 생성 일시 UTC (Creation timestamp)

    Relationships:
        listings: 소유한 주차 공간 (Listings owned, deleted with the user)
        bookings: 예약 목록 (Bookings made as renter, deleted with the user)
        refresh_tokens: 리프레시 토큰 목록 (Active refresh tokens)
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 아이디: Login username (전역 고유, globally unique)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    # 비밀번호 해시: bcrypt hash (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=UserRole.RENTER.value)
    contact: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # 관계: Relationships (DB 레벨 ON DELETE CASCADE에 위임, delegated to FK cascades)
    listings = relationship("Listing", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
    bookings = relationship("Booking", back_populates="renter", cascade="all, delete-orphan", passive_deletes=True)
    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
