"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package. Importing from this package registers every
model with the metadata, which create_all and Alembic rely on.

Modules:
    user: 사용자 (Users and roles)
    token: 리프레시 토큰 (Refresh tokens)
    listing: 주차 공간 (Parking spot listings)
    booking: 예약 및 결제 (Bookings and payments)
"""

from parkspot.models.user import User, UserRole
from parkspot.models.token import RefreshToken
from parkspot.models.listing import Availability, Listing
from parkspot.models.booking import Booking, BookingStatus, Payment

__all__ = [
    "User", "UserRole",
    "RefreshToken",
    "Listing", "Availability",
    "Booking", "BookingStatus", "Payment",
]
