"""API 라우터 패키지 — 모든 마켓플레이스 엔드포인트 통합.

API Router package — Aggregates every marketplace endpoint into one router.
main.py mounts it twice: under /api and at the root path, so both
/api/listings and /listings resolve.

Included routers:
    - auth: 회원가입, 로그인, 토큰 갱신 (Registration, login, tokens)
    - listings: 주차 공간 및 요금 견적 (Listings and price quotes)
    - bookings: 예약 및 소유자 수익 (Bookings and owner earnings)
    - users: 관리자 사용자 관리 (Admin user management)
"""

from fastapi import APIRouter

from parkspot.api.routes.auth import router as auth_router
from parkspot.api.routes.listings import router as listings_router
from parkspot.api.routes.bookings import router as bookings_router
from parkspot.api.routes.users import router as users_router

api_router: APIRouter = APIRouter()

# 회원가입/로그인은 루트에 (/register, /login), 토큰 관리는 /auth 하위
api_router.include_router(auth_router, tags=["Auth"])
api_router.include_router(listings_router, prefix="/listings", tags=["Listings"])
api_router.include_router(bookings_router, prefix="/bookings", tags=["Bookings"])
api_router.include_router(users_router, prefix="/users", tags=["Users"])
