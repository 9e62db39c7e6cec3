"""예약 API 테스트 — 생성, 시간 충돌, 역할별 조회, 취소 권한, 결제, 수익.

Bookings API tests — Creation, overlap detection, role-scoped listing,
cancellation permissions, payment rows and owner earnings.
Listing fixture rates: 10/hour, 50/day, 500/month.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from httpx import AsyncClient
from sqlalchemy import select

from tests.conftest import auth_header

BASE = "/api/bookings"
DAY = datetime(2026, 5, 1, tzinfo=timezone.utc)


def _at(hour: int) -> str:
    return (DAY + timedelta(hours=hour)).isoformat()


async def _book(client: AsyncClient, token: str, listing_id, start: int, end: int, **extra):
    return await client.post(BASE, headers=auth_header(token), json={
        "listing_id": str(listing_id),
        "start_time": _at(start),
        "end_time": _at(end),
        **extra,
    })


# ===== Create =====

class TestCreateBooking:
    """예약 생성 테스트."""

    async def test_create_success(self, client: AsyncClient, listing, renter_token):
        """3시간 예약 — 요금 30, 상태 confirmed."""
        res = await _book(client, renter_token, listing.id, 8, 11)
        assert res.status_code == 201
        data = res.json()["booking"]
        assert data["listing_id"] == str(listing.id)
        assert data["location"] == "Gulshan 1, Road 12"
        assert data["renter"] == "renter"
        assert data["renter_contact"] == "010-1111-2222"
        assert data["total_price"] == 30.0
        assert data["duration_type"] == "optimal"
        assert data["status"] == "confirmed"
        assert data["payment_status"] == "pending"

    async def test_root_path_mirror(self, client: AsyncClient, listing, renter_token):
        """루트 경로 /bookings로도 예약."""
        res = await client.post("/bookings", headers=auth_header(renter_token), json={
            "listing_id": str(listing.id),
            "start_time": _at(1),
            "end_time": _at(2),
        })
        assert res.status_code == 201

    async def test_daily_duration_type(self, client: AsyncClient, listing, renter_token):
        """daily 요금 방식: 30시간 → 2일 = 100."""
        res = await _book(client, renter_token, listing.id, 0, 30, duration_type="daily")
        assert res.status_code == 201
        data = res.json()["booking"]
        assert data["duration_type"] == "daily"
        assert data["total_price"] == 100.0

    async def test_unknown_duration_type_is_optimal(self, client: AsyncClient, listing, renter_token):
        """알 수 없는 요금 방식은 optimal."""
        res = await _book(client, renter_token, listing.id, 0, 30, duration_type="weekly")
        assert res.status_code == 201
        data = res.json()["booking"]
        assert data["duration_type"] == "optimal"
        assert data["total_price"] == 110.0

    async def test_non_string_duration_type_is_optimal(self, client: AsyncClient, listing, renter_token):
        """문자열이 아닌 요금 방식(숫자, bool)도 optimal."""
        res = await _book(client, renter_token, listing.id, 0, 30, duration_type=5)
        assert res.status_code == 201
        assert res.json()["booking"]["duration_type"] == "optimal"

        res = await _book(client, renter_token, listing.id, 40, 70, duration_type=True)
        assert res.status_code == 201
        data = res.json()["booking"]
        assert data["duration_type"] == "optimal"
        assert data["total_price"] == 110.0

    async def test_partial_hour_rounds_up(self, client: AsyncClient, listing, renter_token):
        """1시간 1분은 2시간 요금."""
        res = await client.post(BASE, headers=auth_header(renter_token), json={
            "listing_id": str(listing.id),
            "start_time": _at(8),
            "end_time": (DAY + timedelta(hours=9, minutes=1)).isoformat(),
        })
        assert res.status_code == 201
        assert res.json()["booking"]["total_price"] == 20.0

    async def test_payment_row_created(self, client: AsyncClient, db, listing, renter_token):
        """예약마다 더미 결제 기록 생성."""
        from parkspot.models.booking import Payment

        res = await _book(client, renter_token, listing.id, 8, 11)
        booking_id = UUID(res.json()["booking"]["id"])

        result = await db.execute(select(Payment).where(Payment.booking_id == booking_id))
        payment = result.scalar_one()
        assert payment.amount == 30.0
        assert payment.payment_method == "dummy"
        assert payment.status == "pending"

    async def test_end_before_start(self, client: AsyncClient, listing, renter_token):
        """종료가 시작 이전이면 400."""
        res = await _book(client, renter_token, listing.id, 11, 8)
        assert res.status_code == 400

    async def test_end_equals_start(self, client: AsyncClient, listing, renter_token):
        """종료 = 시작이면 400."""
        res = await _book(client, renter_token, listing.id, 8, 8)
        assert res.status_code == 400

    async def test_unknown_listing(self, client: AsyncClient, renter_user, renter_token):
        """없는 주차 공간 예약 시 404."""
        res = await _book(client, renter_token, uuid4(), 8, 11)
        assert res.status_code == 404

    async def test_unavailable_listing(self, client: AsyncClient, db, listing, renter_token):
        """예약 불가 상태의 주차 공간은 409."""
        listing.availability = "Unavailable"
        await db.flush()

        res = await _book(client, renter_token, listing.id, 8, 11)
        assert res.status_code == 409

    async def test_missing_fields(self, client: AsyncClient, listing, renter_token):
        """필수 필드 누락 시 422."""
        res = await client.post(BASE, headers=auth_header(renter_token), json={
            "listing_id": str(listing.id),
        })
        assert res.status_code == 422

    async def test_unauthenticated(self, client: AsyncClient, listing):
        """토큰 없이 예약 시 거부."""
        res = await client.post(BASE, json={
            "listing_id": str(listing.id),
            "start_time": _at(8),
            "end_time": _at(11),
        })
        assert res.status_code in (401, 403)


# ===== Overlap =====

class TestOverlap:
    """시간 충돌 검사 테스트 — 경계 포함."""

    async def test_overlapping_rejected(
        self, client: AsyncClient, listing, renter_token, other_renter_token
    ):
        """겹치는 시간대 예약은 409 Not available."""
        assert (await _book(client, renter_token, listing.id, 8, 11)).status_code == 201

        res = await _book(client, other_renter_token, listing.id, 10, 12)
        assert res.status_code == 409
        assert res.json()["detail"] == "Not available"

    async def test_enclosing_span_rejected(
        self, client: AsyncClient, listing, renter_token, other_renter_token
    ):
        """기존 예약을 감싸는 기간도 충돌."""
        assert (await _book(client, renter_token, listing.id, 8, 11)).status_code == 201
        res = await _book(client, other_renter_token, listing.id, 7, 12)
        assert res.status_code == 409

    async def test_inside_span_rejected(
        self, client: AsyncClient, listing, renter_token, other_renter_token
    ):
        """기존 예약 안쪽 기간도 충돌."""
        assert (await _book(client, renter_token, listing.id, 8, 11)).status_code == 201
        res = await _book(client, other_renter_token, listing.id, 9, 10)
        assert res.status_code == 409

    async def test_touching_boundary_rejected(
        self, client: AsyncClient, listing, renter_token, other_renter_token
    ):
        """끝과 시작이 맞닿아도 충돌 (경계 포함)."""
        assert (await _book(client, renter_token, listing.id, 8, 11)).status_code == 201
        res = await _book(client, other_renter_token, listing.id, 11, 13)
        assert res.status_code == 409

    async def test_disjoint_accepted(
        self, client: AsyncClient, listing, renter_token, other_renter_token
    ):
        """겹치지 않는 시간대는 예약 가능."""
        assert (await _book(client, renter_token, listing.id, 8, 11)).status_code == 201
        res = await _book(client, other_renter_token, listing.id, 12, 14)
        assert res.status_code == 201

    async def test_other_listing_same_time(
        self, client: AsyncClient, listing, owner_token, renter_token, other_renter_token
    ):
        """다른 주차 공간은 같은 시간에도 예약 가능."""
        res = await client.post("/api/listings", headers=auth_header(owner_token), json={
            "location": "Second spot",
            "price_hourly": 10,
        })
        second_id = res.json()["listing"]["id"]

        assert (await _book(client, renter_token, listing.id, 8, 11)).status_code == 201
        res = await _book(client, other_renter_token, second_id, 8, 11)
        assert res.status_code == 201

    async def test_cancelled_span_rebookable(
        self, client: AsyncClient, listing, renter_token, other_renter_token
    ):
        """취소된 예약 시간대는 다시 예약 가능."""
        res = await _book(client, renter_token, listing.id, 8, 11)
        booking_id = res.json()["booking"]["id"]

        res = await client.delete(f"{BASE}/{booking_id}", headers=auth_header(renter_token))
        assert res.status_code == 200

        res = await _book(client, other_renter_token, listing.id, 9, 10)
        assert res.status_code == 201


# ===== List =====

class TestListBookings:
    """역할별 예약 목록 테스트."""

    async def _seed(self, client, listing, renter_token, other_renter_token):
        await _book(client, renter_token, listing.id, 12, 14)
        await _book(client, other_renter_token, listing.id, 8, 10)

    async def test_renter_sees_own(
        self, client: AsyncClient, listing, renter_token, other_renter_token
    ):
        """Renter는 자기 예약만."""
        await self._seed(client, listing, renter_token, other_renter_token)
        res = await client.get(BASE, headers=auth_header(renter_token))
        assert res.status_code == 200
        bookings = res.json()["bookings"]
        assert [b["renter"] for b in bookings] == ["renter"]

    async def test_owner_sees_bookings_on_own_listings(
        self, client: AsyncClient, listing, owner_token, renter_token, other_renter_token
    ):
        """Owner는 자기 주차 공간의 예약 전체, 시작 시각 순."""
        await self._seed(client, listing, renter_token, other_renter_token)
        res = await client.get(BASE, headers=auth_header(owner_token))
        bookings = res.json()["bookings"]
        assert [b["renter"] for b in bookings] == ["renter2", "renter"]

    async def test_other_owner_sees_nothing(
        self, client: AsyncClient, listing, other_owner_token, renter_token, other_renter_token
    ):
        """다른 Owner에게는 보이지 않음."""
        await self._seed(client, listing, renter_token, other_renter_token)
        res = await client.get(BASE, headers=auth_header(other_owner_token))
        assert res.json()["bookings"] == []

    async def test_admin_sees_all(
        self, client: AsyncClient, listing, admin_token, renter_token, other_renter_token
    ):
        """Admin은 전체."""
        await self._seed(client, listing, renter_token, other_renter_token)
        res = await client.get(BASE, headers=auth_header(admin_token))
        assert len(res.json()["bookings"]) == 2


# ===== Cancel =====

class TestCancelBooking:
    """예약 취소 권한 테스트."""

    async def _create(self, client, listing, renter_token) -> str:
        res = await _book(client, renter_token, listing.id, 8, 11)
        return res.json()["booking"]["id"]

    async def test_renter_cancels_own(self, client: AsyncClient, listing, renter_token):
        """예약자 본인 취소."""
        booking_id = await self._create(client, listing, renter_token)
        res = await client.delete(f"{BASE}/{booking_id}", headers=auth_header(renter_token))
        assert res.status_code == 200
        assert res.json() == {"ok": True}

        res = await client.get(BASE, headers=auth_header(renter_token))
        assert res.json()["bookings"][0]["status"] == "cancelled"

    async def test_other_renter_forbidden(
        self, client: AsyncClient, listing, renter_token, other_renter_token
    ):
        """다른 Renter는 취소 불가 403."""
        booking_id = await self._create(client, listing, renter_token)
        res = await client.delete(f"{BASE}/{booking_id}", headers=auth_header(other_renter_token))
        assert res.status_code == 403

    async def test_listing_owner_cancels(
        self, client: AsyncClient, listing, renter_token, owner_token
    ):
        """주차 공간 소유자는 취소 가능."""
        booking_id = await self._create(client, listing, renter_token)
        res = await client.delete(f"{BASE}/{booking_id}", headers=auth_header(owner_token))
        assert res.status_code == 200

    async def test_other_owner_forbidden(
        self, client: AsyncClient, listing, renter_token, other_owner_token
    ):
        """다른 Owner는 취소 불가 403."""
        booking_id = await self._create(client, listing, renter_token)
        res = await client.delete(f"{BASE}/{booking_id}", headers=auth_header(other_owner_token))
        assert res.status_code == 403

    async def test_admin_cancels(self, client: AsyncClient, listing, renter_token, admin_token):
        """Admin은 모든 예약 취소 가능."""
        booking_id = await self._create(client, listing, renter_token)
        res = await client.delete(f"{BASE}/{booking_id}", headers=auth_header(admin_token))
        assert res.status_code == 200

    async def test_cancel_nonexistent(self, client: AsyncClient, renter_user, renter_token):
        """없는 예약 취소 시 404."""
        res = await client.delete(f"{BASE}/{uuid4()}", headers=auth_header(renter_token))
        assert res.status_code == 404


# ===== Earnings =====

class TestEarnings:
    """소유자 수익 테스트."""

    async def test_confirmed_bookings_only(
        self, client: AsyncClient, listing, owner_token, renter_token, other_renter_token
    ):
        """확정 예약만 합산, 취소된 예약 제외."""
        await _book(client, renter_token, listing.id, 8, 11)  # 30
        res = await _book(client, other_renter_token, listing.id, 12, 14)  # 20
        cancelled_id = res.json()["booking"]["id"]
        await _book(client, renter_token, listing.id, 16, 17)  # 10

        res = await client.get(f"{BASE}/earnings", headers=auth_header(owner_token))
        assert res.status_code == 200
        assert res.json() == {"total_earnings": 60.0, "booking_count": 3}

        await client.delete(f"{BASE}/{cancelled_id}", headers=auth_header(owner_token))
        res = await client.get(f"{BASE}/earnings", headers=auth_header(owner_token))
        assert res.json() == {"total_earnings": 40.0, "booking_count": 2}

    async def test_no_bookings(self, client: AsyncClient, owner_user, owner_token):
        """예약이 없으면 0."""
        res = await client.get(f"{BASE}/earnings", headers=auth_header(owner_token))
        assert res.json() == {"total_earnings": 0.0, "booking_count": 0}

    async def test_renter_forbidden(self, client: AsyncClient, renter_token):
        """Renter는 403."""
        res = await client.get(f"{BASE}/earnings", headers=auth_header(renter_token))
        assert res.status_code == 403
