"""사용자 관리 API 테스트 — Admin 전용 목록/삭제 및 연쇄 삭제.

Users API tests — Admin-only listing and deletion, including the cascade
that removes a deleted user's listings and bookings.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from httpx import AsyncClient

from tests.conftest import auth_header

BASE = "/api/users"
START = datetime(2026, 5, 1, 8, 0, tzinfo=timezone.utc)


class TestListUsers:
    """사용자 목록 테스트."""

    async def test_admin_lists_users(self, client: AsyncClient, admin_token, renter_user, owner_user):
        """Admin은 전체 사용자 조회."""
        res = await client.get(BASE, headers=auth_header(admin_token))
        assert res.status_code == 200
        usernames = {u["username"] for u in res.json()["users"]}
        assert {"Ahmed", "renter", "owner"} <= usernames

    async def test_owner_forbidden(self, client: AsyncClient, owner_token):
        """Owner는 403."""
        res = await client.get(BASE, headers=auth_header(owner_token))
        assert res.status_code == 403

    async def test_renter_forbidden(self, client: AsyncClient, renter_token):
        """Renter는 403."""
        res = await client.get("/users", headers=auth_header(renter_token))
        assert res.status_code == 403

    async def test_unauthenticated(self, client: AsyncClient):
        """토큰 없이 접근 시 거부."""
        res = await client.get(BASE)
        assert res.status_code in (401, 403)


class TestDeleteUser:
    """사용자 삭제 테스트."""

    async def test_delete_renter(self, client: AsyncClient, admin_token, renter_user):
        """Admin이 Renter 삭제."""
        res = await client.delete(f"{BASE}/{renter_user.id}", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json() == {"ok": True}

        res = await client.get(BASE, headers=auth_header(admin_token))
        assert "renter" not in {u["username"] for u in res.json()["users"]}

    async def test_deleted_user_token_rejected(
        self, client: AsyncClient, admin_token, renter_user, renter_token
    ):
        """삭제된 사용자의 토큰은 401."""
        await client.delete(f"{BASE}/{renter_user.id}", headers=auth_header(admin_token))
        res = await client.get("/api/auth/me", headers=auth_header(renter_token))
        assert res.status_code == 401

    async def test_delete_owner_cascades(
        self, client: AsyncClient, admin_token, owner_user, listing, renter_token
    ):
        """Owner 삭제 시 주차 공간과 예약도 삭제."""
        res = await client.post("/api/bookings", headers=auth_header(renter_token), json={
            "listing_id": str(listing.id),
            "start_time": START.isoformat(),
            "end_time": (START + timedelta(hours=2)).isoformat(),
        })
        assert res.status_code == 201

        res = await client.delete(f"{BASE}/{owner_user.id}", headers=auth_header(admin_token))
        assert res.status_code == 200

        res = await client.get("/api/listings")
        assert res.json()["listings"] == []
        res = await client.get("/api/bookings", headers=auth_header(admin_token))
        assert res.json()["bookings"] == []

    async def test_delete_nonexistent(self, client: AsyncClient, admin_token):
        """존재하지 않는 사용자 삭제 시 404."""
        res = await client.delete(f"{BASE}/{uuid4()}", headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_delete_self_rejected(self, client: AsyncClient, admin_token, admin_user):
        """자기 자신 삭제 시 400."""
        res = await client.delete(f"{BASE}/{admin_user.id}", headers=auth_header(admin_token))
        assert res.status_code == 400

    async def test_non_admin_cannot_delete(self, client: AsyncClient, owner_token, renter_user):
        """Owner가 삭제 시도 시 403."""
        res = await client.delete(f"{BASE}/{renter_user.id}", headers=auth_header(owner_token))
        assert res.status_code == 403
