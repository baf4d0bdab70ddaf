"""인증 API 테스트 — 로그인, 회원가입, 토큰 갱신, 로그아웃, /me 엔드포인트.

Auth API tests — sign-in (with login history), sign-up, token refresh,
sign-out, and profile updates.
"""

from httpx import AsyncClient

from student_records.utils.jwt import create_refresh_token
from tests.conftest import auth_header, make_user

AUTH = "/api/v1/auth"


async def sign_in(client: AsyncClient, email: str, password: str):
    return await client.post(f"{AUTH}/sign-in", json={"email": email, "password": password})


# ===== Sign-in =====

class TestSignIn:
    """로그인 테스트."""

    async def test_sign_in_success(self, client: AsyncClient, admin_user):
        res = await sign_in(client, "admin@test.com", "admin123!")
        assert res.status_code == 200
        data = res.json()
        assert "access_token" in data
        assert "refresh_token" in data
        assert data["token_type"] == "bearer"

    async def test_email_case_insensitive(self, client: AsyncClient, admin_user):
        res = await sign_in(client, "  Admin@Test.com ", "admin123!")
        assert res.status_code == 200

    async def test_wrong_password(self, client: AsyncClient, admin_user):
        res = await sign_in(client, "admin@test.com", "wrong_password")
        assert res.status_code == 401

    async def test_unknown_email(self, client: AsyncClient):
        res = await sign_in(client, "nobody@test.com", "whatever1")
        assert res.status_code == 401

    async def test_inactive_user(self, client: AsyncClient, session):
        """비활성 계정 로그인 실패."""
        await make_user(session, "gone@test.com", "gone1234!", "staff", is_active=False)
        res = await sign_in(client, "gone@test.com", "gone1234!")
        assert res.status_code == 401
        assert res.json()["detail"] == "Account is deactivated"

    async def test_attempts_recorded(self, client: AsyncClient, admin_user, admin_token):
        """성공/실패 시도 모두 로그인 기록에 남음."""
        await sign_in(client, "admin@test.com", "wrong_password")
        await sign_in(client, "admin@test.com", "admin123!")

        res = await client.get(
            "/api/v1/login-records", params={"sort_by": "login_time", "ascending": True},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 200
        records = res.json()["data"]
        assert [r["status"] for r in records] == ["failed", "success"]
        assert all(r["user_id"] == str(admin_user["id"]) for r in records)


# ===== Sign-up =====

class TestSignUp:
    """회원가입 테스트."""

    async def test_sign_up_creates_staff(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/sign-up", json={
            "email": "New.User@Test.com", "password": "longpassword", "name": "New User",
        })
        assert res.status_code == 201
        data = res.json()
        assert data["email"] == "new.user@test.com"
        assert data["role"] == "staff"

        res = await sign_in(client, "new.user@test.com", "longpassword")
        assert res.status_code == 200

    async def test_duplicate_email(self, client: AsyncClient, staff_user):
        res = await client.post(f"{AUTH}/sign-up", json={"email": "staff@test.com", "password": "longpassword"})
        assert res.status_code == 409

    async def test_short_password(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/sign-up", json={"email": "a@test.com", "password": "short"})
        assert res.status_code == 422


# ===== Token refresh / Sign-out =====

class TestTokens:
    """토큰 갱신 및 로그아웃 테스트."""

    async def test_refresh_rotates(self, client: AsyncClient, admin_user):
        """갱신 후 이전 리프레시 토큰은 재사용 불가."""
        tokens = (await sign_in(client, "admin@test.com", "admin123!")).json()

        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 200
        assert res.json()["refresh_token"] != tokens["refresh_token"]

        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 401

    async def test_refresh_invalid_token(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": "not-a-jwt"})
        assert res.status_code == 401

    async def test_refresh_unknown_token(self, client: AsyncClient, admin_user):
        """서명은 유효하지만 저장되지 않은 토큰 → 401."""
        token = create_refresh_token({"sub": str(admin_user["id"]), "role": "admin"})
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": token})
        assert res.status_code == 401

    async def test_access_token_not_accepted_for_refresh(self, client: AsyncClient, admin_token):
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": admin_token})
        assert res.status_code == 401

    async def test_refresh_token_not_accepted_as_access(self, client: AsyncClient, admin_user):
        tokens = (await sign_in(client, "admin@test.com", "admin123!")).json()
        res = await client.get(f"{AUTH}/me", headers=auth_header(tokens["refresh_token"]))
        assert res.status_code == 401

    async def test_sign_out_revokes_refresh_tokens(self, client: AsyncClient, admin_user):
        tokens = (await sign_in(client, "admin@test.com", "admin123!")).json()

        res = await client.post(f"{AUTH}/sign-out", headers=auth_header(tokens["access_token"]))
        assert res.status_code == 204

        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 401


# ===== Profile =====

class TestProfile:
    """/me 엔드포인트 테스트."""

    async def test_me(self, client: AsyncClient, teacher_user, teacher_token):
        res = await client.get(f"{AUTH}/me", headers=auth_header(teacher_token))
        assert res.status_code == 200
        data = res.json()
        assert data["id"] == str(teacher_user["id"])
        assert data["role"] == "teacher"
        assert "password_hash" not in data

    async def test_me_without_token(self, client: AsyncClient):
        res = await client.get(f"{AUTH}/me")
        assert res.status_code == 401

    async def test_me_with_garbage_token(self, client: AsyncClient):
        res = await client.get(f"{AUTH}/me", headers=auth_header("garbage"))
        assert res.status_code == 401

    async def test_update_password(self, client: AsyncClient, staff_user, staff_token):
        res = await client.put(f"{AUTH}/me/password", json={"password": "brand-new-pass"},
                               headers=auth_header(staff_token))
        assert res.status_code == 200

        assert (await sign_in(client, "staff@test.com", "staff123!")).status_code == 401
        assert (await sign_in(client, "staff@test.com", "brand-new-pass")).status_code == 200

    async def test_update_email(self, client: AsyncClient, staff_user, staff_token):
        res = await client.put(f"{AUTH}/me/email", json={"email": "Renamed@Test.com"},
                               headers=auth_header(staff_token))
        assert res.status_code == 200
        assert res.json()["email"] == "renamed@test.com"

    async def test_update_email_taken(self, client: AsyncClient, admin_user, staff_user, staff_token):
        res = await client.put(f"{AUTH}/me/email", json={"email": "admin@test.com"},
                               headers=auth_header(staff_token))
        assert res.status_code == 409
