"""학생 기록 API 테스트.

Archive API tests — authorship, type filter, and role checks.
"""

import uuid

from httpx import AsyncClient

from tests.conftest import auth_header

ARCHIVES = "/api/v1/archives"


def archive_payload(student_id, archive_type: str = "reward", **overrides) -> dict:
    payload = {
        "student_id": str(student_id),
        "title": "Science fair award",
        "content": "First prize in the regional science fair.",
        "type": archive_type,
        "date": "2024-05-17",
    }
    payload.update(overrides)
    return payload


class TestArchives:
    """학생 기록 테스트."""

    async def test_create_sets_author(self, client: AsyncClient, teacher_token, teacher_user, student):
        """작성자는 현재 로그인 사용자."""
        res = await client.post(ARCHIVES, json=archive_payload(student["id"]), headers=auth_header(teacher_token))
        assert res.status_code == 201
        data = res.json()
        assert data["created_by"] == str(teacher_user["id"])
        assert data["type"] == "reward"

    async def test_invalid_type(self, client: AsyncClient, admin_token, student):
        res = await client.post(
            ARCHIVES, json=archive_payload(student["id"], "gossip"), headers=auth_header(admin_token)
        )
        assert res.status_code == 422

    async def test_missing_student(self, client: AsyncClient, admin_token):
        res = await client.post(ARCHIVES, json=archive_payload(uuid.uuid4()), headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_list_filter_by_type(self, client: AsyncClient, admin_token, student):
        await client.post(ARCHIVES, json=archive_payload(student["id"], "reward"), headers=auth_header(admin_token))
        await client.post(ARCHIVES, json=archive_payload(student["id"], "note"), headers=auth_header(admin_token))

        res = await client.get(ARCHIVES, params={"type": "note"}, headers=auth_header(admin_token))
        assert res.status_code == 200
        body = res.json()
        assert body["pagination"]["total"] == 1
        assert body["data"][0]["type"] == "note"
        assert body["data"][0]["student"]["name"] == "Kim Minjun"

    async def test_update_and_delete(self, client: AsyncClient, admin_token, student):
        created = (
            await client.post(ARCHIVES, json=archive_payload(student["id"]), headers=auth_header(admin_token))
        ).json()

        res = await client.put(
            f"{ARCHIVES}/{created['id']}", json={"title": "Updated"}, headers=auth_header(admin_token)
        )
        assert res.status_code == 200
        assert res.json()["title"] == "Updated"

        res = await client.delete(f"{ARCHIVES}/{created['id']}", headers=auth_header(admin_token))
        assert res.status_code == 204
        res = await client.get(f"{ARCHIVES}/{created['id']}", headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_staff_cannot_delete(self, client: AsyncClient, admin_token, staff_token, student):
        created = (
            await client.post(ARCHIVES, json=archive_payload(student["id"]), headers=auth_header(admin_token))
        ).json()
        res = await client.delete(f"{ARCHIVES}/{created['id']}", headers=auth_header(staff_token))
        assert res.status_code == 403
