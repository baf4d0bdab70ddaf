"""학생 API 테스트 — 목록/검색/필터, 등록, 수정, 삭제, 권한.

Student API tests — listing with search and filters, CRUD, and role checks.
"""

import uuid

from httpx import AsyncClient

from tests.conftest import auth_header

STUDENTS = "/api/v1/students"


def student_payload(number: str = "S2024100", name: str = "Park Jiwoo", **overrides) -> dict:
    payload = {
        "student_id": number,
        "name": name,
        "gender": "female",
        "birth_date": "2010-09-01",
        "class_name": "Grade 3B",
        "enrollment_date": "2022-03-02",
        "phone": "010-1234-5678",
    }
    payload.update(overrides)
    return payload


async def create_students(client: AsyncClient, token: str, count: int) -> list[dict]:
    created = []
    for i in range(count):
        res = await client.post(STUDENTS, json=student_payload(
            number=f"S{i:03d}",
            name=f"Student {i:02d}",
            gender="male" if i % 2 == 0 else "female",
            class_name="Grade 1A" if i < 3 else "Grade 2C",
        ), headers=auth_header(token))
        assert res.status_code == 201
        created.append(res.json())
    return created


# ===== List =====

class TestListStudents:
    """학생 목록 조회 테스트."""

    async def test_list_requires_auth(self, client: AsyncClient):
        """토큰 없이 조회 시 401."""
        res = await client.get(STUDENTS)
        assert res.status_code == 401

    async def test_list_empty(self, client: AsyncClient, staff_token):
        res = await client.get(STUDENTS, headers=auth_header(staff_token))
        assert res.status_code == 200
        body = res.json()
        assert body["data"] == []
        assert body["pagination"] == {"page": 1, "page_size": 10, "total": 0, "total_pages": 0}

    async def test_pagination(self, client: AsyncClient, admin_token):
        """page_size=2, page=3 → 마지막 1건."""
        await create_students(client, admin_token, 5)
        res = await client.get(
            STUDENTS,
            params={"page": 3, "page_size": 2, "sort_by": "student_id", "ascending": True},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 200
        body = res.json()
        assert [s["student_id"] for s in body["data"]] == ["S004"]
        assert body["pagination"] == {"page": 3, "page_size": 2, "total": 5, "total_pages": 3}

    async def test_page_size_capped(self, client: AsyncClient, admin_token):
        """page_size 는 MAX_PAGE_SIZE 로 제한."""
        res = await client.get(STUDENTS, params={"page_size": 1000}, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["pagination"]["page_size"] == 100

    async def test_invalid_page(self, client: AsyncClient, admin_token):
        res = await client.get(STUDENTS, params={"page": 0}, headers=auth_header(admin_token))
        assert res.status_code == 422

    async def test_search_by_name_or_number(self, client: AsyncClient, admin_token):
        await create_students(client, admin_token, 5)
        by_name = await client.get(STUDENTS, params={"search": "student 01"}, headers=auth_header(admin_token))
        by_number = await client.get(STUDENTS, params={"search": "S003"}, headers=auth_header(admin_token))
        assert [s["student_id"] for s in by_name.json()["data"]] == ["S001"]
        assert [s["student_id"] for s in by_number.json()["data"]] == ["S003"]

    async def test_search_text_with_percent(self, client: AsyncClient, admin_token):
        """검색어 "n%" 도 부분 일치로 처리 — "Ann" 과 일치."""
        await client.post(STUDENTS, json=student_payload(number="S1", name="Ann"), headers=auth_header(admin_token))
        await client.post(STUDENTS, json=student_payload(number="S2", name="Bob"), headers=auth_header(admin_token))

        res = await client.get(STUDENTS, params={"search": "n%"}, headers=auth_header(admin_token))
        assert res.json()["pagination"]["total"] == 1
        assert res.json()["data"][0]["name"] == "Ann"

    async def test_search_underscore_is_literal(self, client: AsyncClient, admin_token):
        await client.post(STUDENTS, json=student_payload(number="A_1", name="Ann"), headers=auth_header(admin_token))
        await client.post(STUDENTS, json=student_payload(number="AB1", name="Bob"), headers=auth_header(admin_token))

        res = await client.get(STUDENTS, params={"search": "A_1"}, headers=auth_header(admin_token))
        assert [s["student_id"] for s in res.json()["data"]] == ["A_1"]

    async def test_filters_combined(self, client: AsyncClient, admin_token):
        """성별 + 반 필터는 AND."""
        await create_students(client, admin_token, 6)
        res = await client.get(
            STUDENTS,
            params={"gender": "male", "class_name": "1a"},
            headers=auth_header(admin_token),
        )
        body = res.json()
        assert body["pagination"]["total"] == 2
        assert {s["student_id"] for s in body["data"]} == {"S000", "S002"}

    async def test_sort_by_name_descending(self, client: AsyncClient, admin_token):
        await create_students(client, admin_token, 3)
        res = await client.get(STUDENTS, params={"sort_by": "name"}, headers=auth_header(admin_token))
        assert [s["name"] for s in res.json()["data"]] == ["Student 02", "Student 01", "Student 00"]

    async def test_unknown_sort_field(self, client: AsyncClient, admin_token):
        res = await client.get(STUDENTS, params={"sort_by": "phone"}, headers=auth_header(admin_token))
        assert res.status_code == 422


# ===== Detail / Create =====

class TestCreateStudent:
    """학생 등록 테스트."""

    async def test_create_as_teacher(self, client: AsyncClient, teacher_token):
        res = await client.post(STUDENTS, json=student_payload(), headers=auth_header(teacher_token))
        assert res.status_code == 201
        data = res.json()
        assert data["student_id"] == "S2024100"
        assert data["status"] == "active"
        assert data["phone"] == "010-1234-5678"
        assert data["address"] is None

    async def test_create_as_staff_forbidden(self, client: AsyncClient, staff_token):
        """staff 는 등록 불가 (403)."""
        res = await client.post(STUDENTS, json=student_payload(), headers=auth_header(staff_token))
        assert res.status_code == 403

    async def test_duplicate_student_number(self, client: AsyncClient, admin_token, student):
        res = await client.post(
            STUDENTS, json=student_payload(number=student["student_id"]), headers=auth_header(admin_token)
        )
        assert res.status_code == 409

    async def test_invalid_gender(self, client: AsyncClient, admin_token):
        res = await client.post(STUDENTS, json=student_payload(gender="unknown"), headers=auth_header(admin_token))
        assert res.status_code == 422

    async def test_get_detail(self, client: AsyncClient, staff_token, student):
        res = await client.get(f"{STUDENTS}/{student['id']}", headers=auth_header(staff_token))
        assert res.status_code == 200
        assert res.json()["name"] == "Kim Minjun"

    async def test_get_missing(self, client: AsyncClient, staff_token):
        res = await client.get(f"{STUDENTS}/{uuid.uuid4()}", headers=auth_header(staff_token))
        assert res.status_code == 404


# ===== Update / Delete =====

class TestUpdateDeleteStudent:
    """학생 수정/삭제 테스트."""

    async def test_update_partial(self, client: AsyncClient, teacher_token, student):
        res = await client.put(
            f"{STUDENTS}/{student['id']}", json={"status": "graduated"}, headers=auth_header(teacher_token)
        )
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "graduated"
        assert data["name"] == "Kim Minjun"

    async def test_update_to_taken_number(self, client: AsyncClient, admin_token, student):
        other = (await client.post(STUDENTS, json=student_payload(), headers=auth_header(admin_token))).json()
        res = await client.put(
            f"{STUDENTS}/{other['id']}",
            json={"student_id": student["student_id"]},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 409

    async def test_update_null_number_rejected(self, client: AsyncClient, admin_token, student):
        """학번을 null 로 수정 → 422 (중복 409 아님), 기존 학번 유지."""
        await client.post(STUDENTS, json=student_payload(), headers=auth_header(admin_token))
        res = await client.put(
            f"{STUDENTS}/{student['id']}", json={"student_id": None}, headers=auth_header(admin_token)
        )
        assert res.status_code == 422

        res = await client.get(f"{STUDENTS}/{student['id']}", headers=auth_header(admin_token))
        assert res.json()["student_id"] == student["student_id"]

    async def test_update_keeps_own_number(self, client: AsyncClient, admin_token, student):
        """자신의 학번을 그대로 보내는 것은 허용."""
        res = await client.put(
            f"{STUDENTS}/{student['id']}",
            json={"student_id": student["student_id"], "name": "Kim Minjae"},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 200
        assert res.json()["name"] == "Kim Minjae"

    async def test_update_missing(self, client: AsyncClient, admin_token):
        res = await client.put(f"{STUDENTS}/{uuid.uuid4()}", json={"name": "x"}, headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_delete_as_teacher_forbidden(self, client: AsyncClient, teacher_token, student):
        res = await client.delete(f"{STUDENTS}/{student['id']}", headers=auth_header(teacher_token))
        assert res.status_code == 403

    async def test_delete_then_get(self, client: AsyncClient, admin_token, student):
        """삭제 후 조회 시 404, 재삭제 시 404."""
        res = await client.delete(f"{STUDENTS}/{student['id']}", headers=auth_header(admin_token))
        assert res.status_code == 204

        res = await client.get(f"{STUDENTS}/{student['id']}", headers=auth_header(admin_token))
        assert res.status_code == 404

        res = await client.delete(f"{STUDENTS}/{student['id']}", headers=auth_header(admin_token))
        assert res.status_code == 404
