"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates every endpoint into a single router
for inclusion in the FastAPI application.

Included routers:
    - auth: 인증 (Sign-in, sign-up, tokens, profile)
    - students: 학생 (Students)
    - grades: 성적 및 과목별 통계 (Grades and per-subject statistics)
    - archives: 학생 기록 (Student file entries)
    - login_records: 로그인 기록 — 관리자 전용 (Sign-in history, admin only)
"""

from fastapi import APIRouter

from student_records.api.archives import router as archives_router
from student_records.api.auth import router as auth_router
from student_records.api.grades import router as grades_router
from student_records.api.login_records import router as login_records_router
from student_records.api.students import router as students_router

api_router: APIRouter = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Auth"])
api_router.include_router(students_router, prefix="/students", tags=["Students"])
api_router.include_router(grades_router, prefix="/grades", tags=["Grades"])
api_router.include_router(archives_router, prefix="/archives", tags=["Archives"])
api_router.include_router(login_records_router, prefix="/login-records", tags=["Login Records"])
