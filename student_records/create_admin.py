"""관리자 계정 생성 스크립트.

Admin provisioning script — creates tables if missing, then creates the
admin account from ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME. When the
email already exists, the account's password is reset and it is
re-activated with the admin role.

Usage:
    python -m student_records.create_admin
"""

import asyncio

from student_records.config import settings
from student_records.database import Database
from student_records.repositories.user_repository import user_repository
from student_records.services.auth_service import normalize_email
from student_records.store.base import RecordStore, Row
from student_records.store.sqlalchemy_store import SqlAlchemyStore
from student_records.utils.password import hash_password


async def provision_admin(store: RecordStore, email: str, password: str, name: str) -> tuple[Row, bool]:
    """관리자 계정을 생성하거나 갱신합니다.

    Create the admin account, or reset an existing account with the same
    email to an active admin with the given password.

    Returns:
        tuple[Row, bool]: (사용자 레코드, 새로 생성 여부) (User row, whether it was created)
    """
    email = normalize_email(email)
    existing: Row | None = await user_repository.get_by_email(store, email)
    if existing is not None:
        user: Row = await user_repository.update(
            store,
            existing["id"],
            {"password_hash": hash_password(password), "role": "admin", "is_active": True},
        )
        return user, False

    user = await user_repository.create(
        store,
        {"email": email, "name": name, "role": "admin", "password_hash": hash_password(password)},
    )
    return user, True


async def main() -> None:
    database: Database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
    try:
        await database.create_all()
        async with database.session_factory() as session:
            print(f"Creating user {settings.ADMIN_EMAIL}...")
            _, created = await provision_admin(
                SqlAlchemyStore(session),
                settings.ADMIN_EMAIL,
                settings.ADMIN_PASSWORD,
                settings.ADMIN_NAME,
            )
            await session.commit()
            print("User created successfully!" if created else "User already exists. Password updated.")
            print(f"Email: {settings.ADMIN_EMAIL}")
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
