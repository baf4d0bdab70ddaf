"""사용자 및 리프레시 토큰 레포지토리.

User and Refresh Token repositories — account lookup by email and
refresh token persistence/revocation.
"""

from datetime import datetime
from uuid import UUID

from student_records.repositories.base import EntityConfig, PaginatedRepository, SortSpec
from student_records.store.base import RecordStore, Row


class UserRepository(PaginatedRepository):
    """users 엔티티 레포지토리."""

    def __init__(self) -> None:
        super().__init__(
            EntityConfig(
                entity="users",
                default_sort=SortSpec("created_at", ascending=False),
                sortable_fields=("created_at", "email", "name", "role"),
            )
        )

    async def get_by_email(self, store: RecordStore, email: str) -> Row | None:
        """이메일로 사용자를 조회합니다 (대소문자 무시 — case-insensitive)."""
        return await self.find_one(store, {"email": email.strip().lower()})


class RefreshTokenRepository(PaginatedRepository):
    """refresh_tokens 엔티티 레포지토리."""

    def __init__(self) -> None:
        super().__init__(
            EntityConfig(
                entity="refresh_tokens",
                default_sort=SortSpec("created_at", ascending=False),
                touch_updated_at=False,
            )
        )

    async def save(self, store: RecordStore, user_id: UUID, token: str, expires_at: datetime) -> Row:
        return await self.create(store, {"user_id": user_id, "token": token, "expires_at": expires_at})

    async def get_by_token(self, store: RecordStore, token: str) -> Row | None:
        return await self.find_one(store, {"token": token})

    async def revoke_for_user(self, store: RecordStore, user_id: UUID) -> int:
        """사용자의 모든 리프레시 토큰을 삭제하고 삭제 개수를 반환합니다."""
        tokens: list[Row] = await self.list_all(store, {"user_id": user_id}, columns=("id",))
        for token in tokens:
            await self.delete(store, token["id"])
        return len(tokens)


user_repository: UserRepository = UserRepository()
refresh_token_repository: RefreshTokenRepository = RefreshTokenRepository()
