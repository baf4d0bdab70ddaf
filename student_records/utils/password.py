"""비밀번호 해싱 유틸리티 — bcrypt.

Password hashing helpers. Account passwords are stored only as bcrypt hashes.
"""

import bcrypt

# bcrypt는 72바이트 이후를 무시하므로 입력 길이를 제한 — bcrypt ignores bytes past 72
MAX_PASSWORD_BYTES: int = 72


def hash_password(password: str) -> str:
    """평문 비밀번호를 솔트가 포함된 bcrypt 해시로 변환합니다."""
    return bcrypt.hashpw(password.encode("utf-8")[:MAX_PASSWORD_BYTES], bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호가 저장된 해시와 일치하는지 확인합니다 (constant-time)."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8")[:MAX_PASSWORD_BYTES], hashed_password.encode("utf-8")
    )
