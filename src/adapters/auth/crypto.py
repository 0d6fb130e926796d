from datetime import timedelta
from typing import Any

from src.api.auth_utils import (
    create_session_token,
    decode_session_token,
    get_password_hash,
    verify_password,
)


class JWTAuthAdapter:
    """Argon2 password hashes (passlib) and signed session tokens (python-jose)."""

    def hash_password(self, password: str) -> str:
        return get_password_hash(password)

    def verify_password(self, plain: str, hashed: str) -> bool:
        return verify_password(plain, hashed)

    def create_token(self, user_id: int, session_id: str, ttl_minutes: int) -> str:
        return create_session_token(user_id, session_id, timedelta(minutes=ttl_minutes))

    def decode_token(self, token: str) -> dict[str, Any] | None:
        return decode_session_token(token)
