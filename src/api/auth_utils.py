import os
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt
from passlib.context import CryptContext

SECRET_KEY = os.environ.get("CMS_SECRET_KEY", "dev-secret-unsafe")
ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        result: bool = pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Not a hash passlib recognises
        return False
    return result


def get_password_hash(password: str) -> str:
    result: str = pwd_context.hash(password)
    return result


def create_session_token(
    user_id: int,
    session_id: str,
    ttl: timedelta,
    now_utc: datetime | None = None,
) -> str:
    """
    Sign a token pointing at a server-side session.

    The session store stays authoritative: the token only carries the user
    id (`sub`) and the session id (`sid`), and expires with the session.
    """
    issued = now_utc if now_utc is not None else datetime.now(UTC)
    claims = {"sub": str(user_id), "sid": session_id, "iat": issued, "exp": issued + ttl}
    encoded: str = jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM)
    return encoded


def decode_session_token(token: str) -> dict[str, Any] | None:
    """Return the claims of a valid token, None if it is forged, expired or malformed."""
    try:
        claims = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if "sub" not in claims or "sid" not in claims:
        return None
    return cast(dict[str, Any], claims)
