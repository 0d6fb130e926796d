import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from src.adapters.auth.crypto import JWTAuthAdapter
from src.adapters.auth.session_store import InMemorySessionStore
from src.adapters.clock import SystemClock
from src.adapters.sqlite.repos import (
    SQLiteImageRepo,
    SQLitePageRepo,
    SQLiteSiteSettingsRepo,
    SQLiteUserRepo,
)
from src.components.auth import AuthOutput, VerifySessionInput, run_verify_session
from src.components.settings import DEFAULT_WEBSITE_NAME
from src.domain.entities import User
from src.domain.policy import PolicyEngine
from src.rules.loader import load_rules
from src.rules.models import Rules

NOT_AUTHENTICATED = "Must be authenticated to make this request!"


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(__file__).resolve().parents[2]
        self.data_dir = Path(os.environ.get("CMS_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "cms.db")
        self.rules_path = Path(os.environ.get("CMS_RULES_PATH", self.base_dir / "rules.yaml"))
        self.website_name = os.environ.get("CMS_WEBSITE_NAME", DEFAULT_WEBSITE_NAME)


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


# --- Repos ---
def get_user_repo(settings: Settings = Depends(get_settings)) -> SQLiteUserRepo:
    return SQLiteUserRepo(settings.db_path)


def get_image_repo(settings: Settings = Depends(get_settings)) -> SQLiteImageRepo:
    return SQLiteImageRepo(settings.db_path)


def get_page_repo(settings: Settings = Depends(get_settings)) -> SQLitePageRepo:
    return SQLitePageRepo(settings.db_path)


def get_site_settings_repo(settings: Settings = Depends(get_settings)) -> SQLiteSiteSettingsRepo:
    return SQLiteSiteSettingsRepo(settings.db_path)


# --- Services ---
def get_policy(rules: Rules = Depends(get_rules)) -> PolicyEngine:
    return PolicyEngine(rules)


# Adapters needed for component injection
def get_auth_adapter() -> JWTAuthAdapter:
    return JWTAuthAdapter()


# Session store singleton for auth component
_session_store_instance: InMemorySessionStore | None = None


def get_session_store() -> InMemorySessionStore:
    """Get session store singleton."""
    global _session_store_instance
    if _session_store_instance is None:
        _session_store_instance = InMemorySessionStore()
    return _session_store_instance


# Time adapter for deterministic time operations
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


# --- Auth ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/session", auto_error=False)


def _extract_token(request: Request, header_token: str | None) -> str | None:
    # Cookie first (HttpOnly), then the Authorization header
    cookie_token = request.cookies.get("access_token")
    if cookie_token and cookie_token.startswith("Bearer "):
        return cookie_token.split(" ", 1)[1]
    return header_token


def get_optional_auth(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    auth_adapter: JWTAuthAdapter = Depends(get_auth_adapter),
    session_store: InMemorySessionStore = Depends(get_session_store),
    clock: SystemClock = Depends(get_clock),
) -> AuthOutput | None:
    """Resolve the caller's session, or None for anonymous callers."""
    raw = _extract_token(request, token)
    if not raw:
        return None

    result = run_verify_session(
        VerifySessionInput(token=raw),
        user_repo=user_repo,
        auth_adapter=auth_adapter,
        session_store=session_store,
        time=clock,
    )
    return result if result.success else None


def get_current_auth(auth: AuthOutput | None = Depends(get_optional_auth)) -> AuthOutput:
    if auth is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NOT_AUTHENTICATED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth


def get_optional_user(auth: AuthOutput | None = Depends(get_optional_auth)) -> User | None:
    return auth.user if auth else None


def get_current_user(auth: AuthOutput = Depends(get_current_auth)) -> User:
    assert auth.user is not None
    return auth.user
