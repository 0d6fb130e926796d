import re
from typing import Any

from fastapi import APIRouter, Depends, Response

from src.api.deps import (
    get_auth_adapter,
    get_clock,
    get_current_auth,
    get_page_repo,
    get_rules,
    get_session_store,
    get_user_repo,
)
from src.api.schemas import LoginRequest, UserResponse
from src.components.auth import (
    AuthOutput,
    CreateSessionInput,
    LoginInput,
    LogoutInput,
    run_create_session,
    run_login,
    run_logout,
)
from src.components.users import GetUserInput, run_get_user
from src.domain.entities import User
from src.domain.errors import AuthenticationError, CmsError, ValidationError
from src.rules.models import Rules

router = APIRouter()

COOKIE_NAME = "access_token"
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _validate_login(req: LoginRequest) -> list[str]:
    errors = []
    if not req.username or not _EMAIL_RE.match(req.username.strip()):
        errors.append("Must be entered a valid email!")
    if not req.password:
        errors.append("Password can not be empty!")
    return errors


def _profile_response(user: User, user_repo: Any, pages: Any, clock: Any) -> UserResponse:
    inp = GetUserInput(user_id=user.id)
    result = run_get_user(inp, user_repo=user_repo, pages=pages, time=clock)
    if not result.success or result.profile is None:
        raise CmsError(result.error or "User Not Found")
    return UserResponse.from_profile(result.profile)


@router.post("", response_model=UserResponse)
def login(
    req: LoginRequest,
    response: Response,
    user_repo: Any = Depends(get_user_repo),
    pages: Any = Depends(get_page_repo),
    auth_adapter: Any = Depends(get_auth_adapter),
    session_store: Any = Depends(get_session_store),
    clock: Any = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> UserResponse:
    """Authenticate by email and password and open a session."""
    errors = _validate_login(req)
    if errors:
        raise ValidationError(errors)
    assert req.username is not None and req.password is not None

    result = run_login(
        LoginInput(email=req.username.strip(), password=req.password),
        user_repo=user_repo,
        auth_adapter=auth_adapter,
    )
    if not result.success or result.user is None:
        raise AuthenticationError(result.error or "Incorrect email and/or password!")

    ttl = rules.sessions.ttl_minutes
    session = run_create_session(
        CreateSessionInput(user=result.user, ttl_minutes=ttl),
        auth_adapter=auth_adapter,
        session_store=session_store,
        time=clock,
    )

    cookie = rules.sessions.cookie
    response.set_cookie(
        key=COOKIE_NAME,
        value=f"Bearer {session.token_raw}",
        httponly=cookie.http_only,
        max_age=ttl * 60,
        expires=ttl * 60,
        samesite=cookie.same_site,  # type: ignore[arg-type]
        secure=cookie.secure,
    )

    return _profile_response(result.user, user_repo, pages, clock)


@router.delete("")
def logout(
    auth: AuthOutput = Depends(get_current_auth),
    session_store: Any = Depends(get_session_store),
) -> Response:
    """Close the caller's session and clear the cookie."""
    assert auth.session is not None
    run_logout(LogoutInput(session_id=auth.session.id), session_store=session_store)

    response = Response(status_code=200)
    response.delete_cookie(key=COOKIE_NAME)
    return response


@router.get("/current", response_model=UserResponse)
def current_session(
    auth: AuthOutput = Depends(get_current_auth),
    user_repo: Any = Depends(get_user_repo),
    pages: Any = Depends(get_page_repo),
    clock: Any = Depends(get_clock),
) -> UserResponse:
    """Get the user behind the current session."""
    assert auth.user is not None
    return _profile_response(auth.user, user_repo, pages, clock)
