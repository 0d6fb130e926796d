import logging
from datetime import timedelta
from uuid import uuid4

from src.domain.entities import Session, User

from .models import (
    AuthOutput,
    CreateSessionInput,
    CreateUserInput,
    LoginInput,
    LogoutInput,
    UserOutput,
    VerifySessionInput,
)
from .ports import AuthAdapterPort, SessionStorePort, TimePort, UserRepoPort

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Incorrect email and/or password!"


def run_login(
    inp: LoginInput, user_repo: UserRepoPort, auth_adapter: AuthAdapterPort
) -> AuthOutput:
    user = user_repo.get_by_email(inp.email)
    if not user:
        logger.info("Login failed: unknown email %s", inp.email)
        return AuthOutput(success=False, error=INVALID_CREDENTIALS)

    if not auth_adapter.verify_password(inp.password, user.password_hash):
        logger.info("Login failed: bad password for user %s", user.id)
        return AuthOutput(success=False, error=INVALID_CREDENTIALS)

    return AuthOutput(user=user, success=True)


def run_create_session(
    inp: CreateSessionInput,
    auth_adapter: AuthAdapterPort,
    session_store: SessionStorePort,
    time: TimePort,
) -> AuthOutput:
    now = time.now_utc()
    session = Session(
        id=uuid4().hex,
        user_id=inp.user.id,
        expires_at=now + timedelta(minutes=inp.ttl_minutes),
        created_at=now,
    )
    session_store.save(session)
    token = auth_adapter.create_token(inp.user.id, session.id, inp.ttl_minutes)
    return AuthOutput(user=inp.user, session=session, token_raw=token, success=True)


def run_verify_session(
    inp: VerifySessionInput,
    user_repo: UserRepoPort,
    auth_adapter: AuthAdapterPort,
    session_store: SessionStorePort,
    time: TimePort,
) -> AuthOutput:
    claims = auth_adapter.decode_token(inp.token)
    if not claims:
        return AuthOutput(success=False, error="Invalid token")

    session = session_store.get(str(claims.get("sid")))
    if not session or str(session.user_id) != str(claims.get("sub")):
        return AuthOutput(success=False, error="Session not found")

    if session.expires_at < time.now_utc():
        session_store.delete(session.id)
        return AuthOutput(success=False, error="Session expired")

    user = user_repo.get_by_id(session.user_id)
    if not user:
        return AuthOutput(success=False, error="User not found")

    return AuthOutput(user=user, session=session, success=True)


def run_logout(inp: LogoutInput, session_store: SessionStorePort) -> AuthOutput:
    session_store.delete(inp.session_id)
    return AuthOutput(success=True)


def run_create_user(
    inp: CreateUserInput,
    user_repo: UserRepoPort,
    auth_adapter: AuthAdapterPort,
) -> UserOutput:
    if user_repo.get_by_email(inp.email):
        return UserOutput(success=False, error="Email already in use")

    new_user = User(
        id=0,  # assigned by the store
        email=inp.email,
        username=inp.username,
        name=inp.name,
        surname=inp.surname,
        role=inp.role,
        password_hash=auth_adapter.hash_password(inp.password),
    )
    created = user_repo.create(new_user)
    logger.info("Created user %s (%s)", created.id, created.email)
    return UserOutput(user=created, success=True)
