"""
Auth component - Authentication and session management.

Handles login, session creation/verification, logout and account creation.
"""

from .component import (
    run_create_session,
    run_create_user,
    run_login,
    run_logout,
    run_verify_session,
)
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

__all__ = [
    # Entry points
    "run_create_session",
    "run_create_user",
    "run_login",
    "run_logout",
    "run_verify_session",
    # Models
    "AuthOutput",
    "CreateSessionInput",
    "CreateUserInput",
    "LoginInput",
    "LogoutInput",
    "UserOutput",
    "VerifySessionInput",
    # Ports
    "AuthAdapterPort",
    "SessionStorePort",
    "TimePort",
    "UserRepoPort",
]
