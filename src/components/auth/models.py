from dataclasses import dataclass

from src.domain.entities import Role, Session, User


@dataclass
class LoginInput:
    email: str
    password: str


@dataclass
class CreateSessionInput:
    user: User
    ttl_minutes: int = 24 * 60


@dataclass
class VerifySessionInput:
    token: str


@dataclass
class LogoutInput:
    session_id: str


@dataclass
class CreateUserInput:
    email: str
    password: str
    username: str
    name: str = ""
    surname: str = ""
    role: Role = Role.REGULAR


@dataclass
class AuthOutput:
    user: User | None = None
    session: Session | None = None
    token_raw: str | None = None
    success: bool = False
    error: str | None = None


@dataclass
class UserOutput:
    user: User | None = None
    success: bool = False
    error: str | None = None
