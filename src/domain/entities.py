from datetime import UTC, date, datetime
from enum import IntEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
PageStatus = Literal["Draft", "Programmed", "Published"]


class Role(IntEnum):
    REGULAR = 0
    ADMIN = 1


ROLE_NAMES: dict[Role, str] = {Role.REGULAR: "regular", Role.ADMIN: "admin"}


def _utcnow() -> datetime:
    return datetime.now(UTC)


# --- User & Auth ---

class User(BaseModel):
    id: int
    email: str
    username: str
    name: str = ""
    surname: str = ""
    role: Role = Role.REGULAR
    password_hash: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def roles(self) -> list[str]:
        return [ROLE_NAMES[self.role]]


class UserStatistics(BaseModel):
    created: int = 0
    published: int = 0
    removed: int = 0
    draft: int = 0
    programmed: int = 0


class UserProfile(BaseModel):
    """A user enriched with statistics computed from their pages."""

    user: User
    statistics: UserStatistics = Field(default_factory=UserStatistics)


class Session(BaseModel):
    id: str
    user_id: int
    expires_at: datetime
    created_at: datetime = Field(default_factory=_utcnow)

# --- Images ---

class Image(BaseModel):
    id: int
    src: str
    alt: str = ""
    title: str = ""

# --- Content ---

class Paragraph(BaseModel):
    kind: Literal["paragraph"] = "paragraph"
    text: str


class Picture(BaseModel):
    kind: Literal["picture"] = "picture"
    image: Image


# A block body is either a paragraph or a picture, never both.
ContentBody = Annotated[Paragraph | Picture, Field(discriminator="kind")]


class ContentDraft(BaseModel):
    header: str
    sort_number: int
    body: ContentBody

    @property
    def paragraph(self) -> str | None:
        return self.body.text if isinstance(self.body, Paragraph) else None

    @property
    def image(self) -> Image | None:
        return self.body.image if isinstance(self.body, Picture) else None


class Content(ContentDraft):
    id: int


class NewContent(BaseModel):
    """A submitted block that has not been persisted yet."""

    model_config = ConfigDict(frozen=True)

    draft: ContentDraft


class ExistingContent(BaseModel):
    """A submitted block that overwrites the stored block with the same id."""

    model_config = ConfigDict(frozen=True)

    id: int
    draft: ContentDraft


ContentRef = NewContent | ExistingContent

# --- Pages ---

class PageRow(BaseModel):
    """A page exactly as stored, without author or contents."""

    id: int
    title: str
    release_date: date | None = None
    creation_date: date
    deleted: bool = False
    user_id: int


class Page(BaseModel):
    id: int
    title: str
    release_date: date | None = None
    creation_date: date
    deleted: bool = False
    status: PageStatus
    author: UserProfile
    contents: list[Content] = Field(default_factory=list)

# --- Config ---

class SiteSettings(BaseModel):
    website_name: str
    updated_at: datetime = Field(default_factory=_utcnow)
