from datetime import date

from pydantic import BaseModel

from src.domain.entities import Content, Image, Page, UserProfile


# --- Requests ---
class ImageRef(BaseModel):
    id: int


class UserRef(BaseModel):
    id: int


class ContentBlockRequest(BaseModel):
    id: int | None = None
    header: str | None = None
    sort_number: int | None = None
    paragraph: str | None = None
    image: ImageRef | None = None


class PageRequest(BaseModel):
    """Full desired state of a page; `user` is only honoured for administrators."""

    title: str | None = None
    release_date: str | None = None
    contents: list[ContentBlockRequest] | None = None
    user: UserRef | None = None


class LoginRequest(BaseModel):
    username: str | None = None  # email
    password: str | None = None


class WebsiteNameRequest(BaseModel):
    website_name: str | None = None


# --- Responses ---
class ImageResponse(BaseModel):
    id: int
    src: str
    alt: str
    title: str

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    id: int
    email: str
    username: str
    name: str
    surname: str
    role: int
    number_pages_published: int
    number_pages_created: int
    number_pages_removed: int
    number_pages_programmed: int
    number_pages_draft: int

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserResponse":
        user, stats = profile.user, profile.statistics
        return cls(
            id=user.id,
            email=user.email,
            username=user.username,
            name=user.name,
            surname=user.surname,
            role=int(user.role),
            number_pages_published=stats.published,
            number_pages_created=stats.created,
            number_pages_removed=stats.removed,
            number_pages_programmed=stats.programmed,
            number_pages_draft=stats.draft,
        )


class ContentResponse(BaseModel):
    id: int
    header: str
    paragraph: str | None = None
    sort_number: int
    image: ImageResponse | None = None

    @classmethod
    def from_content(cls, content: Content) -> "ContentResponse":
        image: Image | None = content.image
        return cls(
            id=content.id,
            header=content.header,
            paragraph=content.paragraph,
            sort_number=content.sort_number,
            image=ImageResponse.model_validate(image) if image else None,
        )


class PageResponse(BaseModel):
    id: int
    title: str
    release_date: date | None = None
    creation_date: date
    deleted: bool
    status: str
    user: UserResponse
    contents: list[ContentResponse] = []

    @classmethod
    def from_page(cls, page: Page) -> "PageResponse":
        return cls(
            id=page.id,
            title=page.title,
            release_date=page.release_date,
            creation_date=page.creation_date,
            deleted=page.deleted,
            status=page.status,
            user=UserResponse.from_profile(page.author),
            contents=[ContentResponse.from_content(c) for c in page.contents],
        )


class WebsiteNameResponse(BaseModel):
    website_name: str
