from datetime import UTC, date, datetime

import pytest

from src.adapters.sqlite.repos import (
    SQLiteImageRepo,
    SQLitePageRepo,
    SQLiteSiteSettingsRepo,
)
from src.domain.entities import (
    Content,
    ContentDraft,
    Paragraph,
    Picture,
    Role,
    SiteSettings,
    User,
)
from src.domain.errors import StoreError


@pytest.fixture
def page_repo(db_path):
    return SQLitePageRepo(db_path)


@pytest.fixture
def image(db_path):
    return SQLiteImageRepo(db_path).create("/img/cat.png", alt="A cat", title="Cat")


def _paragraph(header, sort_number, text="text"):
    return ContentDraft(header=header, sort_number=sort_number, body=Paragraph(text=text))


def _create(repo, user_id, title="T", release_date=None, contents=None):
    return repo.create(
        title=title,
        release_date=release_date,
        creation_date=date(2024, 6, 15),
        user_id=user_id,
        contents=contents if contents is not None else [_paragraph("H", 1)],
    )


class TestUserRepo:
    def test_create_and_fetch(self, user_repo):
        created = user_repo.create(
            User(
                id=0,
                email="carol@example.com",
                username="carol",
                name="Carol",
                surname="C",
                role=Role.ADMIN,
                password_hash="hash",
            )
        )

        assert created.id > 0
        by_email = user_repo.get_by_email("carol@example.com")
        assert by_email == created
        assert user_repo.get_by_id(created.id).is_admin
        assert user_repo.get_by_email("nobody@example.com") is None

    def test_duplicate_email_is_store_error(self, user_repo, alice):
        with pytest.raises(StoreError) as exc_info:
            user_repo.create(alice)
        assert "UNIQUE" in exc_info.value.messages[0]

    def test_list_all(self, user_repo, alice, bob):
        assert [u.username for u in user_repo.list_all()] == ["alice", "bob"]


class TestImageRepo:
    def test_create_and_list(self, db_path, image):
        repo = SQLiteImageRepo(db_path)
        assert repo.get_by_id(image.id) == image
        assert repo.list_all() == [image]
        assert repo.get_by_id(999) is None


class TestPageRepo:
    def test_create_round_trip(self, page_repo, alice, image):
        contents = [
            _paragraph("Second", 2),
            ContentDraft(header="First", sort_number=1, body=Picture(image=image)),
        ]
        page_id = _create(
            page_repo, alice.id, title="Hello", release_date=date(2024, 7, 1), contents=contents
        )

        row = page_repo.get_row(page_id)
        assert row.title == "Hello"
        assert row.release_date == date(2024, 7, 1)
        assert row.creation_date == date(2024, 6, 15)
        assert row.deleted is False
        assert row.user_id == alice.id

        stored = page_repo.list_contents(page_id)
        assert [c.header for c in stored] == ["First", "Second"]
        assert stored[0].image == image
        assert stored[0].paragraph is None
        assert stored[1].paragraph == "text"

    def test_listing_order(self, page_repo, alice):
        late = _create(page_repo, alice.id, release_date=date(2024, 9, 1))
        draft_b = _create(page_repo, alice.id)
        early = _create(page_repo, alice.id, release_date=date(2024, 1, 1))
        draft_a = _create(page_repo, alice.id)

        ids = [row.id for row in page_repo.list_rows()]

        assert ids == [draft_b, draft_a, early, late]

    def test_released_filter(self, page_repo, alice):
        _create(page_repo, alice.id, title="yesterday", release_date=date(2024, 6, 14))
        _create(page_repo, alice.id, title="today", release_date=date(2024, 6, 15))
        _create(page_repo, alice.id, title="tomorrow", release_date=date(2024, 6, 16))
        _create(page_repo, alice.id, title="draft")

        rows = page_repo.list_rows(released_on_or_before=date(2024, 6, 15))

        assert [r.title for r in rows] == ["yesterday", "today"]

    def test_soft_delete(self, page_repo, alice):
        page_id = _create(page_repo, alice.id)

        page_repo.soft_delete(page_id)

        assert page_repo.get_row(page_id) is None
        assert page_repo.list_rows() == []
        # raw user rows keep deleted pages for statistics
        [row] = page_repo.list_rows_by_user(alice.id)
        assert row.deleted is True
        # contents are not cascaded
        assert len(page_repo.list_contents(page_id)) == 1

    def test_update_applies_plan(self, page_repo, alice, bob, image):
        page_id = _create(
            page_repo,
            alice.id,
            contents=[_paragraph("A", 1), _paragraph("B", 2), _paragraph("C", 3)],
        )
        a, b, c = page_repo.list_contents(page_id)

        page_repo.update(
            page_id,
            title="Edited",
            release_date=date(2024, 8, 1),
            user_id=bob.id,
            to_insert=[_paragraph("D", 3)],
            to_update=[Content(id=a.id, header="A2", sort_number=1, body=Picture(image=image))],
            to_remove=[b.id, c.id],
        )

        row = page_repo.get_row(page_id)
        assert row.title == "Edited"
        assert row.release_date == date(2024, 8, 1)
        assert row.user_id == bob.id

        stored = page_repo.list_contents(page_id)
        assert [s.header for s in stored] == ["A2", "D"]
        assert stored[0].id == a.id
        assert stored[0].image == image
        assert stored[0].paragraph is None

    def test_update_never_touches_other_pages(self, page_repo, alice):
        first = _create(page_repo, alice.id)
        second = _create(page_repo, alice.id)
        [other] = page_repo.list_contents(first)

        page_repo.update(
            second,
            title="T",
            release_date=None,
            user_id=alice.id,
            to_insert=[],
            to_update=[
                Content(id=other.id, header="hijack", sort_number=1, body=Paragraph(text="x"))
            ],
            to_remove=[other.id],
        )

        assert page_repo.list_contents(first) == [other]

    def test_failed_update_rolls_back(self, page_repo, alice):
        page_id = _create(page_repo, alice.id, title="Before")

        with pytest.raises(StoreError):
            page_repo.update(
                page_id,
                title="After",
                release_date=None,
                user_id=9999,  # violates the users foreign key
                to_insert=[_paragraph("New", 2)],
                to_update=[],
                to_remove=[],
            )

        assert page_repo.get_row(page_id).title == "Before"
        assert len(page_repo.list_contents(page_id)) == 1


class TestSiteSettingsRepo:
    def test_empty(self, db_path):
        assert SQLiteSiteSettingsRepo(db_path).get() is None

    def test_upsert(self, db_path):
        repo = SQLiteSiteSettingsRepo(db_path)
        when = datetime(2024, 6, 15, 8, 0, tzinfo=UTC)

        repo.save(SiteSettings(website_name="First", updated_at=when))
        repo.save(SiteSettings(website_name="Second", updated_at=when))

        stored = repo.get()
        assert stored.website_name == "Second"
        assert stored.updated_at == when
