import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any

from src.domain.entities import (
    Content,
    ContentDraft,
    Image,
    PageRow,
    Paragraph,
    Picture,
    Role,
    SiteSettings,
    User,
)
from src.domain.errors import StoreError

logger = logging.getLogger(__name__)


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def parse_date(s: str | None) -> date | None:
    return date.fromisoformat(s) if s else None


class _SQLiteRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection; sqlite errors surface as StoreError."""
        conn: sqlite3.Connection | None = None
        try:
            conn = self._get_conn()
            yield conn
        except sqlite3.Error as e:
            if conn is not None:
                conn.rollback()
            logger.error("Database error on %s: %s", self.db_path, e)
            raise StoreError(f"Database error: '{e}'") from e
        finally:
            if conn is not None:
                conn.close()


class SQLiteUserRepo(_SQLiteRepo):
    def create(self, user: User) -> User:
        with self._connection() as conn:
            cursor = conn.execute(
                """
                INSERT INTO users (email, hash, username, name, surname, role)
                VALUES (?, ?, ?, ?, ?, ?)
            """,
                (
                    user.email,
                    user.password_hash,
                    user.username,
                    user.name,
                    user.surname,
                    int(user.role),
                ),
            )
            conn.commit()
            return user.model_copy(update={"id": cursor.lastrowid})

    def get_by_email(self, email: str) -> User | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
            return self._map_row(row) if row else None

    def get_by_id(self, user_id: int) -> User | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return self._map_row(row) if row else None

    def list_all(self) -> list[User]:
        with self._connection() as conn:
            rows = conn.execute("SELECT * FROM users ORDER BY id").fetchall()
            return [self._map_row(row) for row in rows]

    def _map_row(self, row: dict[str, Any]) -> User:
        return User(
            id=row["id"],
            email=row["email"],
            username=row["username"],
            name=row["name"],
            surname=row["surname"],
            role=Role(row["role"]),
            password_hash=row["hash"],
        )


class SQLiteImageRepo(_SQLiteRepo):
    def create(self, src: str, alt: str = "", title: str = "") -> Image:
        with self._connection() as conn:
            cursor = conn.execute(
                "INSERT INTO images (src, alt, title) VALUES (?, ?, ?)", (src, alt, title)
            )
            conn.commit()
            return Image(id=cursor.lastrowid, src=src, alt=alt, title=title)

    def get_by_id(self, image_id: int) -> Image | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM images WHERE id = ?", (image_id,)).fetchone()
            return self._map_row(row) if row else None

    def list_all(self) -> list[Image]:
        with self._connection() as conn:
            rows = conn.execute("SELECT * FROM images ORDER BY id").fetchall()
            return [self._map_row(row) for row in rows]

    def _map_row(self, row: dict[str, Any]) -> Image:
        return Image(id=row["id"], src=row["src"], alt=row["alt"], title=row["title"])


class SQLitePageRepo(_SQLiteRepo):
    """
    Page and content persistence.

    Everything here works on raw rows: no author enrichment and no status.
    Materializing full pages is the pages component's job.
    """

    # Pages without a release date sort first; id keeps the order stable.
    _ORDER_BY = "ORDER BY release_date IS NOT NULL, release_date ASC, id ASC"

    def list_rows(self, released_on_or_before: date | None = None) -> list[PageRow]:
        """Non-deleted pages, optionally only those released by the given day."""
        query = "SELECT * FROM pages WHERE deleted = 0"
        params: list[Any] = []
        if released_on_or_before is not None:
            query += " AND release_date IS NOT NULL AND release_date <= ?"
            params.append(released_on_or_before.isoformat())
        query += f" {self._ORDER_BY}"

        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
            return [self._map_page_row(row) for row in rows]

    def list_rows_by_user(self, user_id: int) -> list[PageRow]:
        """Every page the user ever authored, soft-deleted ones included."""
        with self._connection() as conn:
            rows = conn.execute(
                f"SELECT * FROM pages WHERE user_id = ? {self._ORDER_BY}", (user_id,)
            ).fetchall()
            return [self._map_page_row(row) for row in rows]

    def get_row(self, page_id: int) -> PageRow | None:
        """A non-deleted page by id."""
        with self._connection() as conn:
            row = conn.execute(
                "SELECT * FROM pages WHERE id = ? AND deleted = 0", (page_id,)
            ).fetchone()
            return self._map_page_row(row) if row else None

    def list_contents(self, page_id: int) -> list[Content]:
        with self._connection() as conn:
            rows = conn.execute(
                """
                SELECT c.*, i.src AS image_src, i.alt AS image_alt, i.title AS image_title
                FROM contents c
                LEFT JOIN images i ON i.id = c.image_id
                WHERE c.page_id = ?
                ORDER BY c.sort_number ASC, c.id ASC
            """,
                (page_id,),
            ).fetchall()
            return [self._map_content_row(row) for row in rows]

    def create(
        self,
        *,
        title: str,
        release_date: date | None,
        creation_date: date,
        user_id: int,
        contents: list[ContentDraft],
    ) -> int:
        """Insert a page and its contents in one transaction. Returns the page id."""
        with self._connection() as conn:
            cursor = conn.execute(
                """
                INSERT INTO pages (title, release_date, creation_date, deleted, user_id)
                VALUES (?, ?, ?, 0, ?)
            """,
                (
                    title,
                    release_date.isoformat() if release_date else None,
                    creation_date.isoformat(),
                    user_id,
                ),
            )
            page_id = cursor.lastrowid
            assert page_id is not None
            self._insert_contents(conn, page_id, contents)
            conn.commit()
            return page_id

    def update(
        self,
        page_id: int,
        *,
        title: str,
        release_date: date | None,
        user_id: int,
        to_insert: list[ContentDraft],
        to_update: list[Content],
        to_remove: list[int],
    ) -> None:
        """Rewrite a page row and apply a content plan in one transaction."""
        with self._connection() as conn:
            conn.execute(
                "UPDATE pages SET title = ?, release_date = ?, user_id = ? WHERE id = ?",
                (
                    title,
                    release_date.isoformat() if release_date else None,
                    user_id,
                    page_id,
                ),
            )
            self._insert_contents(conn, page_id, to_insert)
            for content in to_update:
                conn.execute(
                    """
                    UPDATE contents
                    SET header = ?, paragraph = ?, sort_number = ?, image_id = ?
                    WHERE id = ? AND page_id = ?
                """,
                    (*self._content_values(content), content.id, page_id),
                )
            conn.executemany(
                "DELETE FROM contents WHERE page_id = ? AND id = ?",
                [(page_id, content_id) for content_id in to_remove],
            )
            conn.commit()

    def soft_delete(self, page_id: int) -> None:
        with self._connection() as conn:
            conn.execute("UPDATE pages SET deleted = 1 WHERE id = ?", (page_id,))
            conn.commit()

    def _insert_contents(
        self,
        conn: sqlite3.Connection,
        page_id: int,
        contents: list[ContentDraft],
    ) -> None:
        conn.executemany(
            """
            INSERT INTO contents (header, paragraph, sort_number, image_id, page_id)
            VALUES (?, ?, ?, ?, ?)
        """,
            [(*self._content_values(content), page_id) for content in contents],
        )

    @staticmethod
    def _content_values(content: ContentDraft) -> tuple[str, str | None, int, int | None]:
        image = content.image
        return (
            content.header,
            content.paragraph,
            content.sort_number,
            image.id if image else None,
        )

    def _map_page_row(self, row: dict[str, Any]) -> PageRow:
        return PageRow(
            id=row["id"],
            title=row["title"],
            release_date=parse_date(row["release_date"]),
            creation_date=date.fromisoformat(row["creation_date"]),
            deleted=bool(row["deleted"]),
            user_id=row["user_id"],
        )

    def _map_content_row(self, row: dict[str, Any]) -> Content:
        body: Paragraph | Picture
        if row["paragraph"] is not None:
            body = Paragraph(text=row["paragraph"])
        else:
            body = Picture(
                image=Image(
                    id=row["image_id"],
                    src=row["image_src"],
                    alt=row["image_alt"],
                    title=row["image_title"],
                )
            )
        return Content(
            id=row["id"],
            header=row["header"],
            sort_number=row["sort_number"],
            body=body,
        )


class SQLiteSiteSettingsRepo(_SQLiteRepo):
    """SQLite adapter for SiteSettings (single-row table)."""

    def get(self) -> SiteSettings | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM site_settings WHERE id = 1").fetchone()
            if not row:
                return None
            return SiteSettings(
                website_name=row["website_name"],
                updated_at=datetime.fromisoformat(row["updated_at"]),
            )

    def save(self, settings: SiteSettings) -> SiteSettings:
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO site_settings (id, website_name, updated_at)
                VALUES (1, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    website_name=excluded.website_name,
                    updated_at=excluded.updated_at
            """,
                (settings.website_name, settings.updated_at.isoformat()),
            )
            conn.commit()
            return settings
