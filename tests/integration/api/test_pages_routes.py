from datetime import date, timedelta

import pytest

from src.adapters.sqlite.repos import SQLitePageRepo

TODAY = date(2024, 6, 15)


def _page(title="My page", release_date=None, contents=None, user=None):
    body = {
        "title": title,
        "release_date": release_date,
        "contents": contents
        if contents is not None
        else [{"header": "H1", "paragraph": "text", "sort_number": 1}],
    }
    if user is not None:
        body["user"] = {"id": user}
    return body


def _only_page(client):
    pages = client.get("/api/pages").json()
    assert len(pages) == 1
    return pages[0]


class TestCreatePage:
    def test_draft_page(self, client, login, accounts):
        login("alice")

        response = client.post("/api/pages", json=_page())

        assert response.status_code == 200
        assert response.content == b""
        page = _only_page(client)
        assert page["status"] == "Draft"
        assert page["release_date"] is None
        assert page["creation_date"] == TODAY.isoformat()
        assert page["deleted"] is False
        assert page["user"]["id"] == accounts["alice"].id
        assert page["user"]["number_pages_created"] == 1
        assert page["user"]["number_pages_draft"] == 1
        assert page["contents"][0]["paragraph"] == "text"
        assert page["contents"][0]["image"] is None

    def test_requires_authentication(self, client):
        response = client.post("/api/pages", json=_page())

        assert response.status_code == 401
        assert response.json() == {"errors": ["Must be authenticated to make this request!"]}

    def test_validation_errors(self, client, login):
        login("alice")

        response = client.post("/api/pages", json={"title": "  ", "contents": []})

        assert response.status_code == 400
        assert response.json() == {
            "errors": [
                "The title can not be empty!",
                "It is not allowed to add a page without a content block!",
            ]
        }

    def test_block_validation(self, client, login):
        login("alice")

        response = client.post("/api/pages", json=_page(contents=[{"sort_number": 1}]))

        assert response.status_code == 400
        assert response.json()["errors"] == [
            "Each content block must have a header!",
            "Each content block must have at least a paragraph or an image!",
        ]

    def test_schema_errors_are_400(self, client, login):
        login("alice")

        response = client.post(
            "/api/pages",
            json=_page(contents=[{"header": "H", "sort_number": 1, "image": {"id": "abc"}}]),
        )

        assert response.status_code == 400
        assert "errors" in response.json()

    def test_picture_block(self, client, login, image):
        login("alice")

        client.post(
            "/api/pages",
            json=_page(contents=[{"header": "H", "sort_number": 1, "image": {"id": image.id}}]),
        )

        content = _only_page(client)["contents"][0]
        assert content["paragraph"] is None
        assert content["image"] == {
            "id": image.id,
            "src": "/img/cat.png",
            "alt": "A cat",
            "title": "Cat",
        }


    def test_blank_paragraph_rejected(self, client, login):
        login("alice")

        response = client.post(
            "/api/pages",
            json=_page(contents=[{"header": "H", "paragraph": "   ", "sort_number": 1}]),
        )

        assert response.status_code == 400
        assert response.json() == {
            "errors": ["Each content block must have at least a paragraph or an image!"]
        }

    def test_blank_paragraph_keeps_image(self, client, login, image):
        login("alice")
        block = {"header": "H", "paragraph": "  ", "sort_number": 1, "image": {"id": image.id}}

        client.post("/api/pages", json=_page(contents=[block]))

        content = _only_page(client)["contents"][0]
        assert content["paragraph"] is None
        assert content["image"]["id"] == image.id
    def test_unknown_image(self, client, login):
        login("alice")

        response = client.post(
            "/api/pages",
            json=_page(contents=[{"header": "H", "sort_number": 1, "image": {"id": 404}}]),
        )

        assert response.status_code == 404
        assert response.json() == {"error": ["Image Not Found"]}

    def test_contents_come_back_sorted(self, client, login):
        login("alice")
        blocks = [
            {"header": "third", "paragraph": "c", "sort_number": 3},
            {"header": "first", "paragraph": "a", "sort_number": 1},
            {"header": "second", "paragraph": "b", "sort_number": 2},
        ]

        client.post("/api/pages", json=_page(contents=blocks))

        page = _only_page(client)
        assert [c["header"] for c in page["contents"]] == ["first", "second", "third"]
        assert [c["sort_number"] for c in page["contents"]] == [1, 2, 3]

    def test_admin_creates_for_another_user(self, client, login, accounts):
        login("admin")

        client.post("/api/pages", json=_page(user=accounts["bob"].id))

        assert _only_page(client)["user"]["id"] == accounts["bob"].id

    def test_admin_with_unknown_author(self, client, login):
        login("admin")

        response = client.post("/api/pages", json=_page(user=999))

        assert response.status_code == 404
        assert response.json() == {"error": ["User Not Found"]}

    def test_regular_user_cannot_pick_author(self, client, login, accounts):
        login("alice")

        client.post("/api/pages", json=_page(user=accounts["bob"].id))

        assert _only_page(client)["user"]["id"] == accounts["alice"].id


class TestEditPage:
    @pytest.fixture
    def page(self, client, login):
        login("alice")
        blocks = [
            {"header": "A", "paragraph": "a", "sort_number": 1},
            {"header": "B", "paragraph": "b", "sort_number": 2},
            {"header": "C", "paragraph": "c", "sort_number": 3},
        ]
        client.post("/api/pages", json=_page(contents=blocks))
        return _only_page(client)

    def test_reconciles_blocks(self, client, page):
        first = page["contents"][0]
        body = _page(
            title="Edited",
            release_date="2024-06-15",
            contents=[
                {"id": first["id"], "header": "A2", "paragraph": "a2", "sort_number": 1},
                {"id": -1, "header": "New", "paragraph": "n", "sort_number": 2},
            ],
        )

        response = client.put(f"/api/pages/{page['id']}", json=body)

        assert response.status_code == 200
        edited = response.json()
        assert edited["title"] == "Edited"
        assert edited["status"] == "Published"
        assert [c["header"] for c in edited["contents"]] == ["A2", "New"]
        assert edited["contents"][0]["id"] == first["id"]
        assert edited["contents"][1]["id"] not in {c["id"] for c in page["contents"]}

    def test_resubmitting_unchanged_page(self, client, page):
        body = _page(
            title=page["title"],
            contents=[
                {k: c[k] for k in ("id", "header", "paragraph", "sort_number")}
                for c in page["contents"]
            ],
        )

        edited = client.put(f"/api/pages/{page['id']}", json=body).json()

        assert edited["contents"] == page["contents"]

    def test_non_author_gets_401(self, client, login, page):
        login("bob")

        response = client.put(f"/api/pages/{page['id']}", json=_page(title="Mine now"))

        assert response.status_code == 401
        assert response.json() == {
            "error": ["This page can not be edited if you are not the author!"]
        }

    def test_admin_can_edit(self, client, login, page, accounts):
        login("admin")

        response = client.put(f"/api/pages/{page['id']}", json=_page(title="Moderated"))

        assert response.status_code == 200
        assert response.json()["title"] == "Moderated"
        assert response.json()["user"]["id"] == accounts["alice"].id

    def test_admin_reassigns_author(self, client, login, page, accounts):
        login("admin")

        response = client.put(
            f"/api/pages/{page['id']}", json=_page(user=accounts["bob"].id)
        )

        assert response.json()["user"]["id"] == accounts["bob"].id

    def test_missing_page(self, client, page):
        response = client.put("/api/pages/999", json=_page())

        assert response.status_code == 404
        assert response.json() == {"error": ["Page not found!"]}

    def test_foreign_block_rejected(self, client, page):
        client.post("/api/pages", json=_page(title="Other"))
        other = next(p for p in client.get("/api/pages").json() if p["title"] == "Other")
        foreign_id = other["contents"][0]["id"]

        block = {"id": foreign_id, "header": "X", "paragraph": "x", "sort_number": 1}
        response = client.put(f"/api/pages/{page['id']}", json=_page(contents=[block]))

        assert response.status_code == 400
        assert response.json() == {
            "errors": [f"Content block {foreign_id} does not belong to this page!"]
        }
        # nothing was touched
        other_after = client.get(f"/api/pages/{other['id']}").json()
        assert other_after["contents"] == other["contents"]

    def test_block_submitted_twice_rejected(self, client, page):
        block_id = page["contents"][0]["id"]
        blocks = [
            {"id": block_id, "header": "A", "paragraph": "a", "sort_number": 1},
            {"id": block_id, "header": "B", "paragraph": "b", "sort_number": 2},
        ]

        response = client.put(f"/api/pages/{page['id']}", json=_page(contents=blocks))

        assert response.status_code == 400
        assert response.json() == {
            "errors": [f"Content block {block_id} is submitted more than once!"]
        }
        assert client.get(f"/api/pages/{page['id']}").json()["contents"] == page["contents"]


class TestDeletePage:
    def test_soft_delete(self, client, login, db_path, accounts):
        login("alice")
        client.post("/api/pages", json=_page())
        page = _only_page(client)

        response = client.delete(f"/api/pages/{page['id']}")

        assert response.status_code == 200
        assert client.get(f"/api/pages/{page['id']}").status_code == 404
        assert client.get("/api/pages").status_code == 404
        # the row is still there
        [row] = SQLitePageRepo(db_path).list_rows_by_user(accounts["alice"].id)
        assert row.deleted is True

        me = client.get("/api/session/current").json()
        assert me["number_pages_created"] == 1
        assert me["number_pages_removed"] == 1

    def test_non_author_gets_401(self, client, login):
        login("alice")
        client.post("/api/pages", json=_page())
        page = _only_page(client)
        login("bob")

        response = client.delete(f"/api/pages/{page['id']}")

        assert response.status_code == 401
        assert response.json() == {
            "error": ["This page can not be deleted if you are not the author!"]
        }

    def test_anonymous_gets_401(self, client):
        assert client.delete("/api/pages/1").status_code == 401


class TestListPages:
    @pytest.fixture
    def pages(self, client, login):
        login("alice")
        for title, release in [
            ("yesterday", TODAY - timedelta(days=1)),
            ("tomorrow", TODAY + timedelta(days=1)),
            ("draft", None),
        ]:
            client.post(
                "/api/pages",
                json=_page(title=title, release_date=release.isoformat() if release else None),
            )
        client.delete("/api/session")

    def test_no_pages(self, client):
        response = client.get("/api/pages")

        assert response.status_code == 404
        assert response.json() == {"error": ["There is no page yet!"]}

    def test_anonymous_sees_published_only(self, client, pages):
        response = client.get("/api/pages")

        assert response.status_code == 200
        assert [p["title"] for p in response.json()] == ["yesterday"]
        assert response.json()[0]["status"] == "Published"

    def test_authenticated_sees_all(self, client, login, pages):
        login("bob")

        listed = client.get("/api/pages").json()

        assert [p["title"] for p in listed] == ["draft", "yesterday", "tomorrow"]
        assert [p["status"] for p in listed] == ["Draft", "Published", "Programmed"]

    def test_get_single_page(self, client, login, pages):
        login("bob")
        draft = client.get("/api/pages").json()[0]
        client.delete("/api/session")

        response = client.get(f"/api/pages/{draft['id']}")

        assert response.status_code == 200
        assert response.json()["title"] == "draft"

    def test_statistics_add_up(self, client, pages):
        for user in client.get("/api/users").json():
            assert user["number_pages_created"] == (
                user["number_pages_published"]
                + user["number_pages_programmed"]
                + user["number_pages_draft"]
                + user["number_pages_removed"]
            )
