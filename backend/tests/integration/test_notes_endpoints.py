"""End-to-end note flows over the HTTP API."""

import pytest


@pytest.fixture
async def ada(login_as):
    return await login_as()


@pytest.fixture
async def bob(login_as):
    return await login_as(email="bob@example.com", name="Bob")


async def _create(client, headers, **fields):
    resp = await client.post("/api/notes/", json=fields, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_notes_require_a_session(async_client):
    assert (await async_client.get("/api/notes/")).status_code == 401
    assert (await async_client.post("/api/notes/", json={"title": "t"})).status_code == 401


@pytest.mark.asyncio
async def test_new_user_has_no_notes(async_client, ada):
    resp = await async_client.get("/api/notes/", headers=ada)
    assert resp.status_code == 200
    assert resp.json() == {"items": [], "total": 0}


@pytest.mark.asyncio
async def test_create_with_defaults(async_client, ada):
    note = await _create(async_client, ada, title="Groceries")
    assert note["title"] == "Groceries"
    assert note["content"] == ""
    assert note["color"] == "#ffffff"
    assert note["category"] == "General"
    assert note["isPinned"] is False
    assert note["isArchived"] is False


@pytest.mark.asyncio
async def test_blank_title_is_rejected(async_client, ada):
    resp = await async_client.post("/api/notes/", json={"title": "   "}, headers=ada)
    assert resp.status_code == 422
    assert resp.json()["error"] == "ValidationError"

    resp = await async_client.post("/api/notes/", json={"content": "no title"}, headers=ada)
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_pinned_note_is_listed_first(async_client, ada):
    t1 = await _create(async_client, ada, title="T1")
    t2 = await _create(async_client, ada, title="T2")

    listing = (await async_client.get("/api/notes/", headers=ada)).json()
    assert [n["id"] for n in listing["items"]] == [t2["id"], t1["id"]]

    pinned = await async_client.patch(f"/api/notes/{t1['id']}/pin", headers=ada)
    assert pinned.json()["isPinned"] is True

    listing = (await async_client.get("/api/notes/", headers=ada)).json()
    assert [n["id"] for n in listing["items"]] == [t1["id"], t2["id"]]


@pytest.mark.asyncio
async def test_archiving_a_pinned_note(async_client, ada):
    note = await _create(async_client, ada, title="T1", isPinned=True)

    archived = await async_client.patch(f"/api/notes/{note['id']}/archive", headers=ada)
    assert archived.status_code == 200
    assert archived.json()["isArchived"] is True
    assert archived.json()["isPinned"] is False

    assert (await async_client.get("/api/notes/", headers=ada)).json()["total"] == 0
    with_archived = (await async_client.get("/api/notes/", params={"isArchived": "true"}, headers=ada)).json()
    assert [n["id"] for n in with_archived["items"]] == [note["id"]]

    # pinning an archived note changes nothing
    pin = await async_client.patch(f"/api/notes/{note['id']}/pin", headers=ada)
    assert pin.status_code == 200
    assert pin.json()["isPinned"] is False

    restored = await async_client.patch(
        f"/api/notes/{note['id']}/archive", json={"archived": False}, headers=ada
    )
    assert restored.json()["isArchived"] is False
    assert restored.json()["isPinned"] is False


@pytest.mark.asyncio
async def test_update_put_and_patch(async_client, ada):
    note = await _create(async_client, ada, title="T", content="body", category="Work")

    patched = await async_client.patch(f"/api/notes/{note['id']}", json={"title": "Renamed"}, headers=ada)
    assert patched.status_code == 200
    assert patched.json()["title"] == "Renamed"
    assert patched.json()["content"] == "body"

    put = await async_client.put(f"/api/notes/{note['id']}", json={"isFavorite": True}, headers=ada)
    assert put.json()["isFavorite"] is True
    assert put.json()["category"] == "Work"

    null = await async_client.patch(f"/api/notes/{note['id']}", json={"title": None}, headers=ada)
    assert null.status_code == 422


@pytest.mark.asyncio
async def test_other_users_cannot_see_or_touch_notes(async_client, ada, bob):
    note = await _create(async_client, ada, title="private")
    path = f"/api/notes/{note['id']}"

    assert (await async_client.get(path, headers=bob)).status_code == 404
    assert (await async_client.patch(path, json={"title": "x"}, headers=bob)).status_code == 404
    assert (await async_client.delete(path, headers=bob)).status_code == 404
    assert (await async_client.patch(f"{path}/pin", headers=bob)).status_code == 404
    assert (await async_client.get("/api/notes/", headers=bob)).json()["total"] == 0

    # indistinguishable from a note that never existed
    missing = await async_client.get("/api/notes/00000000-0000-0000-0000-000000000000", headers=bob)
    assert missing.json()["message"] == (await async_client.get(path, headers=bob)).json()["message"]

    assert (await async_client.get(path, headers=ada)).json()["title"] == "private"


@pytest.mark.asyncio
async def test_delete_then_delete_again(async_client, ada):
    note = await _create(async_client, ada, title="T")
    path = f"/api/notes/{note['id']}"

    first = await async_client.delete(path, headers=ada)
    assert first.status_code == 204
    assert first.content == b""
    assert (await async_client.delete(path, headers=ada)).status_code == 404
    assert (await async_client.get(path, headers=ada)).status_code == 404


@pytest.mark.asyncio
async def test_search_category_and_categories(async_client, ada):
    await _create(async_client, ada, title="Groceries", content="milk", category="Home")
    await _create(async_client, ada, title="Standup", content="sprint review", category="Work")

    found = (await async_client.get("/api/notes/", params={"search": "MILK"}, headers=ada)).json()
    assert [n["title"] for n in found["items"]] == ["Groceries"]

    work = (await async_client.get("/api/notes/", params={"category": "Work"}, headers=ada)).json()
    assert [n["title"] for n in work["items"]] == ["Standup"]

    categories = await async_client.get("/api/notes/categories", headers=ada)
    assert categories.json() == ["Home", "Work"]


@pytest.mark.asyncio
async def test_favorite_toggle(async_client, ada):
    note = await _create(async_client, ada, title="T")
    on = await async_client.patch(f"/api/notes/{note['id']}/favorite", headers=ada)
    assert on.json()["isFavorite"] is True
    off = await async_client.patch(f"/api/notes/{note['id']}/favorite", headers=ada)
    assert off.json()["isFavorite"] is False


@pytest.mark.asyncio
async def test_blank_category_filter_is_ignored(async_client, ada):
    await _create(async_client, ada, title="T", category="Work")
    resp = await async_client.get("/api/notes/", params={"category": "  "}, headers=ada)
    assert resp.json()["total"] == 1


@pytest.mark.asyncio
async def test_null_content_is_stored_empty(async_client, ada):
    note = await _create(async_client, ada, title="T", content=None)
    assert note["content"] == ""
