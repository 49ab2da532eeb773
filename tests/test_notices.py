def notice(_id, title, created, active=True, pinned=False):
    return {
        "_id": _id,
        "title": title,
        "content": "...",
        "isActive": active,
        "isPinned": pinned,
        "createdAt": created,
    }


def test_list_hides_inactive_and_pins_first(client, fake_backend):
    fake_backend.notices = [
        notice("n1", "Old", "2025-01-01T00:00:00Z"),
        notice("n2", "New", "2025-01-05T00:00:00Z"),
        notice("n3", "Pinned", "2024-12-01T00:00:00Z", pinned=True),
        notice("n4", "Hidden", "2025-01-06T00:00:00Z", active=False),
    ]
    body = client.get("/notices").json()
    assert body["total"] == 3
    assert [n["id"] for n in body["items"]] == ["n3", "n2", "n1"]

    body = client.get("/notices", params={"include_inactive": True}).json()
    assert body["total"] == 4


def test_list_keyword_and_paging(client, fake_backend):
    fake_backend.notices = [notice(f"n{i}", f"Exam notice {i}", f"2025-01-0{i}T00:00:00Z") for i in range(1, 6)]
    fake_backend.notices.append(notice("x", "Holiday", "2025-01-09T00:00:00Z"))

    body = client.get("/notices", params={"keyword": "exam", "page": 2, "page_size": 2}).json()
    assert body["total"] == 5
    assert [n["id"] for n in body["items"]] == ["n3", "n2"]


def test_create_requires_admin(client):
    assert client.post("/notices", json={"title": "t", "content": "c"}).status_code == 401


def test_create_sends_camel_case(client, fake_backend, auth_headers):
    r = client.post(
        "/notices",
        json={"title": "Holiday", "content": "No classes on Friday", "image_url": "https://cdn/x.png"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    (_, payload, _), = fake_backend.called("create_notice")
    assert payload == {
        "title": "Holiday",
        "content": "No classes on Friday",
        "imageUrl": "https://cdn/x.png",
        "isActive": True,
        "isPinned": False,
    }
    body = r.json()
    assert body["id"] == "n1"
    assert body["image_url"] == "https://cdn/x.png"


def test_update_and_delete(client, fake_backend, auth_headers):
    fake_backend.notices = [notice("n1", "Old title", "2025-01-01T00:00:00Z")]

    r = client.put("/notices/n1", json={"is_active": False}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["is_active"] is False
    (_, _, payload, _), = fake_backend.called("update_notice")
    assert payload == {"isActive": False}

    assert client.put("/notices/n1", json={}, headers=auth_headers).status_code == 400
    assert client.put("/notices/zz", json={"title": "x"}, headers=auth_headers).status_code == 404

    assert client.delete("/notices/n1", headers=auth_headers).status_code == 200
    assert fake_backend.notices == []


def test_image_upload(client, fake_backend, auth_headers):
    r = client.post(
        "/notices/image",
        files={"image": ("poster.png", b"\x89PNG....", "image/png")},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json() == {"image_url": "https://cdn.example.com/poster.png"}


def test_image_upload_rejects_other_files(client, fake_backend, auth_headers):
    r = client.post(
        "/notices/image",
        files={"image": ("notes.pdf", b"%PDF", "application/pdf")},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert fake_backend.called("upload_notice_image") == []


def test_image_upload_size_limit(client, fake_backend, auth_headers):
    r = client.post(
        "/notices/image",
        files={"image": ("big.png", b"\0" * (5 * 1024 * 1024 + 1), "image/png")},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Image too large (max 5MB)"
    assert fake_backend.called("upload_notice_image") == []
