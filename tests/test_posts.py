from app.core.config import settings
from tests.utils import auth_headers, create_post

PNG = ("cover.png", b"fake-png", "image/png")
VIDEO = ("clip.mp4", b"fake-mp4", "video/mp4")


def test_create_photo_uploads_cover(client, storage):
    user, headers = auth_headers(client, "ph@example.com")

    post = create_post(client, headers, "photo")

    assert post["post_type"] == "photo"
    assert post["author_id"] == user["id"]
    assert post["cover_image_url"].startswith("https://media.test/photo_images/")
    assert post["video_url"] is None
    assert len(storage.objects) == 1


def test_photo_and_painting_require_cover(client):
    _, headers = auth_headers(client, "ph@example.com")

    for post_type in ("photo", "painting"):
        response = client.post(
            f"/api/v1/posts/{post_type}", data={"title": "t", "body": "b"}, headers=headers
        )
        assert response.status_code == 400


def test_painting_rejects_media_file(client):
    _, headers = auth_headers(client, "ph@example.com")

    response = client.post(
        "/api/v1/posts/painting",
        data={"title": "t", "body": "b"},
        files={"cover_image": PNG, "media_file": VIDEO},
        headers=headers,
    )

    assert response.status_code == 400


def test_game_requires_video_and_defaults_cover(client):
    _, headers = auth_headers(client, "gm@example.com")

    missing = client.post("/api/v1/posts/game", data={"title": "Run", "body": "Speedrun"}, headers=headers)
    assert missing.status_code == 400

    post = create_post(client, headers, "game", files={"media_file": VIDEO})
    assert post["cover_image_url"] == settings.DEFAULT_COVER_IMAGE_URL
    assert post["video_url"].startswith("https://media.test/game_videos/")


def test_dance_video_is_optional(client):
    _, headers = auth_headers(client, "dn@example.com")

    post = create_post(client, headers, "dance", files={})

    assert post["video_url"] is None


def test_unsupported_file_extension(client):
    _, headers = auth_headers(client, "ph@example.com")

    response = client.post(
        "/api/v1/posts/photo",
        data={"title": "t", "body": "b"},
        files={"cover_image": ("cover.bmp", b"bmp", "image/bmp")},
        headers=headers,
    )

    assert response.status_code == 400


def test_code_post_keeps_source_text(client):
    _, headers = auth_headers(client, "cd@example.com")

    post = create_post(
        client, headers, "code",
        files={"media_file": ("hello.py", b"print('hello')\n", "text/x-python")},
    )
    detail = client.get(f"/api/v1/posts/code/{post['id']}", headers=headers).json()

    assert detail["code_text"] == "print('hello')\n"
    assert detail["code_file_url"].startswith("https://media.test/code_files/")


def test_code_post_rejects_binary_file(client):
    _, headers = auth_headers(client, "cd@example.com")

    response = client.post(
        "/api/v1/posts/code",
        data={"title": "t", "body": "b"},
        files={"media_file": ("blob.bin", b"\xff\xfe\x00\x81", "application/octet-stream")},
        headers=headers,
    )

    assert response.status_code == 400


def test_unknown_post_type(client):
    _, headers = auth_headers(client, "x@example.com")

    assert client.get("/api/v1/posts/poem").status_code == 400
    assert client.get("/api/v1/posts/poem/abc", headers=headers).status_code == 400


def test_post_is_only_found_under_its_own_type(client):
    _, headers = auth_headers(client, "ph@example.com")
    post = create_post(client, headers, "photo")

    assert client.get(f"/api/v1/posts/photo/{post['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/v1/posts/painting/{post['id']}", headers=headers).status_code == 404


def test_post_detail_shows_author_comments_and_reactions(client):
    author, headers = auth_headers(client, "ph@example.com", full_name="Ola Photo")
    post = create_post(client, headers, "photo")
    base = f"/api/v1/posts/photo/{post['id']}"

    client.post(f"{base}/comments", json={"content": "Lovely light"}, headers=headers)
    client.post(f"{base}/reactions", json={"reaction_type": "love"}, headers=headers)

    detail = client.get(base, headers=headers).json()

    assert detail["author"]["full_name"] == "Ola Photo"
    assert [c["content"] for c in detail["comments"]] == ["Lovely light"]
    assert detail["reaction_counts"] == {"love": 1}
    assert detail["my_reaction"] == "love"


def test_list_posts_by_type_with_counts(client):
    _, headers = auth_headers(client, "ph@example.com")
    first = create_post(client, headers, "photo", title="one")
    create_post(client, headers, "photo", title="two")
    create_post(client, headers, "song", files={})
    client.post(f"/api/v1/posts/photo/{first['id']}/reactions", json={"reaction_type": "like"}, headers=headers)

    listed = client.get("/api/v1/posts/photo").json()

    assert {p["title"] for p in listed} == {"one", "two"}
    counts = {p["title"]: p["reaction_count"] for p in listed}
    assert counts == {"one": 1, "two": 0}


def test_only_author_can_update(client):
    _, owner = auth_headers(client, "owner@example.com")
    _, other = auth_headers(client, "other@example.com")
    post = create_post(client, owner, "photo")
    url = f"/api/v1/posts/photo/{post['id']}"

    assert client.put(url, json={"title": "Hijacked"}, headers=other).status_code == 403

    response = client.put(url, json={"title": "Golden hour"}, headers=owner)
    assert response.status_code == 200
    assert response.json()["title"] == "Golden hour"
    assert response.json()["body"] == post["body"]


def test_update_rejects_blank_title_or_body(client):
    _, owner = auth_headers(client, "owner@example.com")
    post = create_post(client, owner, "song", files={})
    url = f"/api/v1/posts/song/{post['id']}"

    assert client.put(url, json={"title": "   ", "body": ""}, headers=owner).status_code == 422
    assert client.put(url, json={"body": " \n "}, headers=owner).status_code == 422

    response = client.put(url, json={"title": "  Night mix  "}, headers=owner)
    assert response.status_code == 200
    assert response.json()["title"] == "Night mix"

    stored = client.get(url, headers=owner).json()
    assert stored["title"] == "Night mix"
    assert stored["body"] == post["body"]


def test_oversized_upload_is_rejected(client, storage, monkeypatch):
    _, headers = auth_headers(client, "big@example.com")
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 4)

    cover = client.post(
        "/api/v1/posts/photo", data={"title": "t", "body": "b"}, files={"cover_image": PNG}, headers=headers
    )
    video = client.post(
        "/api/v1/posts/dance", data={"title": "t", "body": "b"}, files={"media_file": VIDEO}, headers=headers
    )
    code = client.post(
        "/api/v1/posts/code",
        data={"title": "t", "body": "b"},
        files={"media_file": ("main.py", b"print('hi')", "text/plain")},
        headers=headers,
    )

    assert cover.status_code == 413
    assert video.status_code == 413
    assert code.status_code == 413
    assert storage.objects == {}
    assert client.get("/api/v1/posts/photo").json() == []


def test_delete_cascades_and_removes_media(client, storage):
    _, owner = auth_headers(client, "owner@example.com")
    _, fan = auth_headers(client, "fan@example.com")
    post = create_post(client, owner, "game", files={"cover_image": PNG, "media_file": VIDEO})
    base = f"/api/v1/posts/game/{post['id']}"
    client.post(f"{base}/reactions", json={"reaction_type": "care"}, headers=fan)
    client.post(f"{base}/comments", json={"content": "gg"}, headers=fan)

    assert client.delete(base, headers=fan).status_code == 403

    response = client.delete(base, headers=owner)

    assert response.status_code == 200
    assert response.json()["id"] == post["id"]
    assert client.get(base, headers=owner).status_code == 404
    assert client.get("/api/v1/notifications", headers=owner).json() == []
    assert set(storage.deleted) == {post["cover_image_url"], post["video_url"]}
    assert storage.objects == {}


def test_delete_leaves_default_cover_alone(client, storage):
    _, owner = auth_headers(client, "owner@example.com")
    post = create_post(client, owner, "song", files={})

    client.delete(f"/api/v1/posts/song/{post['id']}", headers=owner)

    assert storage.deleted == []


def test_home_feed_groups_by_type(client):
    _, headers = auth_headers(client, "ph@example.com")
    create_post(client, headers, "photo")
    create_post(client, headers, "song", files={})

    feed = client.get("/api/v1/feed").json()

    assert set(feed["posts"]) == {"code", "dance", "game", "painting", "photo", "song"}
    assert len(feed["posts"]["photo"]) == 1
    assert len(feed["posts"]["song"]) == 1
    assert feed["posts"]["code"] == []
    assert feed["total"] == 2


def test_profile_lists_own_posts(client):
    user, headers = auth_headers(client, "ph@example.com")
    _, other = auth_headers(client, "other@example.com")
    create_post(client, headers, "photo")
    create_post(client, other, "photo")

    profile = client.get("/api/v1/users/profile", headers=headers).json()

    assert profile["user"]["id"] == user["id"]
    assert len(profile["posts"]["photo"]) == 1
    assert profile["posts"]["dance"] == []

    by_id = client.get(f"/api/v1/users/{user['id']}/posts", headers=other).json()
    assert len(by_id) == 1
