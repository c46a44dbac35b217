from app.core.config import settings
from tests.utils import auth_headers, signup


def test_signup_returns_user_without_password(client):
    user = signup(client, "Maya@Example.com", full_name="Maya Rao")

    assert user["email"] == "maya@example.com"
    assert user["full_name"] == "Maya Rao"
    assert user["interested_fields"] == ["ALL"]
    assert "hashed_password" not in user
    assert "password" not in user
    assert user["profile_image_url"] == settings.DEFAULT_PROFILE_IMAGE_URL
    assert user["profile_image_url"].startswith("https://")


def test_signup_keeps_interested_fields(client):
    response = client.post(
        "/api/v1/auth/signup",
        data={
            "full_name": "Leo",
            "email": "leo@example.com",
            "password": "pw-123456",
            "interested_fields": ["dance", "song"],
        },
    )

    assert response.status_code == 201
    assert response.json()["interested_fields"] == ["dance", "song"]


def test_signup_stores_profile_image(client, storage):
    response = client.post(
        "/api/v1/auth/signup",
        data={"full_name": "Ana", "email": "ana@example.com", "password": "pw-123456"},
        files={"profile_image": ("me.jpg", b"jpeg-bytes", "image/jpeg")},
    )

    assert response.status_code == 201
    url = response.json()["profile_image_url"]
    assert url.startswith("https://media.test/profile_images/")
    assert list(storage.objects.values()) == [b"jpeg-bytes"]


def test_signup_rejects_non_image_profile_file(client, storage):
    response = client.post(
        "/api/v1/auth/signup",
        data={"full_name": "Eve", "email": "eve@example.com", "password": "pw-123456"},
        files={"profile_image": ("evil.exe", b"MZ\x90\x00", "application/octet-stream")},
    )

    assert response.status_code == 400
    assert storage.objects == {}
    signin = client.post("/api/v1/auth/signin", json={"email": "eve@example.com", "password": "pw-123456"})
    assert signin.status_code == 401


def test_signup_rejects_oversized_profile_image(client, storage, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 4)

    response = client.post(
        "/api/v1/auth/signup",
        data={"full_name": "Big", "email": "big@example.com", "password": "pw-123456"},
        files={"profile_image": ("me.png", b"too-many-bytes", "image/png")},
    )

    assert response.status_code == 413
    assert storage.objects == {}


def test_duplicate_email_is_rejected(client):
    signup(client, "dup@example.com")
    response = client.post(
        "/api/v1/auth/signup",
        data={"full_name": "Other", "email": "DUP@example.com", "password": "x"},
    )

    assert response.status_code == 400


def test_invalid_email_is_rejected(client):
    response = client.post(
        "/api/v1/auth/signup",
        data={"full_name": "Other", "email": "not-an-email", "password": "x"},
    )

    assert response.status_code == 400


def test_signin_with_wrong_password(client):
    signup(client, "kim@example.com", password="right-one")
    response = client.post("/api/v1/auth/signin", json={"email": "kim@example.com", "password": "wrong"})

    assert response.status_code == 401


def test_signin_sets_cookie_usable_for_auth(client):
    signup(client, "kim@example.com", full_name="Kim Lee", password="right-one")
    response = client.post("/api/v1/auth/signin", json={"email": "kim@example.com", "password": "right-one"})

    assert response.status_code == 200
    assert response.cookies.get("token") == response.json()["access_token"]

    me = client.get("/api/v1/users/me")
    assert me.status_code == 200
    assert me.json()["full_name"] == "Kim Lee"


def test_bearer_token_auth(client):
    user, headers = auth_headers(client, "bo@example.com")

    response = client.get("/api/v1/users/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["id"] == user["id"]


def test_requests_without_credentials_are_rejected(client):
    assert client.get("/api/v1/users/me").status_code == 401
    assert client.get("/api/v1/users/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_logout_clears_cookie(client):
    signup(client, "kim@example.com", password="right-one")
    client.post("/api/v1/auth/signin", json={"email": "kim@example.com", "password": "right-one"})

    response = client.post("/api/v1/auth/logout")

    assert response.status_code == 204
    assert client.get("/api/v1/users/me").status_code == 401


def test_update_profile_and_password(client):
    _, headers = auth_headers(client, "sam@example.com", password="old-pass")

    response = client.put(
        "/api/v1/users/me",
        json={"full_name": "Sam Updated", "password": "new-pass"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["full_name"] == "Sam Updated"

    old = client.post("/api/v1/auth/signin", json={"email": "sam@example.com", "password": "old-pass"})
    new = client.post("/api/v1/auth/signin", json={"email": "sam@example.com", "password": "new-pass"})
    assert old.status_code == 401
    assert new.status_code == 200
