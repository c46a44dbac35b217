def signup(client, email, full_name="Test User", password="secret-pass"):
    response = client.post(
        "/api/v1/auth/signup",
        data={"full_name": full_name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


def auth_headers(client, email, full_name="Test User", password="secret-pass"):
    user = signup(client, email, full_name, password)
    response = client.post("/api/v1/auth/signin", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    # Requests below authenticate with the header, not the cookie jar
    client.cookies.clear()
    return user, {"Authorization": f"Bearer {response.json()['access_token']}"}


def create_post(client, headers, post_type="photo", title="Sunset", body="Taken at the pier", files=None):
    if files is None:
        files = {"cover_image": ("cover.png", b"fake-png", "image/png")}
    response = client.post(
        f"/api/v1/posts/{post_type}",
        data={"title": title, "body": body},
        files=files,
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()
