from tests.utils import auth_headers, create_post


def comments_url(post, post_type="game"):
    return f"/api/v1/posts/{post_type}/{post['id']}/comments"


def game_post(client, headers):
    return create_post(client, headers, "game", files={"media_file": ("clip.mp4", b"mp4", "video/mp4")})


def test_comment_emails_and_notifies_post_author(client, mailer):
    author, owner = auth_headers(client, "owner@example.com", full_name="Riya Sen")
    commenter, fan = auth_headers(client, "fan@example.com", full_name="Tom Fan")
    post = game_post(client, owner)

    response = client.post(comments_url(post), json={"content": "  Great run!  "}, headers=fan)

    assert response.status_code == 201
    comment = response.json()
    assert comment["content"] == "Great run!"
    assert comment["author"]["full_name"] == "Tom Fan"

    assert len(mailer.sent) == 1
    email = mailer.sent[0]
    assert email["to"] == "owner@example.com"
    assert email["subject"] == "New comment on your game post!"
    assert "Hey Riya," in email["body"]
    assert "Tom Fan commented on your game post" in email["body"]
    assert '"Great run!"' in email["body"]
    assert f"http://testserver/game/{post['id']}" in email["body"]

    notifications = client.get("/api/v1/notifications", headers=owner).json()
    assert len(notifications) == 1
    assert notifications[0]["type"] == "post_comment"
    assert notifications[0]["related_id"] == comment["id"]
    assert notifications[0]["post_id"] == post["id"]
    assert notifications[0]["actor"]["id"] == commenter["id"]


def test_commenting_on_own_post_sends_nothing(client, mailer):
    _, owner = auth_headers(client, "owner@example.com")
    post = game_post(client, owner)

    client.post(comments_url(post), json={"content": "first!"}, headers=owner)

    assert mailer.sent == []
    assert client.get("/api/v1/notifications", headers=owner).json() == []


def test_mail_failure_does_not_lose_comment(client, mailer):
    mailer.fail = True
    _, owner = auth_headers(client, "owner@example.com")
    _, fan = auth_headers(client, "fan@example.com")
    post = game_post(client, owner)

    response = client.post(comments_url(post), json={"content": "nice"}, headers=fan)

    assert response.status_code == 201
    assert len(client.get(comments_url(post), headers=fan).json()) == 1


def test_blank_comment_is_rejected(client):
    _, owner = auth_headers(client, "owner@example.com")
    post = game_post(client, owner)

    response = client.post(comments_url(post), json={"content": "   "}, headers=owner)

    assert response.status_code == 422


def test_comment_on_missing_post(client):
    _, owner = auth_headers(client, "owner@example.com")
    post = game_post(client, owner)

    response = client.post(comments_url(post, "photo"), json={"content": "hi"}, headers=owner)

    assert response.status_code == 404


def test_edit_and_delete_permissions(client):
    _, owner = auth_headers(client, "owner@example.com")
    _, fan = auth_headers(client, "fan@example.com")
    _, stranger = auth_headers(client, "stranger@example.com")
    post = game_post(client, owner)
    comment = client.post(comments_url(post), json={"content": "v1"}, headers=fan).json()
    assert comment["is_edited"] is False
    url = f"{comments_url(post)}/{comment['id']}"

    assert client.put(url, json={"content": "spam"}, headers=stranger).status_code == 403
    edited = client.put(url, json={"content": "v2"}, headers=fan)
    assert edited.status_code == 200
    assert edited.json()["content"] == "v2"
    assert edited.json()["is_edited"] is True
    assert client.get(comments_url(post), headers=fan).json()[0]["is_edited"] is True

    assert client.delete(url, headers=stranger).status_code == 403
    # the post author moderates comments on their post
    assert client.delete(url, headers=owner).status_code == 204
    assert client.get(comments_url(post), headers=owner).json() == []
