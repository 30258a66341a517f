import pytest


USERS = "/api/v1/users/"


def test_create_user_with_post(client):
    response = client.post(
        USERS,
        json={
            "email": "a@b.co",
            "name": "  Bob  ",
            "post": {"title": " Hi ", "content": None, "published": True},
        },
    )
    assert response.status_code == 201
    body = response.json()
    user_id = body["user"]["id"]
    assert body["user"] == {"id": user_id, "email": "a@b.co", "name": "Bob"}
    assert body["post"] == {
        "id": body["post"]["id"],
        "title": "Hi",
        "content": None,
        "published": True,
        "authorId": user_id,
    }


def test_create_user_without_post(client):
    response = client.post(USERS, json={"email": "solo@b.co"})
    assert response.status_code == 201
    assert response.json()["post"] is None
    assert response.json()["user"]["name"] is None


@pytest.mark.parametrize(
    "body,message",
    [
        ({}, "Email is required"),
        ({"email": "   "}, "Email is required"),
        ({"email": 5}, "Email is required"),
        ({"email": "not-an-email"}, "Invalid email format"),
        ({"email": "a@b.co", "post": {"content": "no title"}}, "Post title is required"),
        ({"email": "a@b.co", "post": {"title": "   "}}, "Post title is required"),
    ],
)
def test_invalid_requests_are_rejected(client, count_rows, body, message):
    response = client.post(USERS, json=body)
    assert response.status_code == 400
    assert response.json() == {"error": message}
    assert count_rows("users") == 0


@pytest.mark.parametrize("post", [False, 0, ""])
def test_empty_scalar_post_creates_user_only(client, count_rows, post):
    response = client.post(USERS, json={"email": "a@b.co", "post": post})
    assert response.status_code == 201
    assert response.json()["post"] is None
    assert count_rows("users") == 1
    assert count_rows("posts") == 0


def test_empty_body_requires_email(client):
    response = client.post(USERS)
    assert response.status_code == 400
    assert response.json() == {"error": "Email is required"}


def test_malformed_json_is_rejected(client):
    response = client.post(USERS, content="{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


def test_duplicate_email_returns_conflict(client, count_rows):
    assert client.post(USERS, json={"email": "a@b.co"}).status_code == 201
    response = client.post(USERS, json={"email": " a@b.co", "post": {"title": "Second"}})
    assert response.status_code == 409
    assert response.json() == {"error": "User with this email already exists"}
    assert count_rows("users") == 1
    assert count_rows("posts") == 0


def test_unexpected_failure_hides_details(client, monkeypatch):
    from user_post_api.app.services.user_service import UserService

    def explode(data):
        raise RuntimeError("SQLITE_IOERR secret detail")

    monkeypatch.setattr(UserService, "_insert", staticmethod(explode))
    response = client.post(USERS, json={"email": "a@b.co"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create user"}


def test_list_users_with_posts(client):
    client.post(USERS, json={"email": "a@b.co", "name": "Ann", "post": {"title": "One"}})
    client.post(USERS, json={"email": "c@d.co"})

    response = client.get(USERS)
    assert response.status_code == 200
    users = response.json()
    assert [user["email"] for user in users] == ["a@b.co", "c@d.co"]
    assert users[0]["name"] == "Ann"
    assert users[0]["posts"][0]["title"] == "One"
    assert users[0]["posts"][0]["authorId"] == users[0]["id"]
    assert users[0]["posts"][0]["published"] is False
    assert users[1]["posts"] == []


def test_listing_is_not_paginated(client):
    for i in range(60):
        assert client.post(USERS, json={"email": f"u{i}@example.com"}).status_code == 201
    assert len(client.get(USERS).json()) == 60


def test_legacy_paths(client):
    response = client.post("/api/addUser", json={"email": "a@b.co", "post": {"title": "Hi"}})
    assert response.status_code == 201
    users = client.get("/api/getUser").json()
    assert users[0]["email"] == "a@b.co"
    assert len(users[0]["posts"]) == 1
    assert client.post("/api/addUser", json={"email": "a@b.co"}).status_code == 409
