import pytest

from user_post_api.app.core.security import create_access_token, decode_access_token, resolve_redirect


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


def test_token_round_trip():
    token = create_access_token({"sub": "a@b.co", "name": "Ann"})
    payload = decode_access_token(token)
    assert payload["sub"] == "a@b.co"
    assert payload["name"] == "Ann"


@pytest.mark.parametrize("token", ["", "abc", "a.b.c", "a.b"])
def test_garbage_tokens_are_rejected(token):
    assert decode_access_token(token) is None


def test_tampered_and_expired_tokens_are_rejected():
    header, payload, signature = create_access_token({"sub": "a@b.co"}).split(".")
    other = create_access_token({"sub": "root@b.co"}).split(".")[1]
    assert decode_access_token(f"{header}.{other}.{signature}") is None
    assert decode_access_token(create_access_token({"sub": "a@b.co"}, expires_delta=-60)) is None


def test_anonymous_session(client):
    response = client.get("/api/v1/session/")
    assert response.status_code == 200
    assert response.json() == {"user": None}


def test_signed_in_session(client):
    token = create_access_token(
        {"sub": "a@b.co", "email": "a@b.co", "name": "Ann", "picture": "https://img.example/ann.png"}
    )
    response = client.get("/api/v1/session/", headers=_auth(token))
    assert response.json() == {
        "user": {"name": "Ann", "email": "a@b.co", "image": "https://img.example/ann.png"}
    }


def test_invalid_token_is_anonymous_not_401(client):
    response = client.get("/api/v1/session/", headers=_auth("not.a.token"))
    assert response.status_code == 200
    assert response.json() == {"user": None}


def test_assistant_context_carries_session_user(client):
    token = create_access_token({"sub": "a@b.co", "name": "Ann"})
    response = client.get("/api/v1/assistant/context", headers=_auth(token))
    assert response.json() == {"user": {"name": "Ann", "email": "a@b.co", "image": None}}
    assert client.get("/api/v1/assistant/context").json() == {"user": None}


@pytest.mark.parametrize(
    "url,expected",
    [
        ("/profile", "http://app.test/profile"),
        ("http://app.test/settings", "http://app.test/settings"),
        ("https://evil.test/phish", "http://app.test/dashboard"),
        ("http://app.test:8080/x", "http://app.test/dashboard"),
        ("not a url", "http://app.test/dashboard"),
    ],
)
def test_resolve_redirect(url, expected):
    assert resolve_redirect(url, "http://app.test/") == expected


def test_redirect_endpoint(client):
    response = client.get(
        "/api/v1/session/redirect",
        params={"url": "https://evil.test/"},
        follow_redirects=False,
    )
    assert response.status_code == 302
    assert response.headers["location"] == "http://testserver/dashboard"

    response = client.get("/api/v1/session/redirect", params={"url": "/api/v1/users/"}, follow_redirects=False)
    assert response.headers["location"] == "http://testserver/api/v1/users/"
