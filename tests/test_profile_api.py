from models import storage
from models.user import User


def test_get_profile(client, auth_headers):
    res = client.get("/profile", headers=auth_headers)
    assert res.status_code == 200
    profile = res.get_json()
    assert profile["email"] == "a@b.com"
    assert profile["name"] == "A"
    assert profile["bio"] == ""
    assert profile["preferences"] == {}
    assert profile["createdAt"]
    assert "password_hash" not in profile


def test_update_profile(client, auth_headers):
    res = client.put(
        "/profile",
        json={"name": "Ada", "bio": "hello", "preferences": {"theme": "dark"}},
        headers=auth_headers,
    )
    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is True
    assert body["message"] == "Profile updated successfully"
    assert body["profile"]["name"] == "Ada"
    assert body["profile"]["preferences"] == {"theme": "dark"}

    profile = client.get("/profile", headers=auth_headers).get_json()
    assert profile["bio"] == "hello"
    assert profile["preferences"] == {"theme": "dark"}


def test_partial_update_keeps_other_fields(client, auth_headers):
    client.put("/profile", json={"bio": "first"}, headers=auth_headers)
    client.put("/profile", json={"name": "B"}, headers=auth_headers)

    profile = client.get("/profile", headers=auth_headers).get_json()
    assert profile["name"] == "B"
    assert profile["bio"] == "first"


def test_preferences_must_be_an_object(client, auth_headers):
    for value in (["dark"], "dark", 3, None):
        res = client.put("/profile", json={"preferences": value}, headers=auth_headers)
        assert res.status_code == 400
        assert res.get_json()["message"] == "preferences must be an object"


def test_profile_requires_auth(client):
    assert client.get("/profile").status_code == 401
    assert client.put("/profile", json={"name": "x"}).status_code == 401


def test_profile_of_deleted_account(client, auth_headers):
    session = storage.get_session()
    session.query(User).delete()
    session.commit()

    res = client.get("/profile", headers=auth_headers)
    assert res.status_code == 404
    assert res.get_json()["message"] == "User not found"
