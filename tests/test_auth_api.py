from tests.conftest import PASSWORD, register_and_login


def test_end_to_end_scenario(client):
    body = {"email": "a@b.com", "password": PASSWORD, "name": "A"}

    res = client.post("/register", json=body)
    assert res.status_code == 201
    data = res.get_json()
    assert data["success"] is True
    assert data["email"] == "a@b.com"
    assert data["name"] == "A"
    assert len(data["userId"]) == 36
    assert "password" not in data

    res = client.post("/register", json=body)
    assert res.status_code == 409
    assert res.get_json()["message"] == "User with this email already exists"

    res = client.post("/token", json={"email": "a@b.com", "password": PASSWORD})
    assert res.status_code == 200
    grant = res.get_json()
    assert grant["token_type"] == "Bearer"
    assert grant["expires_in"] == 3600
    assert grant["access_token"]
    assert len(grant["refresh_token"]) == 64

    res = client.post("/token", json={"email": "a@b.com", "password": "wrong-password"})
    assert res.status_code == 401

    res = client.get("/profile")
    assert res.status_code == 401

    res = client.get("/profile", headers={"Authorization": f"Bearer {grant['access_token']}"})
    assert res.status_code == 200
    assert res.get_json()["email"] == "a@b.com"


def test_register_missing_field(client):
    res = client.post("/register", json={"email": "a@b.com", "password": PASSWORD})
    assert res.status_code == 400
    body = res.get_json()
    assert body["error"] == "Bad Request"
    assert body["status"] == 400
    assert "name" in body["details"]


def test_register_without_body(client):
    res = client.post("/register", data="not json", content_type="text/plain")
    assert res.status_code == 400


def test_register_short_password(client):
    res = client.post("/register", json={"email": "a@b.com", "password": "short", "name": "A"})
    assert res.status_code == 400
    assert res.get_json()["message"] == "Password must be at least 8 characters long"


def test_register_invalid_email(client):
    res = client.post("/register", json={"email": "ab.com", "password": PASSWORD, "name": "A"})
    assert res.status_code == 400
    assert res.get_json()["message"] == "Invalid email format"


def test_token_missing_field(client):
    res = client.post("/token", json={"email": "a@b.com"})
    assert res.status_code == 400


def test_unknown_email_and_wrong_password_look_the_same(client):
    register_and_login(client)
    wrong = client.post("/token", json={"email": "a@b.com", "password": "wrong-password"})
    unknown = client.post("/token", json={"email": "x@b.com", "password": PASSWORD})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json() == unknown.get_json()


def test_refresh_flow(client, tokens):
    res = client.post("/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert res.status_code == 200
    body = res.get_json()
    assert body["token_type"] == "Bearer"
    assert body["expires_in"] == 3600
    assert "refresh_token" not in body

    res = client.get("/profile", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert res.status_code == 200


def test_refresh_missing_and_invalid(client):
    assert client.post("/refresh", json={}).status_code == 400
    res = client.post("/refresh", json={"refresh_token": "nope"})
    assert res.status_code == 401
    assert res.get_json()["message"] == "Invalid refresh token"


def test_revoke_flow(client, tokens):
    res = client.post("/revoke", json={"refresh_token": tokens["refresh_token"]})
    assert res.status_code == 200
    assert res.get_json() == {"success": True, "message": "Token revoked successfully"}

    assert client.post("/refresh", json={"refresh_token": tokens["refresh_token"]}).status_code == 401

    res = client.post("/revoke", json={"refresh_token": tokens["refresh_token"]})
    assert res.status_code == 404
    assert res.get_json()["message"] == "Refresh token not found"


def test_revoke_missing_token(client):
    assert client.post("/revoke", json={}).status_code == 400


def test_access_token_is_not_a_refresh_token(client, tokens):
    res = client.post("/refresh", json={"refresh_token": tokens["access_token"]})
    assert res.status_code == 401


def test_invalid_bearer_token(client):
    res = client.get("/profile", headers={"Authorization": "Bearer not.a.jwt"})
    assert res.status_code == 401
    assert res.get_json()["message"] == "Invalid or expired access token"


def test_health_and_root(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.get_json()["status"] == "ok"
    assert res.get_json()["database"] == "ok"

    res = client.get("/", headers={"Accept": "application/json"})
    assert res.status_code == 200
    catalogue = res.get_json()
    assert catalogue["authentication"]["type"] == "Bearer"
    assert {ep["path"] for ep in catalogue["endpoints"]["authentication"]} == {
        "/register",
        "/token",
        "/refresh",
        "/revoke",
    }

    res = client.get("/", headers={"User-Agent": "curl/8.4.0"})
    assert res.mimetype == "text/plain"
    assert "Available Endpoints" in res.get_data(as_text=True)


def test_unknown_route_uses_error_envelope(client):
    res = client.get("/nope")
    assert res.status_code == 404
    body = res.get_json()
    assert body["error"] == "Not Found"
    assert body["status"] == 404
