from unittest import mock

import pytest
import requests

from client import (
    ApiClient,
    ApiClientError,
    AuthenticationFailed,
    ConfigurationError,
    ProviderConfig,
    TodoNotFound,
)
from client.config import DEFAULT_ENDPOINT

TODO = {
    "id": "0b7c4a56-3c5e-4c1f-9f3e-2d7f6b1c9a10",
    "userId": "u-1",
    "title": "Buy milk",
    "description": "",
    "completed": False,
    "createdAt": "2026-01-01T00:00:00",
    "updatedAt": "2026-01-01T00:00:00",
}


def response(status, payload=None, text=""):
    resp = mock.Mock(spec=requests.Response)
    resp.status_code = status
    resp.text = text
    if payload is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = payload
    return resp


def login_ok(access="access-1"):
    return response(200, {"access_token": access, "refresh_token": "r" * 64, "expires_in": 3600})


@pytest.fixture
def session():
    s = mock.Mock(spec=requests.Session)
    s.headers = {}
    s.post.return_value = login_ok()
    return s


@pytest.fixture
def api(session):
    return ApiClient("http://api.test/", "a@b.com", "password123", session=session)


def test_authenticate_stores_tokens(api, session):
    api.authenticate()

    assert api.access_token == "access-1"
    assert api.refresh_token == "r" * 64
    session.post.assert_called_once_with(
        "http://api.test/token",
        json={"email": "a@b.com", "password": "password123"},
        timeout=30,
    )
    assert session.headers["Accept"] == "application/json"


def test_authenticate_failure(api, session):
    session.post.return_value = response(401, {"error": "Unauthorized"}, text="nope")
    with pytest.raises(AuthenticationFailed) as exc:
        api.authenticate()
    assert exc.value.status == 401


def test_network_failure_is_wrapped(api, session):
    session.post.side_effect = requests.ConnectionError("down")
    with pytest.raises(ApiClientError):
        api.authenticate()


def test_request_logs_in_lazily_and_sends_bearer(api, session):
    session.request.return_value = response(200, [TODO])

    assert api.list_todos() == [TODO]
    session.post.assert_called_once()
    _, kwargs = session.request.call_args
    assert kwargs["headers"] == {"Authorization": "Bearer access-1"}


def test_request_reauthenticates_once_on_401(api, session):
    session.post.side_effect = [login_ok("old"), login_ok("new")]
    session.request.side_effect = [response(401, {}), response(200, [])]

    assert api.list_todos() == []
    assert session.post.call_count == 2
    assert session.request.call_args_list[1].kwargs["headers"] == {"Authorization": "Bearer new"}


def test_request_does_not_loop_on_repeated_401(api, session):
    session.request.side_effect = [response(401, {}), response(401, {})]
    with pytest.raises(ApiClientError) as exc:
        api.list_todos()
    assert exc.value.status == 401
    assert session.request.call_count == 2


def test_create_todo_unwraps_envelope(api, session):
    session.request.return_value = response(
        201, {"success": True, "message": "Todo created successfully", "todo": TODO}
    )

    assert api.create_todo("Buy milk") == TODO
    args, kwargs = session.request.call_args
    assert args == ("POST", "http://api.test/todos")
    assert kwargs["json"] == {"title": "Buy milk", "description": "", "completed": False}


def test_get_todo_not_found(api, session):
    session.request.return_value = response(404, {"error": "Not Found"})
    with pytest.raises(TodoNotFound):
        api.get_todo(TODO["id"])


def test_update_todo_sends_only_given_fields(api, session):
    session.request.return_value = response(200, {"success": True, "todo": {**TODO, "completed": True}})

    updated = api.update_todo(TODO["id"], completed=True)
    assert updated["completed"] is True
    assert session.request.call_args.kwargs["json"] == {"completed": True}


def test_delete_todo_treats_404_as_done(api, session):
    session.request.return_value = response(404, {"error": "Not Found"})
    api.delete_todo(TODO["id"])

    session.request.return_value = response(500, {"error": "Internal Server Error"})
    with pytest.raises(ApiClientError):
        api.delete_todo(TODO["id"])


def test_undecodable_body(api, session):
    session.request.return_value = response(200, None, text="<html>")
    with pytest.raises(ApiClientError):
        api.list_todos()


def test_from_config(session):
    config = ProviderConfig(endpoint="http://x.test", email="a@b.com", password="pw")
    api = ApiClient.from_config(config, session=session)
    assert api.base_url == "http://x.test"
    assert api.email == "a@b.com"


def test_resolve_prefers_explicit_values(monkeypatch):
    monkeypatch.setenv("APIBASICS_ENDPOINT", "http://env.test")
    monkeypatch.setenv("APIBASICS_EMAIL", "env@b.com")
    monkeypatch.setenv("APIBASICS_PASSWORD", "env-password")

    config = ProviderConfig.resolve(email="a@b.com")
    assert config.endpoint == "http://env.test"
    assert config.email == "a@b.com"
    assert config.password == "env-password"
    assert "env-password" not in repr(config)


def test_resolve_defaults_endpoint(monkeypatch):
    monkeypatch.delenv("APIBASICS_ENDPOINT", raising=False)
    config = ProviderConfig.resolve(email="a@b.com", password="pw")
    assert config.endpoint == DEFAULT_ENDPOINT


def test_resolve_reports_missing_credentials(monkeypatch):
    monkeypatch.delenv("APIBASICS_EMAIL", raising=False)
    monkeypatch.delenv("APIBASICS_PASSWORD", raising=False)
    with pytest.raises(ConfigurationError) as exc:
        ProviderConfig.resolve()
    assert "email" in str(exc.value)
    assert "password" in str(exc.value)
