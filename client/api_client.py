"""
HTTP client for the API Basics service.

Logs in with the password grant, sends the access token as a Bearer header and
re-authenticates once when a request comes back 401 (expired access token).
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from client.config import ProviderConfig
from client.errors import ApiClientError, AuthenticationFailed, TodoNotFound

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class ApiClient:
    def __init__(
        self,
        base_url: str,
        email: str,
        password: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.email = email
        self._password = password
        self.timeout = timeout
        self.session = session or requests.Session()
        # Ask for JSON explicitly so content negotiation never picks text or HTML
        self.session.headers.update({"Accept": "application/json"})
        self.access_token: Optional[str] = None
        self.refresh_token: Optional[str] = None

    @classmethod
    def from_config(cls, config: ProviderConfig, **kwargs) -> "ApiClient":
        return cls(config.endpoint, config.email, config.password, **kwargs)

    # --------- Auth ----------
    def authenticate(self) -> None:
        """Log in and keep the returned access and refresh tokens."""
        try:
            resp = self.session.post(
                f"{self.base_url}/token",
                json={"email": self.email, "password": self._password},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ApiClientError(f"auth request failed: {exc}") from exc

        if resp.status_code != 200:
            raise AuthenticationFailed(
                f"authentication failed (status {resp.status_code})",
                status=resp.status_code,
                body=resp.text,
            )
        data = _json(resp)
        self.access_token = data.get("access_token")
        self.refresh_token = data.get("refresh_token")
        if not self.access_token:
            raise AuthenticationFailed("authentication response carried no access_token", status=resp.status_code)
        logger.debug("authenticated against %s", self.base_url)

    def request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> requests.Response:
        """Authenticated request; on 401 log in again and retry once."""
        if not self.access_token:
            self.authenticate()

        resp = self._send(method, path, body)
        if resp.status_code == 401:
            logger.info("access token rejected, re-authenticating")
            self.authenticate()
            resp = self._send(method, path, body)
        return resp

    def _send(self, method: str, path: str, body: Optional[Dict[str, Any]]) -> requests.Response:
        try:
            return self.session.request(
                method,
                f"{self.base_url}{path}",
                json=body,
                headers={"Authorization": f"Bearer {self.access_token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ApiClientError(f"request failed: {exc}") from exc

    # --------- Todos ----------
    def list_todos(self) -> List[Dict[str, Any]]:
        resp = self.request("GET", "/todos")
        _raise_for_status(resp, "list todos")
        return _json(resp)

    def create_todo(self, title: str, description: str = "", completed: bool = False) -> Dict[str, Any]:
        resp = self.request(
            "POST", "/todos", {"title": title, "description": description, "completed": completed}
        )
        if resp.status_code not in (200, 201):
            _raise_for_status(resp, "create todo")
        return _unwrap_todo(_json(resp))

    def get_todo(self, todo_id: str) -> Dict[str, Any]:
        resp = self.request("GET", f"/todos/{todo_id}")
        if resp.status_code == 404:
            raise TodoNotFound("todo not found", status=404, body=resp.text)
        _raise_for_status(resp, "get todo")
        return _unwrap_todo(_json(resp))

    def update_todo(
        self,
        todo_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Send only the fields that were given."""
        updates: Dict[str, Any] = {}
        if title is not None:
            updates["title"] = title
        if description is not None:
            updates["description"] = description
        if completed is not None:
            updates["completed"] = completed

        resp = self.request("PUT", f"/todos/{todo_id}", updates)
        if resp.status_code == 404:
            raise TodoNotFound("todo not found", status=404, body=resp.text)
        _raise_for_status(resp, "update todo")
        return _unwrap_todo(_json(resp))

    def delete_todo(self, todo_id: str) -> None:
        resp = self.request("DELETE", f"/todos/{todo_id}")
        if resp.status_code == 404:
            # Already deleted
            return
        _raise_for_status(resp, "delete todo")


def _json(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise ApiClientError("failed to decode response", status=resp.status_code, body=resp.text) from exc


def _raise_for_status(resp: requests.Response, action: str) -> None:
    if resp.status_code != 200:
        raise ApiClientError(
            f"{action} failed (status {resp.status_code})",
            status=resp.status_code,
            body=resp.text,
        )


def _unwrap_todo(data: Dict[str, Any]) -> Dict[str, Any]:
    # Mutations answer {success, message, todo}; reads answer the bare todo
    if isinstance(data, dict) and isinstance(data.get("todo"), dict):
        return data["todo"]
    return data
