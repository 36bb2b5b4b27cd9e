from __future__ import annotations


class ApiClientError(Exception):
    """Non-success HTTP answer from the API."""

    def __init__(self, message: str, status: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status = status
        self.body = body


class AuthenticationFailed(ApiClientError):
    pass


class TodoNotFound(ApiClientError):
    pass


class ConfigurationError(Exception):
    pass
