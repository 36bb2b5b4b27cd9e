from .api_client import ApiClient
from .config import ProviderConfig
from .errors import ApiClientError, AuthenticationFailed, ConfigurationError, TodoNotFound
from .todo_resource import TodoResource

__all__ = [
    "ApiClient",
    "ProviderConfig",
    "TodoResource",
    "ApiClientError",
    "AuthenticationFailed",
    "ConfigurationError",
    "TodoNotFound",
]
