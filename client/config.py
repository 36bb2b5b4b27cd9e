from __future__ import annotations

import os
from dataclasses import dataclass, field

from client.errors import ConfigurationError

DEFAULT_ENDPOINT = "https://api-basics.sharted.workers.dev"


@dataclass(frozen=True)
class ProviderConfig:
    endpoint: str
    email: str
    password: str = field(repr=False)

    @classmethod
    def resolve(cls, endpoint: str | None = None, email: str | None = None, password: str | None = None) -> "ProviderConfig":
        """
        Explicit values override APIBASICS_ENDPOINT / APIBASICS_EMAIL / APIBASICS_PASSWORD.
        """
        endpoint = endpoint or os.getenv("APIBASICS_ENDPOINT") or DEFAULT_ENDPOINT
        email = email or os.getenv("APIBASICS_EMAIL", "")
        password = password or os.getenv("APIBASICS_PASSWORD", "")

        missing = []
        if not email:
            missing.append("email (or APIBASICS_EMAIL)")
        if not password:
            missing.append("password (or APIBASICS_PASSWORD)")
        if missing:
            raise ConfigurationError("Missing configuration: " + ", ".join(missing))

        return cls(endpoint=endpoint.rstrip("/"), email=email, password=password)
