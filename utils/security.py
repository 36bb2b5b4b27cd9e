"""
security helpers:
- Argon2 password hashing via argon2-cffi
- Bearer header parsing
- UUID generation/validation for opaque resource identifiers
"""
from __future__ import annotations

import re
import uuid

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_UUID4_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


class CredentialHasher:
    """
    One-way salted password hashing.
    Every hash embeds its own random salt and cost parameters, so hashing the
    same password twice gives two different strings that both verify.
    """

    def __init__(self, time_cost: int = 3, memory_cost: int = 65536, parallelism: int = 4):
        self._ph = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )

    def hash(self, password: str) -> str:
        """Hash a plaintext password using Argon2
        """
        return self._ph.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """ Verify a plaintext password against a stored hash. Never raises on mismatch.
        """
        try:
            return self._ph.verify(password_hash, password)
        except (VerificationError, InvalidHashError):
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        return self._ph.check_needs_rehash(password_hash)


def extract_bearer_token(auth_header: str | None) -> str | None:
    """
    Return the token of an `Authorization: Bearer <token>` header value.
    The scheme word is case-sensitive and the value must have exactly two parts.
    """
    if not auth_header:
        return None
    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        return None
    return parts[1]


def generate_uuid() -> str:
    """Return a canonical UUIDv4 string (36 chars, with hyphens)."""
    return str(uuid.uuid4())


def is_valid_uuid(value: str) -> bool:
    return bool(value) and _UUID4_RE.match(value) is not None
