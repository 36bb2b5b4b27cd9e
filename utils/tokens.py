"""
Access token codec: short-lived, self-contained JWTs (PyJWT, HS256 by default).

Verification needs no lookup: a token is valid iff its signature checks out under
the configured secret, it has not expired and it is marked as an access token.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

ACCESS_TOKEN_TYPE = "access"


class AccessTokenCodec:
    def __init__(self, secret: str, lifetime_seconds: int, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("AccessTokenCodec requires a non-empty secret")
        if lifetime_seconds <= 0:
            raise ValueError("lifetime_seconds must be positive")
        self._secret = secret
        self._algorithm = algorithm
        self.lifetime_seconds = lifetime_seconds

    def issue(self, account_id: str, email: str, issued_at: Optional[datetime] = None) -> str:
        """Sign a token for the given account; expires lifetime_seconds after issued_at."""
        iat = issued_at or datetime.now(timezone.utc)
        exp = iat + timedelta(seconds=self.lifetime_seconds)
        payload = {
            "sub": str(account_id),
            "email": email,
            "type": ACCESS_TOKEN_TYPE,
            "iat": int(iat.timestamp()),
            "exp": int(exp.timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Decode and validate a token. Returns the claims, or None when the token
        is malformed, badly signed, expired or not an access token.
        """
        if not token or not isinstance(token, str):
            return None
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.InvalidTokenError:
            return None

        if claims.get("type") != ACCESS_TOKEN_TYPE:
            return None
        return claims
