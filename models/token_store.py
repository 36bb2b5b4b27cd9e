"""
Refresh token store: opaque, high-entropy tokens persisted with an owner and an
absolute expiry.

The store does not judge expiry. find_by_token returns expired rows too; the
caller decides what an expired row means and deletes it.
"""
from __future__ import annotations

import secrets
from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from models.base_model import utcnow
from models.refresh_token import RefreshToken

TOKEN_BYTES = 32  # 256 bits, 64 hex chars


class RefreshTokenStore:
    def __init__(self, session: Session):
        self._session = session

    @staticmethod
    def generate() -> str:
        """Return a new random token string."""
        return secrets.token_hex(TOKEN_BYTES)

    def issue(self, user_id: str, token: str, lifetime_seconds: int) -> RefreshToken:
        """
        Persist a token for user_id, valid for lifetime_seconds from now.
        Flushes but does not commit; the unique constraint on token fires here.
        """
        now = utcnow()
        record = RefreshToken(
            token=token,
            user_id=user_id,
            created_at=now,
            expires_at=now + timedelta(seconds=lifetime_seconds),
        )
        self._session.add(record)
        self._session.flush()
        return record

    def find_by_token(self, token: str) -> Optional[RefreshToken]:
        """Exact-match lookup, with the owning user loaded."""
        if not token:
            return None
        return (
            self._session.query(RefreshToken)
            .options(joinedload(RefreshToken.user))
            .filter(RefreshToken.token == token)
            .first()
        )

    def revoke(self, token: str) -> bool:
        """Delete the row holding token. False means nothing matched."""
        if not token:
            return False
        record = self._session.query(RefreshToken).filter(RefreshToken.token == token).first()
        if record is None:
            return False
        self._session.delete(record)
        self._session.flush()
        return True
