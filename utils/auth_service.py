"""
Auth service: register / login / refresh / revoke and the bearer guard.

Composes the credential hasher, the access token codec and the refresh token
store. Configuration arrives through AuthSettings; nothing here reads the
environment or the Flask app.

Refresh token lifecycle:
    absent -> issued (login)
    issued -> issued (refresh while valid; the refresh token is not rotated)
    issued -> deleted (refresh after expiry, or revoke)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from argon2.exceptions import HashingError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models.token_store import RefreshTokenStore
from models.user import User
from utils.errors import (
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from utils.security import CredentialHasher, extract_bearer_token, generate_uuid
from utils.tokens import AccessTokenCodec

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class AuthSettings:
    secret: str
    access_ttl_seconds: int = 3600
    refresh_ttl_seconds: int = 2592000
    algorithm: str = "HS256"

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "AuthSettings":
        return cls(
            secret=config["JWT_SECRET"],
            access_ttl_seconds=int(config["ACCESS_TOKEN_EXPIRES_SECONDS"]),
            refresh_ttl_seconds=int(config["REFRESH_TOKEN_EXPIRES_SECONDS"]),
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
        )


@dataclass(frozen=True)
class Identity:
    """The caller resolved from a verified access token."""
    account_id: str
    email: str


@dataclass(frozen=True)
class TokenGrant:
    access_token: str
    expires_in: int
    refresh_token: Optional[str] = None
    token_type: str = "Bearer"

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "token_type": self.token_type,
            "access_token": self.access_token,
            "expires_in": self.expires_in,
        }
        if self.refresh_token is not None:
            data["refresh_token"] = self.refresh_token
        return data


class AuthService:
    def __init__(self, settings: AuthSettings, session: Session, hasher: Optional[CredentialHasher] = None):
        self.settings = settings
        self.session = session
        self.hasher = hasher or CredentialHasher()
        self.codec = AccessTokenCodec(
            settings.secret, settings.access_ttl_seconds, algorithm=settings.algorithm
        )
        self.refresh_tokens = RefreshTokenStore(session)

    # --------- Core operations ----------
    def register(self, email: str, password: str, name: str) -> User:
        if not email or not password or not name:
            raise ValidationError("Missing required fields: email, password, name")
        if "@" not in email:
            raise ValidationError("Invalid email format")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        if self.session.query(User).filter(User.email == email).first():
            raise ConflictError("User with this email already exists")

        user = User(
            id=generate_uuid(),
            email=email,
            password_hash=self._hash(password),
            name=name,
            bio="",
            preferences={},
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.session.rollback()
            raise ConflictError("User with this email already exists")
        except SQLAlchemyError:
            self.session.rollback()
            raise

        logger.info("account registered id=%s", user.id)
        return user

    def login(self, email: str, password: str) -> TokenGrant:
        if not email or not password:
            raise ValidationError("Missing required fields: email, password")

        user = self.session.query(User).filter(User.email == email).first()
        if not user or not self.hasher.verify(password, user.password_hash):
            logger.info("login rejected email=%s", email)
            raise AuthenticationError(INVALID_CREDENTIALS)

        if self.hasher.needs_rehash(user.password_hash):
            user.password_hash = self._hash(password)

        access_token = self.codec.issue(user.id, user.email)
        refresh_token = self.refresh_tokens.generate()
        self.refresh_tokens.issue(user.id, refresh_token, self.settings.refresh_ttl_seconds)
        self._commit()

        logger.info("login ok id=%s", user.id)
        return TokenGrant(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self.settings.access_ttl_seconds,
        )

    def refresh(self, refresh_token: str) -> TokenGrant:
        if not refresh_token:
            raise ValidationError("Missing required field: refresh_token")

        record = self.refresh_tokens.find_by_token(refresh_token)
        if record is None:
            raise AuthenticationError("Invalid refresh token")

        if record.is_expired():
            # Consume the expired token so it cannot be retried
            self.refresh_tokens.revoke(refresh_token)
            self._commit()
            logger.info("expired refresh token removed user_id=%s", record.user_id)
            raise AuthenticationError("Refresh token has expired")

        user = record.user
        return TokenGrant(
            access_token=self.codec.issue(user.id, user.email),
            expires_in=self.settings.access_ttl_seconds,
        )

    def revoke(self, refresh_token: str) -> None:
        if not refresh_token:
            raise ValidationError("Missing required field: refresh_token")
        if not self.refresh_tokens.revoke(refresh_token):
            raise NotFoundError("Refresh token not found")
        self._commit()
        logger.info("refresh token revoked")

    def authenticate(self, auth_header: Optional[str]) -> Identity:
        """Resolve the caller from an Authorization header value."""
        token = extract_bearer_token(auth_header)
        if not token:
            raise AuthenticationError(
                "Missing or invalid Authorization header. Expected: Authorization: Bearer <token>"
            )
        claims = self.codec.verify(token)
        if claims is None:
            raise AuthenticationError("Invalid or expired access token")
        return Identity(account_id=claims["sub"], email=claims.get("email", ""))

    # --------- Helpers ----------
    def _hash(self, password: str) -> str:
        try:
            return self.hasher.hash(password)
        except HashingError:
            logger.exception("password hashing failed")
            raise InternalError("Failed to hash password")

    def _commit(self):
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
