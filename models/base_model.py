#!/usr/bin/env python3
"""
Shared SQLAlchemy base and mixin for the API Basics service.

- UUID primary key (String(36)) so identifiers are opaque and non-sequential
- created_at / updated_at timestamps (naive UTC, set application-side)

Timestamps are set in Python rather than with server defaults so that the values
are available on the instance right after commit (sessions use
expire_on_commit=False).
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base

from utils.security import generate_uuid

# Declarative base for all models
Base = declarative_base()


def utcnow() -> datetime:
    """Current time as naive UTC (the form stored in DateTime columns)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel:
    """
    Base mixin for persistent models addressed by an opaque UUID.
    """

    id = Column(String(36), primary_key=True, default=generate_uuid, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __init__(self, *args, **kwargs):
        """
        Allow attribute initialization via kwargs without requiring a session here.
        id and timestamps are filled in eagerly so the object is complete before flush.
        """
        for key, value in kwargs.items():
            if key != "__class__":
                setattr(self, key, value)
        if getattr(self, "id", None) is None:
            self.id = generate_uuid()
        now = utcnow()
        if getattr(self, "created_at", None) is None:
            self.created_at = now
        if getattr(self, "updated_at", None) is None:
            self.updated_at = now

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.id}>"

    def touch(self):
        """Bump updated_at; callers commit."""
        self.updated_at = utcnow()

