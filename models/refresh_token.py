"""
RefreshToken model: opaque refresh tokens persisted so they can be looked up and revoked.
Fields:
- id (internal autoincrement row id, never exposed)
- token (unique, 64 hex chars)
- user_id (String(36)) - FK to users.id
- expires_at, created_at (naive UTC)
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import Base, utcnow


class RefreshToken(Base):
    __tablename__ = "refresh_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(64), nullable=False, unique=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="refresh_tokens")

    def is_expired(self, now=None) -> bool:
        return self.expires_at < (now or utcnow())

    def __repr__(self):
        return f"<RefreshToken id={self.id} user_id={self.user_id}>"
