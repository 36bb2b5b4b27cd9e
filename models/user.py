from models.base_model import Base, BaseModel
from sqlalchemy import Column, String, Text, JSON
from sqlalchemy.orm import relationship


class User(BaseModel, Base):
    """Account. Email is unique and compared exactly as stored."""
    __tablename__ = "users"
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    bio = Column(Text, nullable=False, default="")
    preferences = Column(JSON, nullable=False, default=dict)

    refresh_tokens = relationship(
        "RefreshToken",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    todos = relationship(
        "Todo",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def password(self):
        raise AttributeError("Password: Write-only field")
