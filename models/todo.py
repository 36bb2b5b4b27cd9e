from sqlalchemy import Column, String, Text, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class Todo(BaseModel, Base):
    __tablename__ = "todos"

    # Owner; every lookup filters on it together with the todo id
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    completed = Column(Boolean, nullable=False, default=False)

    user = relationship("User", back_populates="todos")

    __table_args__ = (
        Index("ix_todos_user_id", "user_id"),
    )
