"""User model for the Task Board system."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin, generate_id


class User(Base, TimestampMixin):
    """Account owning tasks, categories and tags."""

    __tablename__ = "users"
    user_id = Column(String(36), primary_key=True, index=True, default=generate_id)
    username = Column(String(100), nullable=False)
    # stored trimmed and lower-cased so the unique index is case-insensitive
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    tasks = relationship("Task", back_populates="user", passive_deletes=True)
    categories = relationship("Category", back_populates="user", passive_deletes=True)
    tags = relationship("Tag", back_populates="user", passive_deletes=True)
