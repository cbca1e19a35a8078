"""Category model for grouping a user's tasks."""

from sqlalchemy import Column, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.constants.constants import DEFAULT_CATEGORY_COLOR
from app.models.base import Base, generate_id


class Category(Base):
    """Model representing a colored category owned by a user."""

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_categories_user_name"),
    )
    category_id = Column(String(36), primary_key=True, index=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    color = Column(String(9), nullable=False, default=DEFAULT_CATEGORY_COLOR)
    user = relationship("User", back_populates="categories")
