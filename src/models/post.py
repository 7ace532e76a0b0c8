"""Post model."""

import uuid

from sqlalchemy import Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Post(Base, TimestampMixin):
    """A post owned by exactly one user for its whole lifetime."""

    __tablename__ = "posts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="posts")
