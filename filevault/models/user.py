"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from filevault.database import Base
from filevault.models.mixins import CreatedAtMixin


class User(Base, CreatedAtMixin):
    """User model for authentication and file ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Relationships
    files = relationship("StoredFile", back_populates="owner", cascade="all, delete-orphan")
