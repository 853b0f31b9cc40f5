"""Stored file model."""

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from filevault.database import Base
from filevault.models.mixins import utcnow


class StoredFile(Base):
    """Catalog entry for one uploaded file.

    The bytes live on disk at ``location``; this row is the only record tying
    them to their owner. Rows are inserted and deleted, never updated.
    """

    __tablename__ = "stored_files"

    id = Column(Integer, primary_key=True, index=True)
    storage_name = Column(String(255), nullable=False)
    original_name = Column(String(255), nullable=False)  # client-supplied, display only
    content_type = Column(String(100), nullable=False)
    size = Column(BigInteger, nullable=False)
    location = Column(String(500), nullable=False)
    # Set in Python so rows uploaded within the same second still sort by recency
    uploaded_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    owner_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    owner = relationship("User", back_populates="files")
