# fileshare/models/file.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from fileshare.models.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class StoredFile(Base):
    __tablename__ = "files"

    id = Column(Integer, primary_key=True, index=True)
    original_name = Column(String, nullable=False)   # Name user uploaded
    stored_name = Column(String, nullable=False)     # Blob storage location
    size = Column(Integer, nullable=False, default=0)  # Size in bytes
    code = Column(String(6), nullable=False)         # Download access code, set once
    uploaded_at = Column(DateTime(timezone=True), default=_utcnow)

    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Many files → one owner (User)
    owner = relationship("User", back_populates="files")
