from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from fileshare.models.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # unique constraint is what stops concurrent duplicate registrations
    username = Column(String(50), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # werkzeug hash, never plaintext

    # One user → many files
    files = relationship("StoredFile", back_populates="owner")
