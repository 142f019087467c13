"""Application-side user record mirroring an identity-service account."""
import enum

from sqlalchemy import Column, DateTime, String, Uuid, func

from hydromon.database import Base


class Role(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


class UserProfile(Base):
    __tablename__ = "profiles"

    # Same id as the identity-service user
    id = Column(Uuid, primary_key=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(String(20), nullable=False, default=Role.USER.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
