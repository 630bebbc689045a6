from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, String

from app.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    """Identity-provider account. Profile data lives in ``user_metadata``."""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    email = Column(String, unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
    user_metadata = Column(JSON, default=dict)
    email_confirmed = Column(Boolean, default=False)
    created_at = Column(DateTime, default=_utcnow)
    last_sign_in_at = Column(DateTime, nullable=True)
