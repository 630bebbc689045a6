from sqlalchemy import JSON, Column, String

from app.models.base import Base


class KVEntry(Base):
    __tablename__ = "kv_store"

    key = Column(String, primary_key=True)
    value = Column(JSON, nullable=False)
