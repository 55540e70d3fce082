from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime

from nutrifit.core.base import Base


def _utcnow():
    return datetime.now(timezone.utc)


class StorageItem(Base):
    __tablename__ = "storage_items"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
