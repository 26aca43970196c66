# models/storage_slot.py
from __future__ import annotations
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, String, Text

from core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StorageSlot(Base):
    """One named blob of JSON. The whole session collection lives in a single slot."""

    __tablename__ = "storage_slots"

    name = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
