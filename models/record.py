# models/record.py

from sqlalchemy import Column, String, Text, DateTime
from core.database import Base
from core.time_utils import now_utc


class StoredRecord(Base):
    """One key of the key-value medium: a whole collection serialized as JSON."""

    __tablename__ = "kv_store"

    # Physical key, e.g. dentalPatients
    key = Column(String, primary_key=True)

    value = Column(Text, nullable=False)

    updated_at = Column(DateTime, default=now_utc, onupdate=now_utc)

    def __repr__(self):
        return f"<StoredRecord {self.key} ({len(self.value or '')} chars)>"
