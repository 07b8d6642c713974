"""
Parcel database model.

One row per shipment tracked by the store.
"""

from sqlalchemy import Column, Integer, String
from parcel_tracker.app.db.session import Base

# SQLite INTEGER range; numbers and clients outside it cannot be stored
INT64_MIN = -2**63
INT64_MAX = 2**63 - 1


class Parcel(Base):
    """
    Parcel table.

    ``created_at`` is kept as the caller-supplied RFC3339 string and
    ``status`` is an opaque label; neither is interpreted here.
    """
    __tablename__ = "parcel"
    # AUTOINCREMENT so deleted numbers are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    number = Column(Integer, primary_key=True, autoincrement=True)
    client = Column(Integer, nullable=False, index=True)
    status = Column(String, nullable=False)
    address = Column(String, nullable=False)
    created_at = Column(String, nullable=False)

    def __repr__(self):
        return f"<Parcel(number={self.number}, client={self.client}, status='{self.status}')>"
