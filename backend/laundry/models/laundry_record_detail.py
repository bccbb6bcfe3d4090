"""
LaundryRecordDetail model - itemized quantities attached to a record.

Item kinds are a fixed enumeration (``ItemKind``) shared by the submission
and retrieval paths; there is no lookup table behind ``item_id``.
"""

import enum
from typing import Optional

from sqlalchemy import Column, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship
from laundry.database import Base


class ItemKind(enum.IntEnum):
    """Garment kinds, valued by their persisted ``item_id``."""

    TSHIRT = 1
    SHIRT = 2
    PANT = 3
    BEDSHEET = 4

    @property
    def field(self) -> str:
        """Name of the request/response field carrying this kind's quantity."""
        return self.name.lower()

    @classmethod
    def from_id(cls, item_id) -> Optional["ItemKind"]:
        try:
            return cls(int(item_id))
        except (TypeError, ValueError):
            return None


class LaundryRecordDetail(Base):
    """
    SQLAlchemy model for the Laundry_Record_Details table.

    Only quantities greater than zero are stored. (record_id, item_id) is
    not unique at the database level.
    """
    __tablename__ = "Laundry_Record_Details"

    detail_id = Column(Integer, primary_key=True, autoincrement=True)
    record_id = Column(Integer, ForeignKey("Laundry_Records.record_id"), nullable=False,
                       doc="Owning laundry record")
    item_id = Column(Integer, nullable=False,
                     doc="ItemKind value: 1=tshirt, 2=shirt, 3=pant, 4=bedsheet")
    quantity = Column(Integer, nullable=False,
                      doc="Number of garments of this kind, always > 0")

    record = relationship("LaundryRecord", back_populates="details")

    __table_args__ = (
        Index("ix_laundry_record_details_record_id", "record_id"),
    )

    def __repr__(self):
        return f"<LaundryRecordDetail(record={self.record_id}, item={self.item_id}, qty={self.quantity})>"
