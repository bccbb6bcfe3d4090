"""
LaundryRecord model - one drop-off event for one student.

``date_given`` is filled by the database (CURRENT_DATE) at insert time.
``total_clothes`` is whatever the client sent; it is never recomputed from
the detail rows, so the two can disagree.
"""

from sqlalchemy import Column, Integer, Date, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship
from laundry.database import Base


class LaundryRecord(Base):
    """
    SQLAlchemy model for the Laundry_Records table.

    ``is_collected`` moves from False to True when the student confirms
    pickup. Confirming again is allowed and changes nothing.
    """
    __tablename__ = "Laundry_Records"

    record_id = Column(Integer, primary_key=True, autoincrement=True,
                       doc="Generated, monotonically increasing record identifier")
    student_id = Column(Integer, ForeignKey("Students.student_id"), nullable=False,
                        doc="Owner of this drop-off")
    date_given = Column(Date, nullable=False,
                        doc="Calendar date the clothes were handed in")
    total_clothes = Column(Integer, nullable=True,
                           doc="Client-supplied total garment count")
    is_collected = Column(Boolean, nullable=False, default=False,
                          doc="Whether the student has picked the clothes up")

    student = relationship("Student", back_populates="records")
    details = relationship("LaundryRecordDetail", back_populates="record")

    __table_args__ = (
        Index("ix_laundry_records_student_id", "student_id"),
    )

    def __repr__(self):
        return f"<LaundryRecord(id={self.record_id}, student={self.student_id}, collected={self.is_collected})>"
