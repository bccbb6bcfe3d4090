"""
Student model - a resident who hands in laundry.

Students are looked up by name, floor and page number. Nothing stops two
registrations from sharing that tuple; lookups take the lowest student_id.
"""

from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import relationship
from laundry.database import Base


class Student(Base):
    """SQLAlchemy model for the Students table."""
    __tablename__ = "Students"

    student_id = Column(Integer, primary_key=True, autoincrement=True,
                        doc="Generated student identifier")
    name = Column(Text, nullable=False,
                  doc="Name as registered (trimmed, original case)")
    floor_no = Column(Integer, nullable=False,
                      doc="Hostel floor number")
    page_no = Column(Integer, nullable=False,
                     doc="Page number in the floor's laundry register")

    # Relationship: one student has many laundry records
    records = relationship("LaundryRecord", back_populates="student")

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "name": self.name,
            "floor_no": self.floor_no,
            "page_no": self.page_no,
        }

    def __repr__(self):
        return f"<Student(id={self.student_id}, name='{self.name}', floor={self.floor_no}, page={self.page_no})>"
