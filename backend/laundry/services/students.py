"""
Student Directory - registration and lookup of students.

A student is identified on submission by (name, floor, page). Names are
compared after trimming and lower-casing BOTH sides inside the query, so
"  Asha" registered and "asha " submitted resolve to the same row.

Floor and page values are bound as given; they are not validated as
integers before reaching the database.
"""

from typing import List, Optional

from sqlalchemy import func, false
from sqlalchemy.orm import Session, Query

from laundry import config
from laundry.errors import InvalidRegistration
from laundry.models.student import Student
from laundry.logging_config import get_logger, log_with_context

logger = get_logger("students")


def normalize_name(name) -> str:
    """Trim a submitted name; anything that is not a string becomes ''."""
    return name.strip() if isinstance(name, str) else ""


def _identity_filter(query: Query, name, floor, page) -> Query:
    """Restrict ``query`` to students matching the normalized identity."""
    if floor is None or page is None:
        return query.filter(false())
    return query.filter(
        func.lower(func.trim(Student.name)) == func.lower(func.trim(normalize_name(name))),
        Student.floor_no == floor,
        Student.page_no == page,
    )


def resolve_student(db: Session, name, floor, page) -> Optional[Student]:
    """
    Find the student for a laundry submission.

    Returns the first match by ascending student_id, or None.
    """
    query = _identity_filter(db.query(Student), name, floor, page)
    student = query.order_by(Student.student_id).first()

    if student:
        log_with_context(logger, "DEBUG", "Resolved student: {}".format(student.name),
                         context={"student_id": student.student_id})
    return student


def resolve_student_by_location(db: Session, floor, page) -> Optional[Student]:
    """
    Find a student by floor and page alone.

    Used by last-record retrieval, which does not receive a name. If
    several students share the location the lowest student_id wins.
    """
    if floor is None or page is None:
        return None
    return db.query(Student).filter(
        Student.floor_no == floor,
        Student.page_no == page,
    ).order_by(Student.student_id).first()


def search_students(db: Session, name, floor, page) -> List[Student]:
    """Every student matching the normalized identity; empty list when none do."""
    query = _identity_filter(db.query(Student), name, floor, page)
    return query.order_by(Student.student_id).all()


def _is_missing(value, allow_zero: bool) -> bool:
    if not allow_zero:
        return not value
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def register_student(db: Session, name, floor_no, page_no) -> int:
    """
    Insert a new student and return its generated id.

    The name is stored trimmed but with its original case. No duplicate
    check is made: registering the same data twice creates two students.

    Raises:
        InvalidRegistration: name, floor_no or page_no is missing. By
            default any falsy value counts as missing, so floor 0 is
            rejected; ``REGISTRATION_ALLOW_ZERO`` relaxes that to
            None/blank only.
    """
    allow_zero = config.REGISTRATION_ALLOW_ZERO
    if any(_is_missing(v, allow_zero) for v in (name, floor_no, page_no)):
        raise InvalidRegistration("Missing name, floor_no or page_no")

    student = Student(name=name.strip(), floor_no=floor_no, page_no=page_no)
    db.add(student)
    db.commit()

    log_with_context(logger, "INFO", "Registered student: {}".format(student.name),
                     context={"student_id": student.student_id},
                     extra_data={"floor_no": floor_no, "page_no": page_no})
    return student.student_id
