"""
Student API routes - registration and diagnostic search.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from laundry.database import get_db
from laundry.errors import store_errors
from laundry.services.students import register_student, search_students
from laundry.logging_config import get_logger, log_with_context

router = APIRouter()
logger = get_logger("http")


# ── Pydantic schemas ─────────────────────────────────────────

class RegisterRequest(BaseModel):
    """Registration body. Presence of every field is checked by the service."""
    name: Optional[str] = None
    floor_no: Optional[int] = None
    page_no: Optional[int] = None


class RegisterResponse(BaseModel):
    message: str
    studentId: int


class StudentOut(BaseModel):
    student_id: int
    name: str
    floor_no: int
    page_no: int


@router.post("/api/students/register", response_model=RegisterResponse)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Create a student. Duplicate registrations are not detected."""
    with store_errors(db, "Error registering student.", logger):
        student_id = register_student(db, request.name, request.floor_no, request.page_no)

    return RegisterResponse(message="Student registered", studentId=student_id)


@router.get("/api/students/search", response_model=List[StudentOut])
def search(
    name: Optional[str] = Query(None, description="Name, compared trimmed and case-insensitively"),
    floor: Optional[str] = Query(None, description="Floor number"),
    page: Optional[str] = Query(None, description="Register page number"),
    db: Session = Depends(get_db)
):
    """All students matching name, floor and page. Empty list when nothing matches."""
    with store_errors(db, "Error searching students.", logger):
        students = search_students(db, name, floor, page)

    log_with_context(logger, "DEBUG", "Student search returned {} rows".format(len(students)),
                     extra_data={"name": name, "floor": floor, "page": page})
    return [s.to_dict() for s in students]
