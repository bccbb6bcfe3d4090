"""
Laundry API routes - drop-off, last record and pickup confirmation.

Provides endpoints for:
- Submitting clothes for a registered student (POST /api/give)
- Fetching the latest record for a floor/page (GET /api/last/{floor}/{page_no})
- Confirming that a record was collected (PUT /api/confirm/{record_id})
"""

from typing import Optional, Union
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from laundry.database import get_db
from laundry.errors import store_errors
from laundry.models.laundry_record_detail import ItemKind
from laundry.services.laundry import submit_laundry, get_last_record, confirm_collection
from laundry.logging_config import get_logger, log_with_context

router = APIRouter()
logger = get_logger("http")

ITEM_FIELDS = {kind.field for kind in ItemKind}

Scalar = Optional[Union[int, float, str]]
Number = Union[int, float]


# ── Pydantic schemas ─────────────────────────────────────────

class GiveRequest(BaseModel):
    """Body of a drop-off submission. Floor and page pass through unvalidated."""
    name: Optional[str] = Field(None, description="Student name; case and surrounding spaces are ignored")
    floor: Scalar = Field(None, description="Floor number")
    page_no: Scalar = Field(None, description="Register page number")
    tshirt: Scalar = None
    shirt: Scalar = None
    pant: Scalar = None
    bedsheet: Scalar = None
    total: Optional[int] = Field(None, description="Total garment count as counted by the client")


class GiveResponse(BaseModel):
    message: str
    recordId: int


class LastRecordView(BaseModel):
    """Flat view of a student's latest laundry record."""
    record_id: int
    name: str
    floor: Optional[Number]
    page_no: Optional[Number]
    given_date: Optional[str]
    total: Optional[int]
    confirmed: bool
    tshirt: int
    shirt: int
    pant: int
    bedsheet: int


class ConfirmResponse(BaseModel):
    message: str
    recordId: Number
    confirmed: bool


@router.post("/api/give", response_model=GiveResponse)
def give_clothes(request: GiveRequest, db: Session = Depends(get_db)):
    """Record clothes handed in by a registered student."""
    log_with_context(logger, "INFO", "Received laundry submission",
                     extra_data={"payload": request.model_dump()})

    with store_errors(db, "Error adding clothes record.", logger):
        record_id = submit_laundry(
            db,
            request.name,
            request.floor,
            request.page_no,
            request.model_dump(include=ITEM_FIELDS),
            request.total,
        )

    return GiveResponse(message="Clothes submitted successfully!", recordId=record_id)


@router.get("/api/last/{floor}/{page_no}", response_model=Optional[LastRecordView])
def last_record(floor: str, page_no: str, db: Session = Depends(get_db)):
    """Latest record for the student at this floor and page, or null if none yet."""
    with store_errors(db, "Error fetching last record.", logger):
        return get_last_record(db, floor, page_no)


@router.put("/api/confirm/{record_id}", response_model=ConfirmResponse)
def confirm(record_id: str, db: Session = Depends(get_db)):
    """Mark a record as collected. Repeating the call succeeds again."""
    with store_errors(db, "Error confirming collection.", logger):
        confirmed_id = confirm_collection(db, record_id)

    return ConfirmResponse(message="Collection confirmed!", recordId=confirmed_id, confirmed=True)
