"""
Laundry Service - drop-off submission, last-record lookup and pickup confirmation.

Submission runs three dependent steps:
1. Resolve the student by normalized (name, floor, page)
2. Insert a Laundry_Records row dated CURRENT_DATE by the database
3. Batch-insert one Laundry_Record_Details row per garment kind with quantity > 0

Steps 2 and 3 commit separately unless ATOMIC_SUBMISSIONS is set, so a
failure in step 3 can leave a record without details. The client-supplied
total is stored as-is and never reconciled with the details.
"""

import math
import time
from datetime import date, datetime
from typing import Dict, List, Optional

from sqlalchemy import func, insert
from sqlalchemy.orm import Session

from laundry import config
from laundry.errors import StudentNotFound, RecordNotFound
from laundry.models.laundry_record import LaundryRecord
from laundry.models.laundry_record_detail import LaundryRecordDetail, ItemKind
from laundry.services.students import (
    normalize_name, resolve_student, resolve_student_by_location
)
from laundry.logging_config import get_logger, log_with_context

logger = get_logger("laundry")


def parse_number(value):
    """
    Parse an int, float or numeric string.

    Integral values come back as int, others as float. Returns None for
    None, blank, non-numeric or non-finite input.
    """
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def coerce_quantity(value):
    """A submitted quantity as a number; missing or non-numeric counts as 0."""
    number = parse_number(value)
    return 0 if number is None else number


def whole_quantity(number) -> int:
    """
    Round a positive quantity to whole garments, halves away from zero.

    Never below 1, so a staged row always stores a positive quantity.
    """
    return max(1, int(math.floor(number + 0.5)))


def build_detail_rows(record_id: int, quantities: Dict[str, object]) -> List[dict]:
    """Stage detail rows for every garment kind with a quantity above zero."""
    rows = []
    for kind in ItemKind:
        number = coerce_quantity(quantities.get(kind.field))
        if number > 0:
            rows.append({"record_id": record_id, "item_id": int(kind),
                         "quantity": whole_quantity(number)})
    return rows


def expand_breakdown(details) -> Dict[str, int]:
    """Map detail rows back onto all four garment fields, defaulting to 0."""
    breakdown = {kind.field: 0 for kind in ItemKind}
    for detail in details:
        kind = ItemKind.from_id(detail.item_id)
        if kind is not None:
            breakdown[kind.field] = int(detail.quantity)
    return breakdown


def _format_date(value) -> Optional[str]:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value) if value is not None else None


def submit_laundry(db: Session, name, floor, page_no,
                   quantities: Dict[str, object], total) -> int:
    """
    Record a drop-off and return the new record_id.

    Raises:
        StudentNotFound: no student matches (name, floor, page_no); the
            error carries the search key. Nothing is written in that case.
    """
    start_time = time.time()

    student = resolve_student(db, name, floor, page_no)
    if not student:
        searched = {"name": normalize_name(name), "floor": floor, "page_no": page_no}
        log_with_context(logger, "WARNING", "Submission for unknown student",
                         extra_data={"searched": searched})
        raise StudentNotFound("Student not found! Please register first.", searched=searched)

    record = LaundryRecord(
        student_id=student.student_id,
        date_given=func.current_date(),
        total_clothes=total,
        is_collected=False,
    )
    db.add(record)
    db.flush()
    record_id = record.record_id

    if not config.ATOMIC_SUBMISSIONS:
        db.commit()

    rows = build_detail_rows(record_id, quantities)
    if rows:
        db.execute(insert(LaundryRecordDetail), rows)
    db.commit()

    duration_ms = (time.time() - start_time) * 1000
    log_with_context(logger, "INFO",
        "Laundry record {} created with {} item lines".format(record_id, len(rows)),
        context={"student_id": student.student_id, "record_id": record_id},
        extra_data={"total_clothes": total, "duration_ms": round(duration_ms, 2)})

    return record_id


def get_last_record(db: Session, floor, page_no) -> Optional[dict]:
    """
    Latest laundry record for the student at (floor, page_no).

    The student is found by location only, not by name, and floor/page are
    bound as received. They are echoed back parsed as numbers. Returns None
    when the student exists but has never submitted anything.

    Raises:
        StudentNotFound: nobody is registered at that floor and page.
    """
    student = resolve_student_by_location(db, floor, page_no)
    if not student:
        raise StudentNotFound()

    # Highest record_id is treated as most recent
    record = db.query(LaundryRecord).filter(
        LaundryRecord.student_id == student.student_id
    ).order_by(LaundryRecord.record_id.desc()).first()

    if record is None:
        return None

    details = db.query(LaundryRecordDetail).filter(
        LaundryRecordDetail.record_id == record.record_id
    ).all()

    return {
        "record_id": record.record_id,
        "name": student.name,
        "floor": parse_number(floor),
        "page_no": parse_number(page_no),
        "given_date": _format_date(record.date_given),
        "total": record.total_clothes,
        "confirmed": bool(record.is_collected),
        **expand_breakdown(details),
    }


def confirm_collection(db: Session, record_id):
    """
    Mark a record as collected and return its id parsed as a number.

    ``record_id`` is bound as received, so a non-numeric id simply matches
    nothing. Already-collected records are accepted and reported the same
    way.

    Raises:
        RecordNotFound: no record has that id.
    """
    updated = db.query(LaundryRecord).filter(
        LaundryRecord.record_id == record_id
    ).update({LaundryRecord.is_collected: True}, synchronize_session=False)
    db.commit()

    if updated == 0:
        raise RecordNotFound()

    log_with_context(logger, "INFO", "Collection confirmed for record {}".format(record_id),
                     context={"record_id": record_id})
    return parse_number(record_id)
