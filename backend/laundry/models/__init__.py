from laundry.models.student import Student
from laundry.models.laundry_record import LaundryRecord
from laundry.models.laundry_record_detail import LaundryRecordDetail, ItemKind

__all__ = ["Student", "LaundryRecord", "LaundryRecordDetail", "ItemKind"]
