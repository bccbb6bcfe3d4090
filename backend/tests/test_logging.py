import json
import logging
import sys

from laundry.logging_config import (
    StructuredJsonFormatter, channel_of, get_logger, log_with_context, request_id_var,
)
from laundry.services.laundry import submit_laundry
from laundry.services.students import register_student


def test_formatter_emits_channel_and_request_id():
    record = logging.LogRecord("laundry.db", logging.INFO, __file__, 1, "saved %s", ("row",), None)
    record.context = {"record_id": 7}
    record.extra_data = {"duration_ms": 1.5}

    token = request_id_var.set("req-123")
    try:
        entry = json.loads(StructuredJsonFormatter().format(record))
    finally:
        request_id_var.reset(token)

    assert entry["message"] == "saved row"
    assert entry["level"] == "INFO"
    assert entry["channel"] == "db"
    assert entry["context"] == {"request_id": "req-123", "record_id": 7}
    assert entry["extra"] == {"duration_ms": 1.5}
    assert entry["timestamp"].endswith("Z")


def test_log_with_context_attaches_fields(caplog):
    logger = get_logger("students")
    with caplog.at_level(logging.INFO, logger="laundry.students"):
        log_with_context(logger, "warning", "odd input", context={"student_id": 3})

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert record.channel == "students"
    assert record.context == {"student_id": 3}


def test_submission_is_logged_with_record_id(db, caplog):
    register_student(db, "Asha", 2, 5)
    with caplog.at_level(logging.INFO, logger="laundry.laundry"):
        record_id = submit_laundry(db, "Asha", 2, 5, {"tshirt": 1}, 1)

    created = [r for r in caplog.records if r.name == "laundry.laundry" and "created" in r.getMessage()]
    assert created and created[-1].context["record_id"] == record_id


def test_channel_of_logger_names():
    assert channel_of("laundry.http") == "http"
    assert channel_of("laundry") == "app"
    assert channel_of("uvicorn.error") == "app"


def test_formatter_includes_exception_text():
    try:
        raise RuntimeError("pool exhausted")
    except RuntimeError:
        record = logging.LogRecord("laundry.db", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

    entry = json.loads(StructuredJsonFormatter().format(record))
    assert entry["channel"] == "db"
    assert entry["context"] == {"request_id": ""}
    assert "RuntimeError: pool exhausted" in entry["exception"]
