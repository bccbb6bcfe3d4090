"""
Error types raised by the service layer and rendered by the API.

Each error knows its HTTP status and the ``message`` shown to the
client. ``payload`` holds any extra keys merged into the JSON body.
"""

from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from laundry.logging_config import log_with_context


class LaundryError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500

    def __init__(self, message: str, **payload):
        super().__init__(message)
        self.message = message
        self.payload = payload

    def to_dict(self) -> dict:
        return {"message": self.message, **self.payload}


class InvalidRegistration(LaundryError):
    status_code = 400


class StudentNotFound(LaundryError):
    """No student matched the lookup key; ``searched`` echoes that key when given."""

    status_code = 404

    def __init__(self, message: str = "Student not found!", searched: dict = None):
        if searched is None:
            super().__init__(message)
        else:
            super().__init__(message, searched=searched)


class RecordNotFound(LaundryError):
    status_code = 404

    def __init__(self, message: str = "Record not found!"):
        super().__init__(message)


class StoreError(LaundryError):
    """
    A database operation failed.

    Only the stable message and error code reach the client; the driver
    error is logged server side by whoever raises this.
    """

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, error="store_error")


@contextmanager
def store_errors(db, message: str, logger):
    """
    Turn a SQLAlchemy failure inside the block into a StoreError.

    The session is rolled back and the driver error is logged with its
    traceback before the client-safe error is raised.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        log_with_context(logger, "ERROR", "{} {}".format(message, exc),
                         extra_data={"error": str(exc)}, exc_info=True)
        raise StoreError(message) from exc
