"""
Campus Laundry Tracker - FastAPI application entry point.

This module:
1. Sets up structured JSON logging
2. Adds CORS and request ID middleware (X-Request-ID header)
3. Renders service and validation errors as JSON bodies with a ``message`` key
4. Registers the student and laundry routers
5. Serves the plain-text banner at / and a health check at /health

Run locally with ``python -m laundry.main`` (listens on PORT, default 5000).
"""

import time
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from laundry.config import CORS_ORIGINS, PORT
from laundry.logging_config import (
    setup_logging, get_logger, log_with_context,
    request_id_var, generate_request_id
)
from laundry.errors import LaundryError
from laundry.routes import students, laundry
from laundry.database import create_tables, is_sqlite

# Import all models so they are registered with Base.metadata
from laundry.models import Student, LaundryRecord, LaundryRecordDetail

setup_logging()
logger = get_logger("http")

# Server databases are migrated with Alembic
if is_sqlite():
    logger.info("Using SQLite, creating tables directly")
    create_tables()

app = FastAPI(
    title="Campus Laundry Tracker",
    description=(
        "Records laundry drop-offs per student with an itemized garment "
        "breakdown and tracks when the clothes are collected."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"]
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Tag the request with a UUID, echo it in X-Request-ID and log latency."""
    req_id = generate_request_id()
    request_id_var.set(req_id)
    start_time = time.time()

    log_with_context(logger, "INFO",
        f"Request started: {request.method} {request.url.path}",
        context={"request_id": req_id},
        extra_data={
            "ip": request.client.host if request.client else "unknown",
            "query_params": dict(request.query_params)
        })

    response = await call_next(request)

    duration_ms = (time.time() - start_time) * 1000
    response.headers["X-Request-ID"] = req_id

    log_with_context(logger, "INFO",
        f"Request completed: {request.method} {request.url.path} → {response.status_code}",
        context={"request_id": req_id},
        extra_data={
            "duration_ms": round(duration_ms, 2),
            "status_code": response.status_code
        })

    return response


@app.exception_handler(LaundryError)
async def laundry_error_handler(request: Request, exc: LaundryError):
    if exc.status_code < 500:
        log_with_context(logger, "WARNING", exc.message,
                         extra_data={"path": request.url.path, "status_code": exc.status_code})
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Registration promises 400 for bad input; other routes keep 422
VALIDATION_STATUS_BY_PATH = {"/api/students/register": 400}


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    status_code = VALIDATION_STATUS_BY_PATH.get(request.url.path, 422)
    errors = jsonable_encoder(exc.errors())
    log_with_context(logger, "WARNING", "Request validation failed",
                     extra_data={"path": request.url.path, "errors": errors})
    return JSONResponse(
        status_code=status_code,
        content={"message": "Invalid request data.", "errors": errors},
    )


app.include_router(students.router, tags=["Students"])
app.include_router(laundry.router, tags=["Laundry"])


@app.get("/health", tags=["Health"])
def health_check():
    return {"status": "healthy", "service": "laundry-backend", "version": "1.0.0"}


@app.get("/", tags=["Root"], response_class=PlainTextResponse)
def root():
    return "Laundry Management API is running. Use /api for endpoints."


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=PORT)
