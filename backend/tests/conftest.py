import os
import tempfile

# Must be set before anything from laundry is imported
_TEST_DIR = tempfile.mkdtemp(prefix="laundry-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TEST_DIR, "laundry-test.db")

import pytest
from fastapi.testclient import TestClient

from laundry.database import SessionLocal, create_tables, drop_tables
from laundry.main import app


@pytest.fixture(autouse=True)
def fresh_tables():
    drop_tables()
    create_tables()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
