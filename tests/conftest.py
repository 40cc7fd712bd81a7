"""
Test configuration for the MedAssist backend.
"""
import os

# Keep the application's own engine off the filesystem during tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from medassist.database import Base
from medassist.main import app
from medassist.dependencies import get_registry, get_draft_generator, get_record_store, get_token_issuer
from medassist.exceptions import PersistenceException
from medassist.clinical_drafts.generation import DraftGenerator, GenerationBackend
from medassist.core.persistence import RecordStore, SqlAlchemyRecordStore
from medassist.opd.service import OpdTokenIssuer
from medassist.patients.registry import PatientRegistry

# Test database URL
TEST_DATABASE_URL = "sqlite://"

# Create test database engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

JANE_ROE = {
    "name": "Jane Roe",
    "age": 34,
    "gender": "female",
    "bloodGroup": "O+",
    "emergencyContactName": "John Roe",
    "emergencyContactPhone": "+19876543210",
}


class SpyGenerationBackend(GenerationBackend):
    """Generation backend that records every call and returns a fixed output."""
    def __init__(self, output=None, error=None):
        self.output = output
        self.error = error
        self.calls = []

    async def complete(self, kind, instructions, fields):
        self.calls.append({"kind": kind, "instructions": instructions, "fields": fields})
        if self.error is not None:
            raise self.error
        return self.output


class FailingRecordStore(RecordStore):
    """Record store whose writes always fail."""
    async def save_opd_slip(self, slip):
        raise PersistenceException("Could not save OPD slip")

    async def save_identification_event(self, log_id, event):
        raise PersistenceException("Could not save identification event")


@pytest.fixture(scope="function")
def registry():
    """
    Fresh patient registry with the default policies.
    """
    return PatientRegistry()


@pytest.fixture(scope="function")
def spy_backend():
    return SpyGenerationBackend(output={"analysis": "Based on the reported symptoms..."})


@pytest.fixture(scope="function")
def generator(spy_backend):
    return DraftGenerator(spy_backend)


@pytest.fixture(scope="function")
def record_store():
    """
    Record store on a fresh in-memory database for each test.
    """
    Base.metadata.create_all(bind=engine)
    try:
        yield SqlAlchemyRecordStore(TestingSessionLocal)
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db(record_store):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(registry, generator, record_store):
    """
    Create a test client wired to the test registry, generator and store.
    """
    token_issuer = OpdTokenIssuer()

    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_draft_generator] = lambda: generator
    app.dependency_overrides[get_record_store] = lambda: record_store
    app.dependency_overrides[get_token_issuer] = lambda: token_issuer

    with TestClient(app) as client:
        yield client

    app.dependency_overrides = {}
