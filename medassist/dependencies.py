"""
Shared FastAPI dependencies.

The registry, draft generator and record store live on app.state so that a
single instance is shared by all requests; tests replace them through
app.dependency_overrides.
"""
from fastapi import Request

from .patients.registry import PatientRegistry
from .clinical_drafts.generation import DraftGenerator
from .opd.service import OpdTokenIssuer
from .core.persistence import RecordStore

def get_registry(request: Request) -> PatientRegistry:
    """Patient registry dependency"""
    return request.app.state.registry

def get_draft_generator(request: Request) -> DraftGenerator:
    """Draft generation adapter dependency"""
    return request.app.state.draft_generator

def get_record_store(request: Request) -> RecordStore:
    """Persistence collaborator dependency"""
    return request.app.state.record_store

def get_token_issuer(request: Request) -> OpdTokenIssuer:
    """OPD token issuer dependency"""
    return request.app.state.token_issuer
