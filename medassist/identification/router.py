"""
Identification Router - API endpoint for logging patient identification events.
"""
from fastapi import APIRouter, Depends, status

from ..dependencies import get_record_store
from ..core.persistence import RecordStore
from .schemas import IdentificationEventCreate, IdentificationLogResponse
from .service import log_identification_event

router = APIRouter()

@router.post("", response_model=IdentificationLogResponse, status_code=status.HTTP_201_CREATED)
async def create_identification_event(
    event: IdentificationEventCreate,
    store: RecordStore = Depends(get_record_store)
):
    """
    Log when and how a patient was identified (e.g. by face scan)
    """
    return await log_identification_event(store, event)
