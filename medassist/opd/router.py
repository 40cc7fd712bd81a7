"""
OPD Router - API endpoint for issuing Outpatient Department slips.
"""
from fastapi import APIRouter, Depends, status

from ..dependencies import get_record_store, get_token_issuer
from ..core.persistence import RecordStore
from .schemas import GenerateOpdSlipRequest, OpdSlipIssueResponse
from .service import OpdTokenIssuer, issue_opd_slip

router = APIRouter()

@router.post("", response_model=OpdSlipIssueResponse, status_code=status.HTTP_201_CREATED)
async def create_opd_slip(
    request: GenerateOpdSlipRequest,
    store: RecordStore = Depends(get_record_store),
    token_issuer: OpdTokenIssuer = Depends(get_token_issuer)
):
    """
    Generate an OPD slip for a patient and store it

    The slip is returned even if it could not be stored; check `persisted`.
    """
    return await issue_opd_slip(
        store,
        request.patient,
        department=request.department,
        doctor_name=request.doctor_name,
        token_issuer=token_issuer
    )
