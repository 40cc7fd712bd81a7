"""
OPD Service - Generation and storage of Outpatient Department slips.
"""
from typing import FrozenSet, Optional, Set, Union
from datetime import datetime, timezone
from fastapi import status
import logging
import random
import string
import time

from ..config import settings
from ..exceptions import AppException, PersistenceException
from ..patients.schemas import Patient
from .schemas import OpdSlip, OpdSlipIssueResponse, PatientSnapshot

# Set up logging
logger = logging.getLogger(__name__)

def generate_token_number(now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> str:
    """
    Generate an OPD token: OPD-<UTC YYYYMMDD>-<6 random digits>.

    Args:
        now: Generation time (defaults to the current time)
        rng: Random source (defaults to the module-level generator)
    """
    now = now or datetime.now(timezone.utc)
    rng = rng or random
    date_part = now.astimezone(timezone.utc).strftime("%Y%m%d")
    random_part = "".join(rng.choices(string.digits, k=6))
    return f"OPD-{date_part}-{random_part}"

def generate_slip_id(rng: Optional[random.Random] = None) -> str:
    """Generate a slip id: opdslip-<epoch millis>-<6 base36 chars>."""
    rng = rng or random
    suffix = "".join(rng.choices(string.ascii_lowercase + string.digits, k=6))
    return f"opdslip-{int(time.time() * 1000)}-{suffix}"


class OpdTokenIssuer:
    """
    Issues OPD tokens that are unique for the lifetime of the process.

    Draws random tokens and retries on collision with a token already issued.
    Tokens carry their UTC date, so only the current date's tokens are kept.

    Args:
        max_attempts: Draws made before giving up
        rng: Random source
    """
    def __init__(self, max_attempts: int = 20, rng: Optional[random.Random] = None):
        self.max_attempts = max_attempts
        self.rng = rng
        self._issued: Set[str] = set()
        self._issued_date: Optional[str] = None

    @property
    def issued(self) -> FrozenSet[str]:
        """Tokens issued for the current token date."""
        return frozenset(self._issued)

    def issue(self, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        token_date = now.astimezone(timezone.utc).strftime("%Y%m%d")
        if token_date != self._issued_date:
            self._issued.clear()
            self._issued_date = token_date

        for _ in range(self.max_attempts):
            token = generate_token_number(now, self.rng)
            if token not in self._issued:
                self._issued.add(token)
                return token
            logger.warning(f"OPD token collision on {token}, retrying")
        raise AppException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not allocate a unique OPD token"
        )


def _snapshot(patient: Union[Patient, PatientSnapshot]) -> PatientSnapshot:
    gender = patient.gender.value if hasattr(patient.gender, "value") else str(patient.gender)
    return PatientSnapshot(id=patient.id, name=patient.name, age=patient.age, gender=gender)

def generate_opd_slip(
    patient: Union[Patient, PatientSnapshot],
    department: Optional[str] = None,
    doctor_name: Optional[str] = None,
    token_issuer: Optional[OpdTokenIssuer] = None,
    now: Optional[datetime] = None
) -> OpdSlip:
    """
    Generate an OPD slip for a patient.

    Patient details are copied onto the slip; later changes to the patient
    record do not affect it.

    Args:
        patient: Registered patient or patient snapshot
        department: Department (defaults to settings.default_department)
        doctor_name: Attending doctor (optional)
        token_issuer: Token issuer to draw unique tokens from (optional)
        now: Generation time (defaults to the current time)

    Returns:
        OpdSlip: The new slip
    """
    now = now or datetime.now(timezone.utc)
    snapshot = _snapshot(patient)
    token = token_issuer.issue(now) if token_issuer else generate_token_number(now)

    return OpdSlip(
        id=generate_slip_id(),
        patient_id=snapshot.id,
        patient_name=snapshot.name,
        patient_age=snapshot.age,
        patient_gender=snapshot.gender,
        token_number=token,
        slip_date=now,
        department=department or settings.default_department,
        doctor_name=doctor_name,
    )

async def issue_opd_slip(
    store,
    patient: Union[Patient, PatientSnapshot],
    department: Optional[str] = None,
    doctor_name: Optional[str] = None,
    token_issuer: Optional[OpdTokenIssuer] = None
) -> OpdSlipIssueResponse:
    """
    Generate an OPD slip and hand it to the record store.

    A storage failure does not discard the slip: it is returned with
    persisted=False and the error message.

    Args:
        store: RecordStore receiving the slip

    Returns:
        OpdSlipIssueResponse: The slip and the outcome of storing it
    """
    slip = generate_opd_slip(patient, department, doctor_name, token_issuer)
    logger.info(f"Generated OPD slip {slip.id} with token {slip.token_number} for patient {slip.patient_id}")

    try:
        record_id = await store.save_opd_slip(slip)
    except PersistenceException as e:
        logger.error(f"OPD slip {slip.id} was not stored: {e.detail}")
        return OpdSlipIssueResponse(slip=slip, persisted=False, persistence_error=e.detail)

    return OpdSlipIssueResponse(slip=slip, record_id=record_id, persisted=True)
