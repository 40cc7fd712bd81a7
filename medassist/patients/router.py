"""
Patient Router - API endpoints for patient registration and history.
"""
from fastapi import APIRouter, Depends, status

from ..dependencies import get_registry
from .registry import PatientRegistry
from .schemas import (
    Patient,
    PatientRegistration,
    PatientListResponse,
    MedicalNote,
    NoteCreate,
    EmergencyAdmission
)
from .service import register_patient, get_patient_or_404, add_note, admit_emergency

router = APIRouter()

@router.post("/register", response_model=Patient, status_code=status.HTTP_201_CREATED)
async def register(
    registration: PatientRegistration,
    registry: PatientRegistry = Depends(get_registry)
):
    """
    Register a new patient

    The created patient gets a generated id and an empty medical history.
    """
    return register_patient(registry, registration)

@router.get("", response_model=PatientListResponse)
async def list_patients(registry: PatientRegistry = Depends(get_registry)):
    """
    Get every registered patient in registration order
    """
    patients = registry.list_patients()
    return PatientListResponse(patients=patients, total=len(patients))

@router.get("/{patient_id}", response_model=Patient)
async def get_patient(patient_id: str, registry: PatientRegistry = Depends(get_registry)):
    """
    Get a patient by ID
    """
    return get_patient_or_404(registry, patient_id)

@router.post("/{patient_id}/notes", response_model=MedicalNote, status_code=status.HTTP_201_CREATED)
async def create_note(
    patient_id: str,
    note: NoteCreate,
    registry: PatientRegistry = Depends(get_registry)
):
    """
    Append a note to a patient's medical history
    """
    return add_note(registry, patient_id, note.content)

@router.post("/{patient_id}/emergency-admission", response_model=Patient)
async def emergency_admission(
    patient_id: str,
    admission: EmergencyAdmission,
    registry: PatientRegistry = Depends(get_registry)
):
    """
    Record a completed emergency admission/consent form

    The admission is added to the patient's medical history.
    """
    return admit_emergency(registry, patient_id, admission)
