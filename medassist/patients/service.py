"""
Patient Service - Business logic for patient registration and history.

This module provides registration validation, patient creation, note
appending and the emergency admission workflow on top of the registry.
"""
from typing import Any, Dict, Union
from pydantic import ValidationError
import logging
import secrets
import time

from ..exceptions import ValidationException, PatientNotFoundException
from .registry import PatientRegistry
from .schemas import Patient, PatientRegistration, MedicalNote, EmergencyAdmission

# Set up logging
logger = logging.getLogger(__name__)

def validate_registration(data: Union[PatientRegistration, Dict[str, Any]]) -> PatientRegistration:
    """
    Validate a registration request.

    Args:
        data: Raw registration fields (camelCase or snake_case) or an already
            parsed PatientRegistration

    Returns:
        PatientRegistration: The validated request

    Raises:
        ValidationException: With field-level errors if any constraint fails
    """
    if isinstance(data, PatientRegistration):
        return data
    try:
        return PatientRegistration.model_validate(data)
    except ValidationError as e:
        raise ValidationException.from_pydantic(e)

def generate_patient_id() -> str:
    """Generate a patient id of the form patient-<epoch millis>-<6 hex chars>."""
    return f"patient-{int(time.time() * 1000)}-{secrets.token_hex(3)}"

def register_patient(
    registry: PatientRegistry,
    data: Union[PatientRegistration, Dict[str, Any]]
) -> Patient:
    """
    Register a new patient.

    Validation happens before anything is written to the registry, so a
    rejected request leaves it untouched.

    Args:
        registry: Patient registry
        data: Registration request

    Returns:
        Patient: The created patient with an empty medical history

    Raises:
        ValidationException: If the request is invalid
    """
    registration = validate_registration(data)
    patient = Patient(id=generate_patient_id(), **registration.model_dump())
    stored = registry.add_patient(patient)
    logger.info(f"Registered patient {stored.id}")
    return stored

def get_patient_or_404(registry: PatientRegistry, patient_id: str) -> Patient:
    """
    Get a patient by id for callers that require one.

    Raises:
        PatientNotFoundException: If no patient matches
    """
    patient = registry.get_patient_by_id(patient_id)
    if patient is None:
        raise PatientNotFoundException(patient_id)
    return patient

def add_note(registry: PatientRegistry, patient_id: str, content: str) -> MedicalNote:
    """
    Append a note to an existing patient's history.

    Unlike PatientRegistry.append_note this always reports unknown patients.
    """
    get_patient_or_404(registry, patient_id)
    return registry.append_note(patient_id, content)

def format_admission_note(admission: EmergencyAdmission) -> str:
    """Render an emergency admission as a history note."""
    note = f"Emergency admission on {admission.date_time.isoformat()}. Consent given."
    if admission.admission_notes and admission.admission_notes.strip():
        note += f" Notes: {admission.admission_notes.strip()}"
    return note

def admit_emergency(
    registry: PatientRegistry,
    patient_id: str,
    admission: EmergencyAdmission
) -> Patient:
    """
    Record an emergency admission for a registered patient.

    Args:
        registry: Patient registry
        patient_id: Patient being admitted
        admission: Completed admission form

    Returns:
        Patient: The patient with the admission note appended

    Raises:
        PatientNotFoundException: If the patient is not registered
    """
    patient = get_patient_or_404(registry, patient_id)
    registry.append_note(patient_id, format_admission_note(admission))
    logger.info(f"Emergency admission recorded for patient {patient_id}")
    return patient
