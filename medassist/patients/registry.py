"""
Patient Registry - Process-lifetime, in-memory store of patient records.

The registry is an explicit object rather than module state so that the
application and each test can hold their own instance.
"""
from typing import List, Optional
from datetime import datetime, timezone
import logging

from ..exceptions import DuplicatePatientException, PatientNotFoundException
from .schemas import Patient, MedicalNote

# Set up logging
logger = logging.getLogger(__name__)

DUPLICATE_POLICIES = ("allow", "reject", "overwrite")
UNKNOWN_PATIENT_POLICIES = ("ignore", "raise")

class PatientRegistry:
    """
    In-memory patient registry.

    Args:
        duplicate_policy: "allow" keeps both entries (lookups return the first),
            "reject" raises DuplicatePatientException, "overwrite" replaces the
            existing entry in place.
        unknown_patient_policy: "ignore" makes append_note a no-op for unknown
            ids, "raise" raises PatientNotFoundException.
    """
    def __init__(self, duplicate_policy: str = "allow", unknown_patient_policy: str = "ignore"):
        if duplicate_policy not in DUPLICATE_POLICIES:
            raise ValueError(f"Unknown duplicate policy: {duplicate_policy}")
        if unknown_patient_policy not in UNKNOWN_PATIENT_POLICIES:
            raise ValueError(f"Unknown patient policy: {unknown_patient_policy}")
        self.duplicate_policy = duplicate_policy
        self.unknown_patient_policy = unknown_patient_policy
        self._patients: List[Patient] = []

    def __len__(self) -> int:
        return len(self._patients)

    def add_patient(self, patient: Patient) -> Patient:
        """
        Add a patient with an empty medical history.

        Args:
            patient: Patient record with a caller-supplied id

        Returns:
            Patient: The stored record

        Raises:
            DuplicatePatientException: If the id exists and the policy is "reject"
        """
        stored = patient.model_copy(update={"medical_history": []}, deep=True)

        existing_index = self._index_of(patient.id)
        if existing_index is not None:
            if self.duplicate_policy == "reject":
                raise DuplicatePatientException(patient.id)
            if self.duplicate_policy == "overwrite":
                self._patients[existing_index] = stored
                logger.info(f"Patient {patient.id} overwritten")
                return stored
            logger.warning(f"Duplicate patient id {patient.id} added")

        self._patients.append(stored)
        logger.info(f"Patient {patient.id} added to registry")
        return stored

    def get_patient_by_id(self, patient_id: str) -> Optional[Patient]:
        """Return the first patient with the given id, or None."""
        index = self._index_of(patient_id)
        return self._patients[index] if index is not None else None

    def list_patients(self) -> List[Patient]:
        """Return all patients in registration order."""
        return list(self._patients)

    def append_note(self, patient_id: str, content: str) -> Optional[MedicalNote]:
        """
        Append a timestamped note to a patient's history.

        Args:
            patient_id: Target patient id
            content: Note text

        Returns:
            MedicalNote: The created note, or None if the patient is unknown
                and the policy is "ignore"

        Raises:
            PatientNotFoundException: If the patient is unknown and the policy is "raise"
        """
        patient = self.get_patient_by_id(patient_id)
        if patient is None:
            if self.unknown_patient_policy == "raise":
                raise PatientNotFoundException(patient_id)
            logger.warning(f"Note for unknown patient {patient_id} ignored")
            return None

        note = MedicalNote(timestamp=datetime.now(timezone.utc), content=content)
        patient.medical_history.append(note)
        return note

    def _index_of(self, patient_id: str) -> Optional[int]:
        for index, patient in enumerate(self._patients):
            if patient.id == patient_id:
                return index
        return None
