"""
Tests for the in-memory patient registry.
"""
import pytest

from medassist.exceptions import DuplicatePatientException, PatientNotFoundException
from medassist.patients.registry import PatientRegistry
from medassist.patients.schemas import Patient, MedicalNote


def make_patient(patient_id="patient-1", name="Jane Roe", **overrides):
    data = {
        "id": patient_id,
        "name": name,
        "age": 34,
        "gender": "female",
        "blood_group": "O+",
        "emergency_contact_name": "John Roe",
        "emergency_contact_phone": "+19876543210",
    }
    data.update(overrides)
    return Patient(**data)


def test_add_then_get_returns_equal_record(registry):
    patient = make_patient()
    registry.add_patient(patient)

    stored = registry.get_patient_by_id("patient-1")
    assert stored.model_dump() == patient.model_dump()
    assert stored.medical_history == []
    assert stored is not patient


def test_add_resets_history(registry):
    from datetime import datetime, timezone
    note = MedicalNote(timestamp=datetime.now(timezone.utc), content="old")
    registry.add_patient(make_patient(medical_history=[note]))

    assert registry.get_patient_by_id("patient-1").medical_history == []


def test_get_unknown_patient_returns_none(registry):
    assert registry.get_patient_by_id("missing") is None


def test_append_note_adds_exactly_one_note(registry):
    registry.add_patient(make_patient("patient-1"))
    registry.add_patient(make_patient("patient-2", name="John Roe"))
    registry.append_note("patient-2", "existing")

    note = registry.append_note("patient-1", "text")

    assert note.content == "text"
    assert note.timestamp.tzinfo is not None
    assert len(registry.get_patient_by_id("patient-1").medical_history) == 1
    assert [n.content for n in registry.get_patient_by_id("patient-2").medical_history] == ["existing"]


def test_notes_keep_insertion_order(registry):
    registry.add_patient(make_patient())
    for content in ("first", "second", "third"):
        registry.append_note("patient-1", content)

    history = registry.get_patient_by_id("patient-1").medical_history
    assert [n.content for n in history] == ["first", "second", "third"]


def test_append_note_to_unknown_patient_is_ignored_by_default(registry):
    registry.add_patient(make_patient())

    assert registry.append_note("missing", "text") is None
    assert registry.get_patient_by_id("patient-1").medical_history == []


def test_append_note_to_unknown_patient_can_raise():
    registry = PatientRegistry(unknown_patient_policy="raise")
    with pytest.raises(PatientNotFoundException):
        registry.append_note("missing", "text")


def test_duplicate_ids_allowed_by_default(registry):
    registry.add_patient(make_patient(name="First"))
    registry.add_patient(make_patient(name="Second"))

    assert len(registry) == 2
    assert registry.get_patient_by_id("patient-1").name == "First"


def test_duplicate_ids_rejected():
    registry = PatientRegistry(duplicate_policy="reject")
    registry.add_patient(make_patient(name="First"))

    with pytest.raises(DuplicatePatientException):
        registry.add_patient(make_patient(name="Second"))
    assert len(registry) == 1


def test_duplicate_ids_overwrite():
    registry = PatientRegistry(duplicate_policy="overwrite")
    registry.add_patient(make_patient(name="First"))
    registry.append_note("patient-1", "note")
    registry.add_patient(make_patient(name="Second"))

    assert len(registry) == 1
    stored = registry.get_patient_by_id("patient-1")
    assert stored.name == "Second"
    assert stored.medical_history == []


def test_list_patients_in_registration_order(registry):
    for index in range(3):
        registry.add_patient(make_patient(f"patient-{index}"))
    assert [p.id for p in registry.list_patients()] == ["patient-0", "patient-1", "patient-2"]


@pytest.mark.parametrize("kwargs", [{"duplicate_policy": "merge"}, {"unknown_patient_policy": "create"}])
def test_unknown_policy_names_are_rejected(kwargs):
    with pytest.raises(ValueError):
        PatientRegistry(**kwargs)
