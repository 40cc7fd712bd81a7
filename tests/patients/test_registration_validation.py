"""
Tests for patient registration validation.
"""
import pytest

from medassist.exceptions import ValidationException
from medassist.patients.schemas import Gender
from medassist.patients.service import validate_registration, register_patient

from ..conftest import JANE_ROE


def _with(**overrides):
    data = dict(JANE_ROE)
    data.update(overrides)
    return data


def _error_fields(exc_info):
    return {error["field"] for error in exc_info.value.errors}


def test_valid_registration_is_accepted():
    registration = validate_registration(JANE_ROE)
    assert registration.name == "Jane Roe"
    assert registration.age == 34
    assert registration.gender == Gender.FEMALE
    assert registration.blood_group == "O+"
    assert registration.allergies == ""
    assert registration.medical_conditions == ""


def test_snake_case_fields_are_accepted():
    registration = validate_registration({
        "name": "Jane Roe",
        "age": 34,
        "gender": "female",
        "blood_group": "O+",
        "emergency_contact_name": "John Roe",
        "emergency_contact_phone": "+19876543210",
    })
    assert registration.emergency_contact_phone == "+19876543210"


@pytest.mark.parametrize("age", [0, -1, -34, 34.5, "thirty", None, True, False])
def test_invalid_age_is_rejected(age, registry):
    with pytest.raises(ValidationException) as exc_info:
        register_patient(registry, _with(age=age))
    assert "age" in _error_fields(exc_info)
    assert len(registry) == 0


@pytest.mark.parametrize("phone", [
    "",
    "1",
    "0123456789",
    "+0123456789",
    "12345678901234567",
    "+1 987 654 3210",
    "+1-987-654-3210",
    "phone",
    "++19876543210",
])
def test_invalid_phone_is_rejected(phone, registry):
    with pytest.raises(ValidationException) as exc_info:
        register_patient(registry, _with(emergencyContactPhone=phone))
    assert "emergencyContactPhone" in _error_fields(exc_info)
    assert len(registry) == 0


@pytest.mark.parametrize("phone", ["12", "+12", "919876543210", "+123456789012345"])
def test_valid_phone_formats(phone):
    assert validate_registration(_with(emergencyContactPhone=phone)).emergency_contact_phone == phone


@pytest.mark.parametrize("field,value", [
    ("name", "J"),
    ("gender", "unknown"),
    ("bloodGroup", ""),
    ("emergencyContactName", "J"),
])
def test_field_constraints(field, value):
    with pytest.raises(ValidationException) as exc_info:
        validate_registration(_with(**{field: value}))
    assert field in _error_fields(exc_info)


def test_all_failing_fields_are_reported():
    with pytest.raises(ValidationException) as exc_info:
        validate_registration(_with(name="", age=0, emergencyContactPhone="x"))
    assert {"name", "age", "emergencyContactPhone"} <= _error_fields(exc_info)


def test_registration_creates_patient_with_generated_id(registry):
    patient = register_patient(registry, JANE_ROE)

    assert patient.id.startswith("patient-")
    assert patient.medical_history == []
    assert registry.get_patient_by_id(patient.id) == patient


def test_generated_ids_are_unique(registry):
    ids = {register_patient(registry, JANE_ROE).id for _ in range(50)}
    assert len(ids) == 50
