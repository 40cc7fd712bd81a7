"""
Patient Schemas - Pydantic models for patient data validation and serialization.

This module defines the registration request, the stored patient record with its
append-only medical history, and the emergency admission form.
"""
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from enum import Enum

PHONE_PATTERN = r"^\+?[1-9]\d{1,14}$"

STANDARD_BLOOD_GROUPS = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")

class Gender(str, Enum):
    """Gender values accepted at registration"""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

class MedicalNote(BaseModel):
    """
    Medical Note Schema - A single entry in a patient's history

    Fields:
    - timestamp: When the note was created (UTC)
    - content: Note text
    """
    timestamp: datetime
    content: str = Field(..., min_length=1)

class PatientRegistration(BaseModel):
    """
    Patient Registration Schema - Used when registering a new patient

    Fields:
    - name: Patient's full name (at least 2 characters)
    - age: Age in years (positive integer)
    - gender: male, female or other
    - blood_group: Blood group (required)
    - allergies: Known allergies (empty means none)
    - medical_conditions: Existing medical conditions
    - emergency_contact_name: Emergency contact's name (at least 2 characters)
    - emergency_contact_phone: Emergency contact's phone number (E.164-like)
    - face_image_url: URL or data URL of the captured face image (optional)
    """
    name: str = Field(..., min_length=2, description="Patient's full name")
    age: int = Field(..., gt=0, description="Age in years")
    gender: Gender
    blood_group: str = Field(..., min_length=1, alias="bloodGroup")
    allergies: str = ""
    medical_conditions: str = Field("", alias="medicalConditions")
    emergency_contact_name: str = Field(..., min_length=2, alias="emergencyContactName")
    emergency_contact_phone: str = Field(..., pattern=PHONE_PATTERN, alias="emergencyContactPhone")
    face_image_url: Optional[str] = Field(None, alias="faceImageUrl")

    class Config:
        """Accept both camelCase form fields and snake_case attribute names"""
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "name": "Jane Roe",
                "age": 34,
                "gender": "female",
                "bloodGroup": "O+",
                "allergies": "Penicillin",
                "medicalConditions": "Asthma",
                "emergencyContactName": "John Roe",
                "emergencyContactPhone": "+19876543210"
            }
        }

    @field_validator("allergies", "medical_conditions", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        """Optional free-text fields are stored as empty strings"""
        return "" if v is None else v

    @field_validator("age", mode="before")
    @classmethod
    def age_not_boolean(cls, v):
        if isinstance(v, bool):
            raise ValueError("Age must be a whole number")
        return v

class Patient(BaseModel):
    """
    Patient Schema - A registered patient as held by the registry

    The id is assigned once at registration and never changes. The
    medical_history sequence only grows.
    """
    id: str
    name: str
    age: int
    gender: Gender
    blood_group: str = Field(..., alias="bloodGroup")
    allergies: str = ""
    medical_conditions: str = Field("", alias="medicalConditions")
    emergency_contact_name: str = Field(..., alias="emergencyContactName")
    emergency_contact_phone: str = Field(..., alias="emergencyContactPhone")
    face_image_url: Optional[str] = Field(None, alias="faceImageUrl")
    medical_history: List[MedicalNote] = Field(default_factory=list, alias="medicalHistory")

    class Config:
        populate_by_name = True

class NoteCreate(BaseModel):
    """Request body for appending a note to a patient's history"""
    content: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError("Note content must not be blank")
        return v

class EmergencyAdmission(BaseModel):
    """
    Emergency Admission Schema - Completed emergency admission/consent form

    Fields:
    - admission_notes: Free-text notes from the admitting staff (optional)
    - consent_given: Must be true for the admission to be accepted
    - date_time: When the admission took place
    """
    admission_notes: Optional[str] = Field(None, alias="admissionNotes")
    consent_given: bool = Field(..., alias="consentGiven")
    date_time: datetime = Field(..., alias="dateTime")

    class Config:
        populate_by_name = True

    @field_validator("consent_given")
    @classmethod
    def consent_required(cls, v):
        if v is not True:
            raise ValueError("Consent must be given.")
        return v

class PatientListResponse(BaseModel):
    """
    Patient List Response Schema - Used when returning every registered patient

    Fields:
    - patients: Patients in registration order
    - total: Number of patients
    """
    patients: List[Patient]
    total: int
