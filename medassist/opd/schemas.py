"""
OPD Schemas - Pydantic models for Outpatient Department slips.
"""
from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime

TOKEN_PATTERN = r"^OPD-\d{8}-\d{6}$"

class PatientSnapshot(BaseModel):
    """
    Patient details copied onto a slip at generation time

    Fields:
    - id: Patient id (not checked against the registry)
    - name: Patient's name
    - age: Patient's age
    - gender: Patient's gender
    """
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    age: int = Field(..., gt=0)
    gender: str = Field(..., min_length=1)

class GenerateOpdSlipRequest(BaseModel):
    """
    OPD Slip Generation Request Schema

    Fields:
    - patient: Patient snapshot
    - department: Department override (defaults to the configured department)
    - doctor_name: Attending doctor (optional)
    """
    patient: PatientSnapshot
    department: Optional[str] = None
    doctor_name: Optional[str] = Field(None, alias="doctorName")

    class Config:
        populate_by_name = True

class OpdSlip(BaseModel):
    """
    OPD Slip Schema - A queue token for a walk-in consultation

    Fields:
    - id: Unique slip id (opdslip-<epoch millis>-<6 chars>)
    - patient_id: Patient id
    - patient_name, patient_age, patient_gender: Snapshot taken at generation time
    - token_number: OPD-YYYYMMDD-###### (UTC date of generation)
    - slip_date: When the slip was generated
    - department: Department the patient is queued for
    - doctor_name: Attending doctor (optional)
    """
    id: str
    patient_id: str = Field(..., alias="patientId")
    patient_name: str = Field(..., alias="patientName")
    patient_age: int = Field(..., alias="patientAge")
    patient_gender: str = Field(..., alias="patientGender")
    token_number: str = Field(..., alias="tokenNumber", pattern=TOKEN_PATTERN)
    slip_date: datetime = Field(..., alias="slipDate")
    department: str
    doctor_name: Optional[str] = Field(None, alias="doctorName")

    class Config:
        populate_by_name = True
        frozen = True

class OpdSlipIssueResponse(BaseModel):
    """
    OPD Slip Issue Response Schema

    The slip is returned even when it could not be stored; persisted and
    persistence_error tell the caller whether to retry storage.
    """
    slip: OpdSlip
    record_id: Optional[str] = Field(None, alias="recordId")
    persisted: bool
    persistence_error: Optional[str] = Field(None, alias="persistenceError")

    class Config:
        populate_by_name = True
