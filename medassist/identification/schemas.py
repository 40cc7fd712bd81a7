"""
Identification Schemas - Pydantic models for patient identification events.
"""
from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime

class IdentificationEventCreate(BaseModel):
    """
    Identification Event Schema - Records when and how a patient was identified

    Fields:
    - patient_id: ID of the identified patient
    - identification_timestamp: When the identification occurred (ISO 8601)
    - method: Identification method, e.g. "face-scan" or "manual-lookup"
    - source: Where it happened, e.g. "Ambulance App" or "Hospital Kiosk" (optional)
    - captured_data_snapshot: Small snapshot or reference of the captured data,
      e.g. part of a data URI (optional)
    """
    patient_id: str = Field(..., min_length=1, alias="patientId")
    identification_timestamp: datetime = Field(..., alias="identificationTimestamp")
    method: str = Field(..., min_length=1)
    source: Optional[str] = None
    captured_data_snapshot: Optional[str] = Field(None, alias="capturedDataSnapshot")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "patientId": "patient-1718000000000-a1b2c3",
                "identificationTimestamp": "2024-06-10T09:30:00Z",
                "method": "face-scan",
                "source": "Hospital Kiosk"
            }
        }

class IdentificationLogResponse(BaseModel):
    """
    Identification Log Response Schema

    Fields:
    - log_id: Unique id of the log entry
    - message: Confirmation message
    """
    log_id: str = Field(..., alias="logId")
    message: str

    class Config:
        populate_by_name = True
