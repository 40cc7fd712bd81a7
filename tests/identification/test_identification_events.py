"""
Tests for identification event logging.
"""
import asyncio
import re
import pytest

from medassist.exceptions import PersistenceException
from medassist.core.models import IdentificationEventRecord
from medassist.identification.schemas import IdentificationEventCreate
from medassist.identification.service import generate_log_id, log_identification_event

from ..conftest import FailingRecordStore

LOG_ID_RE = re.compile(r"^log-\d+-[a-z0-9]{7}$")

EVENT = {
    "patientId": "patient-1",
    "identificationTimestamp": "2024-06-10T09:30:00Z",
    "method": "face-scan",
    "source": "Hospital Kiosk",
    "capturedDataSnapshot": "data:image/jpeg;base64,/9j/4AAQ",
}


def test_log_id_format():
    assert LOG_ID_RE.match(generate_log_id())


def test_event_is_stored(record_store, db):
    event = IdentificationEventCreate(**EVENT)
    result = asyncio.run(log_identification_event(record_store, event))

    assert LOG_ID_RE.match(result.log_id)
    assert "patient-1" in result.message
    assert result.log_id in result.message

    record = db.query(IdentificationEventRecord).filter(IdentificationEventRecord.log_id == result.log_id).first()
    assert record.patient_id == "patient-1"
    assert record.method == "face-scan"
    assert record.source == "Hospital Kiosk"
    assert record.details == {"captured_data_snapshot": "data:image/jpeg;base64,/9j/4AAQ"}


def test_source_defaults_to_unknown(record_store, db):
    event = IdentificationEventCreate(patientId="patient-2", identificationTimestamp="2024-06-10T09:30:00Z", method="manual-lookup")
    result = asyncio.run(log_identification_event(record_store, event))

    record = db.query(IdentificationEventRecord).filter(IdentificationEventRecord.log_id == result.log_id).first()
    assert record.source == "unknown"
    assert record.details is None


def test_storage_failure_is_surfaced():
    with pytest.raises(PersistenceException):
        asyncio.run(log_identification_event(FailingRecordStore(), IdentificationEventCreate(**EVENT)))


def test_log_endpoint(client):
    response = client.post("/api/v1/identification-events", json=EVENT)

    assert response.status_code == 201
    data = response.json()
    assert LOG_ID_RE.match(data["logId"])
    assert "logged successfully" in data["message"]


@pytest.mark.parametrize("field,value", [
    ("identificationTimestamp", "yesterday"),
    ("method", ""),
    ("patientId", ""),
])
def test_log_endpoint_rejects_invalid_event(client, field, value):
    response = client.post("/api/v1/identification-events", json={**EVENT, field: value})
    assert response.status_code == 422
