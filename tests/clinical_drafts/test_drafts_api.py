"""
Tests for the clinical draft endpoints.
"""
import pytest

from medassist.exceptions import GenerationFailedException

from ..conftest import JANE_ROE


@pytest.mark.parametrize("path,field", [
    ("/api/v1/drafts/symptom-analysis", "symptoms"),
    ("/api/v1/drafts/report-summary", "reportText"),
    ("/api/v1/drafts/note", "keywords"),
    ("/api/v1/drafts/prescription", "diagnosis"),
])
def test_blank_input_is_rejected_without_generation(client, spy_backend, path, field):
    response = client.post(path, json={field: "  "})

    assert response.status_code == 422
    data = response.json()
    assert data["detail"].startswith("Missing input")
    assert len(data["errors"]) == 1
    assert spy_backend.calls == []


def test_symptom_analysis(client, spy_backend):
    response = client.post(
        "/api/v1/drafts/symptom-analysis",
        json={"symptoms": "high fever, persistent cough", "patientName": "Jane Roe"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["analysis"] == "Based on the reported symptoms..."
    assert data["disclaimer"]
    assert spy_backend.calls[0]["fields"]["patient_name"] == "Jane Roe"


def test_report_summary(client, spy_backend):
    spy_backend.output = {"summary": "Key Findings: ..."}
    response = client.post("/api/v1/drafts/report-summary", json={"reportText": "Chest X-ray ..."})

    assert response.status_code == 200
    assert response.json()["summary"] == "Key Findings: ..."


def test_note_is_added_to_patient_history(client, spy_backend):
    spy_backend.output = {"note": "Patient reports cough."}
    patient_id = client.post("/api/v1/patients/register", json=JANE_ROE).json()["id"]

    response = client.post("/api/v1/drafts/note", json={"keywords": "cough", "patientId": patient_id})

    assert response.status_code == 200
    history = client.get(f"/api/v1/patients/{patient_id}").json()["medicalHistory"]
    assert [note["content"] for note in history] == ["Patient reports cough."]


def test_note_for_unknown_patient_returns_404(client, spy_backend):
    response = client.post("/api/v1/drafts/note", json={"keywords": "cough", "patientId": "patient-missing"})

    assert response.status_code == 404
    assert "patient-missing" in response.json()["detail"]
    assert spy_backend.calls == []


def test_prescription_from_text(client, spy_backend):
    spy_backend.output = "Medications:\n1. Amoxicillin 500mg\nAdvice:\n- Rest\nDisclaimer: Review required."
    response = client.post("/api/v1/drafts/prescription", json={"diagnosis": "Acute Bronchitis"})

    assert response.status_code == 200
    data = response.json()
    assert data["sourceFormat"] == "text"
    assert data["medications"] == [{"name": "Amoxicillin 500mg", "dosage": None, "frequency": None}]
    assert data["advice"] == ["Rest"]
    assert data["disclaimer"] == "Disclaimer: Review required."


def test_empty_generation_returns_502(client, spy_backend):
    spy_backend.output = None
    response = client.post("/api/v1/drafts/symptom-analysis", json={"symptoms": "fever"})

    assert response.status_code == 502


def test_failed_generation_returns_502_with_message(client, spy_backend):
    spy_backend.error = GenerationFailedException("Generation service request failed: timeout")
    response = client.post("/api/v1/drafts/prescription", json={"diagnosis": "Acute Bronchitis"})

    assert response.status_code == 502
    assert response.json()["detail"] == "Generation service request failed: timeout"
