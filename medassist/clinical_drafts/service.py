"""
Clinical Draft Service - Entry points for the four AI-assisted drafts.

Each entry point validates the request first; invalid requests never reach
the generation service.
"""
from typing import Any, Dict, Optional, Union
import logging

from ..patients.registry import PatientRegistry
from ..patients.service import get_patient_or_404, add_note
from .generation import DraftGenerator
from .validation import validate_clinical_request
from .schemas import (
    DraftKind,
    SymptomAnalysisRequest,
    SymptomAnalysis,
    ReportSummaryRequest,
    ReportSummary,
    NoteDraftRequest,
    NoteDraft,
    PrescriptionDraftRequest,
    PrescriptionDraft,
)

# Set up logging
logger = logging.getLogger(__name__)

async def analyze_symptoms(
    generator: DraftGenerator,
    data: Union[SymptomAnalysisRequest, Dict[str, Any]]
) -> SymptomAnalysis:
    """Produce a preliminary symptom analysis for professional review."""
    request = validate_clinical_request(DraftKind.SYMPTOM_ANALYSIS, data)
    return await generator.generate(DraftKind.SYMPTOM_ANALYSIS, request)

async def summarize_report(
    generator: DraftGenerator,
    data: Union[ReportSummaryRequest, Dict[str, Any]]
) -> ReportSummary:
    """Summarize a medical report into findings, conclusion and recommendations."""
    request = validate_clinical_request(DraftKind.REPORT_SUMMARY, data)
    return await generator.generate(DraftKind.REPORT_SUMMARY, request)

async def generate_note(
    generator: DraftGenerator,
    data: Union[NoteDraftRequest, Dict[str, Any]],
    registry: Optional[PatientRegistry] = None
) -> NoteDraft:
    """
    Draft a clinical note from consultation keywords.

    Args:
        generator: Draft generation adapter
        data: Note request
        registry: When given together with request.patient_id, the generated
            note is appended to that patient's history

    Returns:
        NoteDraft: The generated note

    Raises:
        PatientNotFoundException: If request.patient_id matches no patient;
            raised before the generation service is called
    """
    request = validate_clinical_request(DraftKind.NOTE, data)
    append_to_history = registry is not None and bool(request.patient_id)
    if append_to_history:
        get_patient_or_404(registry, request.patient_id)

    draft = await generator.generate(DraftKind.NOTE, request)

    if append_to_history:
        add_note(registry, request.patient_id, draft.note)
        logger.info(f"Note draft appended to history of patient {request.patient_id}")

    return draft

async def generate_prescription(
    generator: DraftGenerator,
    data: Union[PrescriptionDraftRequest, Dict[str, Any]]
) -> PrescriptionDraft:
    """
    Draft a prescription for a diagnosis.

    Free-text answers from the generation service are split into sections,
    so the result always has the structured shape.
    """
    request = validate_clinical_request(DraftKind.PRESCRIPTION, data)
    draft = await generator.generate(DraftKind.PRESCRIPTION, request)
    if draft.source_format == "text":
        logger.info("Prescription draft extracted from free text")
    return draft
