"""
Clinical Draft Router - API endpoints for AI-assisted clinical drafts.

Every draft returned by these endpoints is unreviewed and carries a disclaimer.
"""
from fastapi import APIRouter, Depends

from ..dependencies import get_draft_generator, get_registry
from ..patients.registry import PatientRegistry
from .generation import DraftGenerator
from .schemas import (
    SymptomAnalysisRequest,
    SymptomAnalysis,
    ReportSummaryRequest,
    ReportSummary,
    NoteDraftRequest,
    NoteDraft,
    PrescriptionDraftRequest,
    PrescriptionDraft,
)
from .service import analyze_symptoms, summarize_report, generate_note, generate_prescription

router = APIRouter()

@router.post("/symptom-analysis", response_model=SymptomAnalysis)
async def symptom_analysis(
    request: SymptomAnalysisRequest,
    generator: DraftGenerator = Depends(get_draft_generator)
):
    """
    Get a preliminary analysis of patient symptoms and department suggestions
    """
    return await analyze_symptoms(generator, request)

@router.post("/report-summary", response_model=ReportSummary)
async def report_summary(
    request: ReportSummaryRequest,
    generator: DraftGenerator = Depends(get_draft_generator)
):
    """
    Summarize a medical report
    """
    return await summarize_report(generator, request)

@router.post("/note", response_model=NoteDraft)
async def note(
    request: NoteDraftRequest,
    generator: DraftGenerator = Depends(get_draft_generator),
    registry: PatientRegistry = Depends(get_registry)
):
    """
    Generate a doctor's note from consultation keywords

    If patientId is given, the note is also added to the patient's history.
    """
    return await generate_note(generator, request, registry)

@router.post("/prescription", response_model=PrescriptionDraft)
async def prescription(
    request: PrescriptionDraftRequest,
    generator: DraftGenerator = Depends(get_draft_generator)
):
    """
    Draft a prescription (medications, advice, disclaimer) for a diagnosis
    """
    return await generate_prescription(generator, request)
