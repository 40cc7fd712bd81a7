"""
Clinical Draft Schemas - Pydantic models for AI-assisted draft requests and responses.

Every response carries a disclaimer; when the generation service leaves it out
the standard disclaimer for the draft kind is attached.
"""
from typing import ClassVar, Optional, List, Literal
from pydantic import BaseModel, Field, field_validator
from enum import Enum

class DraftKind(str, Enum):
    """The four kinds of clinical drafts"""
    SYMPTOM_ANALYSIS = "symptom_analysis"
    REPORT_SUMMARY = "report_summary"
    NOTE = "note"
    PRESCRIPTION = "prescription"

DEFAULT_DISCLAIMERS = {
    DraftKind.SYMPTOM_ANALYSIS: (
        "Disclaimer: This is a preliminary AI-generated analysis for review by a qualified "
        "medical professional. It is not a diagnosis."
    ),
    DraftKind.REPORT_SUMMARY: (
        "Disclaimer: This is an AI-generated summary and should not replace a full review "
        "of the original report by a qualified professional."
    ),
    DraftKind.NOTE: (
        "Disclaimer: This is an AI-generated draft and requires review and finalization by "
        "a qualified medical professional."
    ),
    DraftKind.PRESCRIPTION: (
        "Disclaimer: This is an AI-generated suggestion. The attending physician must verify "
        "all details, including drug names, dosages, and contraindications before issuing "
        "the final prescription."
    ),
}

# ============================================================================
# REQUESTS
# ============================================================================

class SymptomAnalysisRequest(BaseModel):
    """
    Symptom Analysis Request Schema

    Fields:
    - symptoms: Symptoms reported by or observed on the patient
    - patient_name: Name of the patient, used for context only (optional)
    """
    symptoms: str
    patient_name: Optional[str] = Field(None, alias="patientName")

    class Config:
        populate_by_name = True

class ReportSummaryRequest(BaseModel):
    """
    Report Summary Request Schema

    Fields:
    - report_text: Full text of the medical report
    """
    report_text: str = Field(..., alias="reportText")

    class Config:
        populate_by_name = True

class NoteDraftRequest(BaseModel):
    """
    Note Draft Request Schema

    Fields:
    - keywords: Comma-separated keywords and phrases from the consultation
    - patient_name: Name of the patient (optional)
    - patient_id: When set, the generated note is appended to this patient's history
    """
    keywords: str
    patient_name: Optional[str] = Field(None, alias="patientName")
    patient_id: Optional[str] = Field(None, alias="patientId")

    class Config:
        populate_by_name = True

class PrescriptionDraftRequest(BaseModel):
    """
    Prescription Draft Request Schema

    Fields:
    - diagnosis: Diagnosis the prescription is drafted for
    - patient_name: Name of the patient (optional)
    """
    diagnosis: str
    patient_name: Optional[str] = Field(None, alias="patientName")

    class Config:
        populate_by_name = True

# ============================================================================
# RESPONSES
# ============================================================================

class DraftResponse(BaseModel):
    """Base for draft responses; fills in the kind's disclaimer when missing"""
    draft_kind: ClassVar[DraftKind]

    @field_validator("disclaimer", mode="before", check_fields=False)
    @classmethod
    def default_disclaimer(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_DISCLAIMERS[cls.draft_kind]
        return v

class SymptomAnalysis(DraftResponse):
    """Symptom Analysis Response Schema"""
    draft_kind: ClassVar[DraftKind] = DraftKind.SYMPTOM_ANALYSIS

    analysis: str = Field(..., min_length=1)
    disclaimer: str = DEFAULT_DISCLAIMERS[DraftKind.SYMPTOM_ANALYSIS]

class ReportSummary(DraftResponse):
    """Report Summary Response Schema"""
    draft_kind: ClassVar[DraftKind] = DraftKind.REPORT_SUMMARY

    summary: str = Field(..., min_length=1)
    disclaimer: str = DEFAULT_DISCLAIMERS[DraftKind.REPORT_SUMMARY]

class NoteDraft(DraftResponse):
    """Note Draft Response Schema"""
    draft_kind: ClassVar[DraftKind] = DraftKind.NOTE

    note: str = Field(..., min_length=1)
    disclaimer: str = DEFAULT_DISCLAIMERS[DraftKind.NOTE]

class MedicationSuggestion(BaseModel):
    """
    Medication Suggestion Schema - One medication of a prescription draft

    Drafts extracted from unstructured text only carry the name; dosage and
    frequency stay empty.
    """
    name: str = Field(..., min_length=1)
    dosage: Optional[str] = None
    frequency: Optional[str] = None

class PrescriptionSections(BaseModel):
    """
    Prescription Sections Schema - Output of the heuristic section extractor

    Fields:
    - medications: Medication lines, markers removed
    - advice: Advice lines, markers removed
    - disclaimer: Disclaimer text (the whole input when nothing else was found)
    """
    medications: List[str] = Field(default_factory=list)
    advice: List[str] = Field(default_factory=list)
    disclaimer: str = ""

class PrescriptionDraft(DraftResponse):
    """
    Prescription Draft Response Schema

    Fields:
    - medications: Suggested medications in order
    - advice: Non-pharmacological advice in order
    - disclaimer: Draft disclaimer
    - source_format: "structured" when the generation service returned sections,
      "text" when they were extracted from a free-text draft
    - prescription: The free-text draft as received (text format only)
    """
    draft_kind: ClassVar[DraftKind] = DraftKind.PRESCRIPTION

    medications: List[MedicationSuggestion] = Field(default_factory=list)
    advice: List[str] = Field(default_factory=list)
    disclaimer: str = DEFAULT_DISCLAIMERS[DraftKind.PRESCRIPTION]
    source_format: Literal["structured", "text"] = Field("structured", alias="sourceFormat")
    prescription: Optional[str] = None

    class Config:
        populate_by_name = True

REQUEST_MODELS = {
    DraftKind.SYMPTOM_ANALYSIS: SymptomAnalysisRequest,
    DraftKind.REPORT_SUMMARY: ReportSummaryRequest,
    DraftKind.NOTE: NoteDraftRequest,
    DraftKind.PRESCRIPTION: PrescriptionDraftRequest,
}

# Attribute holding the required free text of each request kind
PRIMARY_FIELDS = {
    DraftKind.SYMPTOM_ANALYSIS: "symptoms",
    DraftKind.REPORT_SUMMARY: "report_text",
    DraftKind.NOTE: "keywords",
    DraftKind.PRESCRIPTION: "diagnosis",
}

# Attribute holding the generated text of each response kind
TEXT_FIELDS = {
    DraftKind.SYMPTOM_ANALYSIS: "analysis",
    DraftKind.REPORT_SUMMARY: "summary",
    DraftKind.NOTE: "note",
    DraftKind.PRESCRIPTION: "prescription",
}
