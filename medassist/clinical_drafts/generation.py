"""
Draft generation adapter and generation backends.

The DraftGenerator wraps the external generation service: it sends the
validated request fields with the kind's instruction template, then checks the
answer against the kind's response schema. Prescriptions that come back as
free text go through the section extractor.
"""
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, ValidationError
import asyncio
import json
import logging

import httpx

from ..exceptions import AppException, GenerationEmptyException, GenerationFailedException
from .extractor import extract_prescription_sections
from .schemas import (
    DraftKind,
    SymptomAnalysis,
    ReportSummary,
    NoteDraft,
    PrescriptionDraft,
    MedicationSuggestion,
    TEXT_FIELDS,
)
from .templates import get_template

# Set up logging
logger = logging.getLogger(__name__)

RESPONSE_MODELS = {
    DraftKind.SYMPTOM_ANALYSIS: SymptomAnalysis,
    DraftKind.REPORT_SUMMARY: ReportSummary,
    DraftKind.NOTE: NoteDraft,
    DraftKind.PRESCRIPTION: PrescriptionDraft,
}

# Request fields that are never forwarded to the generation service
LOCAL_FIELDS = {"patient_id"}

RawOutput = Optional[Union[str, Dict[str, Any]]]

class GenerationBackend:
    """
    Interface of the external generation service.

    Implementations return the model's answer as text, as a dict of
    structured fields, or None when nothing was produced. Any exception
    raised is reported as a generation failure.
    """
    async def complete(self, kind: DraftKind, instructions: str, fields: Dict[str, Any]) -> RawOutput:
        raise NotImplementedError


class HttpGenerationBackend(GenerationBackend):
    """
    Generation backend that calls an HTTP service.

    The service receives {"kind", "instructions", "input", "model"} and must
    answer with {"output": <text or object>}.
    """
    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        model: str = "clinical-draft",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.url = url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.transport = transport

    async def complete(self, kind: DraftKind, instructions: str, fields: Dict[str, Any]) -> RawOutput:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload = {
            "kind": kind.value,
            "instructions": instructions,
            "input": fields,
            "model": self.model,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GenerationFailedException(
                f"Generation service returned {e.response.status_code}: {e.response.text}"
            )
        except httpx.HTTPError as e:
            raise GenerationFailedException(f"Generation service request failed: {str(e)}")

        try:
            body = response.json()
        except ValueError:
            raise GenerationFailedException("Generation service returned a non-JSON response")

        output = body.get("output") if isinstance(body, dict) else None
        if isinstance(output, str) and output.lstrip().startswith("{"):
            try:
                return json.loads(output)
            except ValueError:
                pass  # plain text that happens to start with a brace
        return output


class SimulatedGenerationBackend(GenerationBackend):
    """
    Generation backend returning placeholder drafts.

    Used when no generation service is configured. Prescriptions are answered
    as free text so that the section extractor is exercised.
    """
    def __init__(self, delay_seconds: float = 0.0):
        self.delay_seconds = delay_seconds

    async def complete(self, kind: DraftKind, instructions: str, fields: Dict[str, Any]) -> RawOutput:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)

        if kind == DraftKind.SYMPTOM_ANALYSIS:
            patient = fields.get("patient_name") or "the patient"
            return {
                "analysis": (
                    f"Based on the reported symptoms for {patient}, possible considerations include: "
                    "common cold, flu, or allergies. It is recommended to consult with the "
                    "appropriate specialist. This is a placeholder response."
                )
            }

        if kind == DraftKind.REPORT_SUMMARY:
            return {
                "summary": (
                    "Key Findings:\n"
                    "- [Simulated key finding 1 based on report text]\n"
                    "- [Simulated key finding 2 based on report text]\n\n"
                    "Conclusion/Diagnosis:\n"
                    "- [Simulated conclusion]\n\n"
                    "Recommendations:\n"
                    "- [Simulated recommendation]"
                )
            }

        if kind == DraftKind.NOTE:
            return {
                "note": (
                    f"Patient presented with complaints of: {fields.get('keywords', '')}.\n"
                    "On examination, [Simulated observation based on keywords].\n"
                    "Assessment: [Simulated assessment].\n"
                    "Plan: [Simulated plan, e.g., recommend rest, hydration, and follow-up in "
                    "3 days if symptoms persist]."
                )
            }

        return (
            f'Based on the diagnosis of "{fields.get("diagnosis", "")}", here is a draft prescription suggestion:\n\n'
            "Medications:\n"
            "1. Amoxicillin 500mg, twice a day for 7 days (simulated)\n"
            "2. Paracetamol 500mg, as needed for pain or fever (simulated)\n\n"
            "Advice:\n"
            "- Complete the full course of antibiotics.\n"
            "- Ensure adequate rest and hydration.\n"
            "- Follow up if symptoms do not improve.\n\n"
            "Disclaimer: This is an AI-generated suggestion. The attending physician must verify "
            "all details, including drug names, dosages, and contraindications before issuing "
            "the final prescription."
        )


def prescription_from_text(text: str) -> PrescriptionDraft:
    """Build a prescription draft from free text using the section extractor."""
    sections = extract_prescription_sections(text)
    return PrescriptionDraft(
        medications=[MedicationSuggestion(name=name) for name in sections.medications if name],
        advice=[item for item in sections.advice if item],
        disclaimer=sections.disclaimer,
        source_format="text",
        prescription=text,
    )


def parse_draft_output(kind: DraftKind, raw: RawOutput) -> BaseModel:
    """
    Turn raw generation output into the response model for the kind.

    Raises:
        GenerationEmptyException: If the output is missing, blank or does not
            fit the response schema
    """
    if raw is None:
        raise GenerationEmptyException(kind.value)

    if isinstance(raw, str):
        if not raw.strip():
            raise GenerationEmptyException(kind.value)
        if kind == DraftKind.PRESCRIPTION:
            return prescription_from_text(raw)
        return RESPONSE_MODELS[kind](**{TEXT_FIELDS[kind]: raw, "disclaimer": None})

    if not isinstance(raw, dict) or not raw:
        raise GenerationEmptyException(kind.value)

    if kind == DraftKind.PRESCRIPTION and not raw.get("medications") and not raw.get("advice"):
        text = raw.get("prescription")
        if not isinstance(text, str) or not text.strip():
            raise GenerationEmptyException(kind.value)
        return prescription_from_text(text)

    try:
        return RESPONSE_MODELS[kind].model_validate(raw)
    except ValidationError as e:
        logger.error(f"Generation output for {kind.value} did not match the schema: {e}")
        raise GenerationEmptyException(
            kind.value,
            detail=f"The AI model returned a {kind.value} draft that could not be used."
        )


class DraftGenerator:
    """
    Draft generation adapter.

    Args:
        backend: The generation service to call
    """
    def __init__(self, backend: GenerationBackend):
        self.backend = backend

    async def generate(self, kind: DraftKind, request: BaseModel) -> BaseModel:
        """
        Generate a draft for a validated request.

        Args:
            kind: Draft kind
            request: Validated request model of that kind

        Returns:
            BaseModel: Response model of that kind

        Raises:
            GenerationEmptyException: If the service produced no usable output
            GenerationFailedException: If the service call failed
        """
        fields = request.model_dump(exclude_none=True, exclude=LOCAL_FIELDS)
        logger.info(f"Requesting {kind.value} draft")
        try:
            raw = await self.backend.complete(kind, get_template(kind), fields)
        except AppException:
            raise
        except Exception as e:
            logger.error(f"Generation of {kind.value} draft failed: {str(e)}")
            raise GenerationFailedException(str(e)) from e

        return parse_draft_output(kind, raw)


def build_draft_generator(settings) -> DraftGenerator:
    """Create the draft generator configured by the application settings."""
    if settings.generation_api_url:
        logger.info(f"Using generation service at {settings.generation_api_url}")
        backend = HttpGenerationBackend(
            url=settings.generation_api_url,
            api_key=settings.generation_api_key,
            model=settings.generation_model,
            timeout=settings.generation_timeout_seconds,
        )
    else:
        logger.warning("No generation service configured, using simulated drafts")
        backend = SimulatedGenerationBackend()
    return DraftGenerator(backend)
