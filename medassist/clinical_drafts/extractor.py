"""
Prescription section extractor.

Splits a free-text prescription draft into medications, advice and disclaimer.
Only used when the generation service answers with plain text instead of
structured sections.

Known limitations:
- only "1.", "2." and "-" are recognised as list markers, and exactly two
  characters are removed from each item;
- any line mentioning "medication" or "advice" switches section, even inside
  an item;
- the disclaimer is assumed to be the last section.
"""
import re

from .schemas import PrescriptionSections

LIST_MARKERS = ("1.", "2.", "-")
DISCLAIMER_RE = re.compile("disclaimer", re.IGNORECASE)

def extract_prescription_sections(text: str) -> PrescriptionSections:
    """
    Partition a free-text prescription draft into sections.

    Args:
        text: Draft text as returned by the generation service

    Returns:
        PrescriptionSections: Medications, advice and disclaimer. When nothing
            was recognised the whole text becomes the disclaimer.
    """
    medications = []
    advice = []
    disclaimer = ""
    current = None

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        lowered = line.lower()
        if "medication" in lowered:
            current = medications
            continue
        if "advice" in lowered:
            current = advice
            continue
        if "disclaimer" in lowered:
            start = DISCLAIMER_RE.search(text).start()
            disclaimer = text[start:].strip()
            break

        if current is not None and line.startswith(LIST_MARKERS):
            current.append(line[2:].strip())

    if not medications and not advice and not disclaimer:
        disclaimer = text

    return PrescriptionSections(medications=medications, advice=advice, disclaimer=disclaimer)
