# app/intake/extractor.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from app.intake.schema import PatientRecord
from app.intake.stages import IntakeStage

logger = logging.getLogger(__name__)


SYMPTOM_KEYWORDS: List[str] = [
    "pain", "fatigue", "headache", "nausea", "dizzy", "tired", "ache",
    "sore", "hurt", "sick", "weak", "anxiety", "stress", "depressed",
    "bloating", "constipation", "diarrhea", "insomnia", "sleep",
    "brain fog", "memory",
]

HISTORY_KEYWORDS: List[str] = [
    "diabetes", "hypertension", "thyroid", "cancer", "surgery", "depression",
    "anxiety", "autoimmune", "allergies", "asthma", "heart disease", "stroke",
]

# First integer in the message, optionally followed by an age marker.
AGE_PATTERN = re.compile(r"(\d{1,3})\s*(?:years?\s*old|yo|yrs?)?", re.IGNORECASE)


@dataclass
class ExtractionResult:
    """
    Outcome of scanning one utterance.

    `updated` is False when nothing was recognised; `record` is then an
    unchanged copy of the input.
    """

    record: PatientRecord
    changed_fields: List[str] = field(default_factory=list)

    @property
    def updated(self) -> bool:
        return bool(self.changed_fields)


def _contains_any(text: str, words: List[str]) -> bool:
    return any(w in text for w in words)


def _extract_age(message: str) -> Optional[int]:
    match = AGE_PATTERN.search(message)
    if match is None:
        return None
    return int(match.group(1))


def _extract_gender(lower: str) -> Optional[str]:
    """
    Precedence: "female" beats "male" (it contains it), and "woman"/"lady"
    are checked before "man"/"guy" for the same reason.
    """
    if "female" in lower:
        return "female"
    if "male" in lower:
        return "male"
    if "woman" in lower or "lady" in lower:
        return "female"
    if "man" in lower or "guy" in lower:
        return "male"
    return None


def _classify_stress(lower: str) -> str:
    if _contains_any(lower, ["high", "very", "lot"]):
        return "high"
    if _contains_any(lower, ["low", "little"]):
        return "low"
    return "moderate"


def _classify_sleep(lower: str) -> str:
    if _contains_any(lower, ["good", "well"]):
        return "good"
    if _contains_any(lower, ["poor", "bad", "terrible"]):
        return "poor"
    return "fair"


def _append_keywords(lower: str, keywords: List[str], target: List[str]) -> bool:
    added = False
    for keyword in keywords:
        if keyword in lower and keyword not in target:
            target.append(keyword)
            added = True
    return added


def extract_fields(
    message: str,
    record: PatientRecord,
    stage: IntakeStage,
) -> ExtractionResult:
    """
    Update a copy of `record` from the latest patient message.

    Only the fields that belong to `stage` are looked at. Nothing is raised
    for input we can't make sense of; it is simply skipped.
    """
    updated = record.model_copy(deep=True)
    changed: List[str] = []
    lower = message.lower()

    if stage == IntakeStage.DEMOGRAPHICS:
        age = _extract_age(message)
        if age is not None and age != updated.demographics.age:
            updated.demographics.age = age
            changed.append("demographics.age")

        gender = _extract_gender(lower)
        if gender is not None and gender != updated.demographics.gender:
            updated.demographics.gender = gender
            changed.append("demographics.gender")

    elif stage == IntakeStage.SYMPTOMS:
        if _append_keywords(lower, SYMPTOM_KEYWORDS, updated.symptoms):
            changed.append("symptoms")

    elif stage == IntakeStage.HISTORY:
        if _append_keywords(lower, HISTORY_KEYWORDS, updated.medical_history):
            changed.append("medicalHistory")

    elif stage == IntakeStage.LIFESTYLE:
        if "stress" in lower:
            level = _classify_stress(lower)
            if level != updated.lifestyle.stress_level:
                updated.lifestyle.stress_level = level
                changed.append("lifestyle.stress_level")

        if "sleep" in lower:
            quality = _classify_sleep(lower)
            if quality != updated.lifestyle.sleep_quality:
                updated.lifestyle.sleep_quality = quality
                changed.append("lifestyle.sleep_quality")

    if changed:
        logger.debug("Extracted %s during %s stage", ", ".join(changed), stage.value)

    return ExtractionResult(record=updated, changed_fields=changed)
