from .schema import ChatMessage, Demographics, Lifestyle, PatientRecord
from .stages import IntakeStage
from .extractor import ExtractionResult, extract_fields
from .progress import ProgressResult, compute_progress
from .state import IntakeSession

__all__ = [
    "ChatMessage",
    "Demographics",
    "Lifestyle",
    "PatientRecord",
    "IntakeStage",
    "ExtractionResult",
    "extract_fields",
    "ProgressResult",
    "compute_progress",
    "IntakeSession",
]
