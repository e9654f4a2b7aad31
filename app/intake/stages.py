from enum import Enum
from typing import Dict, List


class IntakeStage(str, Enum):
    DEMOGRAPHICS = "demographics"
    SYMPTOMS = "symptoms"
    HISTORY = "history"
    LIFESTYLE = "lifestyle"
    ANALYSIS = "analysis"
    COMPLETE = "complete"


STAGE_ORDER: List[IntakeStage] = list(IntakeStage)

# Labels shown by clients next to the progress bar.
STAGE_LABELS: Dict[IntakeStage, str] = {
    IntakeStage.DEMOGRAPHICS: "Basic Info",
    IntakeStage.SYMPTOMS: "Symptoms",
    IntakeStage.HISTORY: "Medical History",
    IntakeStage.LIFESTYLE: "Lifestyle",
    IntakeStage.ANALYSIS: "Analysis",
    IntakeStage.COMPLETE: "Complete",
}


def stage_index(stage: IntakeStage) -> int:
    return STAGE_ORDER.index(stage)


def has_reached(current: IntakeStage, target: IntakeStage) -> bool:
    """True when `current` is `target` or any stage after it."""
    return stage_index(current) >= stage_index(target)
