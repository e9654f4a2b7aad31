# app/intake/progress.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

from app.intake.schema import PatientRecord
from app.intake.stages import IntakeStage, has_reached


@dataclass(frozen=True)
class ProgressResult:
    progress: int
    next_stage: IntakeStage


@dataclass(frozen=True)
class _Criterion:
    stage: IntakeStage
    weight: int
    advances_to: IntakeStage
    has_data: Callable[[PatientRecord], bool]
    # Satisfied just by being in (or past) `stage`, even with no data.
    counts_on_arrival: bool


CRITERIA: List[_Criterion] = [
    _Criterion(
        stage=IntakeStage.DEMOGRAPHICS,
        weight=20,
        advances_to=IntakeStage.SYMPTOMS,
        has_data=lambda r: r.demographics.age is not None and bool(r.demographics.gender),
        counts_on_arrival=False,
    ),
    _Criterion(
        stage=IntakeStage.SYMPTOMS,
        weight=25,
        advances_to=IntakeStage.HISTORY,
        has_data=lambda r: len(r.symptoms) > 0,
        counts_on_arrival=False,
    ),
    _Criterion(
        stage=IntakeStage.HISTORY,
        weight=20,
        advances_to=IntakeStage.LIFESTYLE,
        has_data=lambda r: len(r.medical_history) > 0,
        counts_on_arrival=True,
    ),
    _Criterion(
        stage=IntakeStage.LIFESTYLE,
        weight=25,
        advances_to=IntakeStage.ANALYSIS,
        has_data=lambda r: len(r.lifestyle.filled()) > 0,
        counts_on_arrival=True,
    ),
    _Criterion(
        stage=IntakeStage.ANALYSIS,
        weight=10,
        advances_to=IntakeStage.COMPLETE,
        has_data=lambda r: False,
        counts_on_arrival=True,
    ),
]


def _is_satisfied(
    criterion: _Criterion,
    record: PatientRecord,
    stage: IntakeStage,
    strict: bool,
) -> bool:
    if criterion.has_data(record):
        return True
    if not criterion.counts_on_arrival:
        return False
    # In strict mode only the analysis step may advance without data.
    if strict and criterion.stage != IntakeStage.ANALYSIS:
        return False
    return has_reached(stage, criterion.stage)


def compute_progress(
    record: PatientRecord,
    stage: IntakeStage,
    strict: bool = False,
) -> ProgressResult:
    """
    Score the record and decide the stage for the next turn.

    Each criterion adds its weight when satisfied, whatever the current
    stage. Only the criterion owned by the current stage can move the
    conversation forward, and by one step at most. `complete` never moves.
    """
    progress = 0
    next_stage = stage

    for criterion in CRITERIA:
        if not _is_satisfied(criterion, record, stage, strict):
            continue
        progress += criterion.weight
        if stage == criterion.stage:
            next_stage = criterion.advances_to

    return ProgressResult(progress=max(0, min(progress, 100)), next_stage=next_stage)
