import pytest

from app.intake import IntakeStage, PatientRecord, compute_progress, extract_fields
from app.intake.stages import stage_index


def _record(**data) -> PatientRecord:
    return PatientRecord.model_validate(data)


def test_empty_record_in_demographics_stalls():
    result = compute_progress(PatientRecord(), IntakeStage.DEMOGRAPHICS)
    assert result.progress == 0
    assert result.next_stage == IntakeStage.DEMOGRAPHICS


def test_demographics_needs_both_age_and_gender():
    result = compute_progress(_record(demographics={"age": 30}), IntakeStage.DEMOGRAPHICS)
    assert result.next_stage == IntakeStage.DEMOGRAPHICS
    assert result.progress == 0


def test_woman_scenario_advances_to_symptoms():
    extraction = extract_fields("I'm a 29 year old woman", PatientRecord(), IntakeStage.DEMOGRAPHICS)
    result = compute_progress(extraction.record, IntakeStage.DEMOGRAPHICS)
    assert extraction.record.demographics.age == 29
    assert extraction.record.demographics.gender == "female"
    assert result.progress == 20
    assert result.next_stage == IntakeStage.SYMPTOMS


def test_symptoms_stall_without_data():
    record = _record(demographics={"age": 29, "gender": "female"})
    result = compute_progress(record, IntakeStage.SYMPTOMS)
    assert result.next_stage == IntakeStage.SYMPTOMS
    assert result.progress == 20


def test_history_advances_even_without_data():
    record = _record(demographics={"age": 29, "gender": "female"}, symptoms=["pain"])
    result = compute_progress(record, IntakeStage.HISTORY)
    assert result.next_stage == IntakeStage.LIFESTYLE
    assert result.progress == 65


def test_lifestyle_without_keywords_still_advances():
    record = PatientRecord()
    extraction = extract_fields("I walk the dog sometimes", record, IntakeStage.LIFESTYLE)
    result = compute_progress(extraction.record, IntakeStage.LIFESTYLE)
    assert extraction.record.lifestyle.filled() == {}
    assert result.next_stage == IntakeStage.ANALYSIS
    # history (reached) + lifestyle (current)
    assert result.progress == 45


def test_analysis_moves_to_complete():
    record = _record(
        demographics={"age": 29, "gender": "female"},
        symptoms=["pain"],
        medicalHistory=["asthma"],
        lifestyle={"stress_level": "high"},
    )
    result = compute_progress(record, IntakeStage.ANALYSIS)
    assert result.next_stage == IntakeStage.COMPLETE
    assert result.progress == 100


def test_complete_is_terminal():
    record = _record(demographics={"age": 29, "gender": "female"}, symptoms=["pain"])
    result = compute_progress(record, IntakeStage.COMPLETE)
    assert result.next_stage == IntakeStage.COMPLETE
    assert result.progress == 100


def test_strict_mode_requires_history_data():
    record = _record(demographics={"age": 29, "gender": "female"}, symptoms=["pain"])
    result = compute_progress(record, IntakeStage.HISTORY, strict=True)
    assert result.next_stage == IntakeStage.HISTORY
    assert result.progress == 45

    record.medical_history.append("asthma")
    result = compute_progress(record, IntakeStage.HISTORY, strict=True)
    assert result.next_stage == IntakeStage.LIFESTYLE


def test_strict_mode_still_finishes_analysis():
    result = compute_progress(PatientRecord(), IntakeStage.ANALYSIS, strict=True)
    assert result.next_stage == IntakeStage.COMPLETE


@pytest.mark.parametrize("strict", [False, True])
def test_progress_is_monotonic_and_stages_never_go_back(strict):
    turns = [
        "hi there",
        "I am 52 years old and male",
        "nothing much",
        "headaches and fatigue, some brain fog",
        "I had thyroid surgery",
        "stress is high and I sleep badly",
        "that's all",
        "thanks",
        "one more thing: more fatigue",
    ]
    record = PatientRecord()
    stage = IntakeStage.DEMOGRAPHICS
    last_progress = 0

    for text in turns:
        record = extract_fields(text, record, stage).record
        result = compute_progress(record, stage, strict=strict)

        assert 0 <= result.progress <= 100
        assert result.progress >= last_progress
        assert stage_index(result.next_stage) - stage_index(stage) in (0, 1)

        last_progress = result.progress
        stage = result.next_stage

    assert stage == IntakeStage.COMPLETE
    assert last_progress == 100
