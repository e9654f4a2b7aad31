from app.cli import run_turn
from app.intake import IntakeStage, PatientRecord
from app.intake.state import APOLOGY_MESSAGE, IntakeSession
from app.services import IntakeSessionService
from tests.conftest import FakeLLMClient


def test_new_session_defaults():
    session = IntakeSession.start("Welcome!")
    assert session.stage == IntakeStage.DEMOGRAPHICS
    assert session.progress == 0
    assert session.record == PatientRecord()
    assert [m.content for m in session.messages] == ["Welcome!"]
    assert not session.is_complete


def test_successful_turn_updates_session(settings, template):
    llm = FakeLLMClient(reply="Thanks! What symptoms bring you in?")
    service = IntakeSessionService(settings, llm, template)
    session = IntakeSession.start(template.welcome_message)

    reply = run_turn(service, session, "I am 34 years old, male")

    assert reply == "Thanks! What symptoms bring you in?"
    assert session.record.demographics.age == 34
    assert session.stage == IntakeStage.SYMPTOMS
    assert session.progress == 20
    assert [m.type for m in session.messages] == ["assistant", "user", "assistant"]
    # the current message is not repeated as history
    assert len(llm.calls[0]["messages"]) == 4


def test_failed_turn_keeps_state_and_apologises(settings, template):
    service = IntakeSessionService(settings, FakeLLMClient(fail=True), template)
    session = IntakeSession.start(template.welcome_message)

    reply = run_turn(service, session, "I am 34 years old, male")

    assert reply == APOLOGY_MESSAGE
    assert session.record.demographics.age is None
    assert session.stage == IntakeStage.DEMOGRAPHICS
    assert session.progress == 0


def test_turn_result_reports_extraction(settings, template):
    service = IntakeSessionService(settings, FakeLLMClient(), template)
    result = service.handle_turn("hello", PatientRecord(), [], IntakeStage.DEMOGRAPHICS)
    assert not result.extraction.updated
    assert result.stage == IntakeStage.DEMOGRAPHICS
