# app/services/intake_session.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Dict, List

from app.config import Settings
from app.intake.extractor import ExtractionResult, extract_fields
from app.intake.progress import compute_progress
from app.intake.schema import ChatMessage, PatientRecord
from app.intake.stages import IntakeStage
from app.llm import LLMClient
from app.prompts import ClinicTemplate

logger = logging.getLogger(__name__)


FALLBACK_REPLY = "I'm having trouble processing that. Could you please rephrase?"
CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 300

# The client offers the report download from this point on.
REPORT_READY_PROGRESS = 90


@dataclass
class TurnResult:
    message: str
    record: PatientRecord
    progress: int
    stage: IntakeStage
    extraction: ExtractionResult

    @property
    def report_available(self) -> bool:
        return self.progress >= REPORT_READY_PROGRESS


class IntakeSessionService:
    """
    Service that runs one intake turn:
      - asks the LLM for the conversational reply
      - pulls structured fields out of the patient's message
      - rescores progress and picks the next stage

    It holds no per-session state; everything arrives with the request.
    """

    def __init__(self, settings: Settings, llm_client: LLMClient, template: ClinicTemplate):
        self.settings = settings
        self.llm = llm_client
        self.template = template

    def welcome_message(self) -> str:
        return self.template.welcome_message

    def _build_messages(
        self,
        message: str,
        record: PatientRecord,
        history: List[ChatMessage],
        stage: IntakeStage,
    ) -> List[Dict[str, str]]:
        window = self.settings.chat_history_window
        recent = history[-window:] if window > 0 else []

        context = (
            f"Current patient data: {json.dumps(record.to_wire())}\n"
            f"Current stage: {stage.value}\n"
            "Please continue the assessment, asking appropriate follow-up questions for "
            "the current stage or transitioning to the next stage if this one is complete."
        )

        messages = [{"role": "system", "content": self.template.chat_system_prompt}]
        messages.extend(m.as_llm_message() for m in recent)
        messages.append({"role": "system", "content": context})
        messages.append({"role": "user", "content": message})
        return messages

    def handle_turn(
        self,
        message: str,
        record: PatientRecord,
        history: List[ChatMessage],
        stage: IntakeStage,
    ) -> TurnResult:
        """
        The LLM is called before anything else, so if it fails the exception
        propagates and no updated record is produced for this turn.
        """
        reply = self.llm.chat(
            self._build_messages(message, record, history, stage),
            temperature=CHAT_TEMPERATURE,
            max_tokens=CHAT_MAX_TOKENS,
        )
        if not reply.strip():
            reply = FALLBACK_REPLY

        extraction = extract_fields(message, record, stage)
        scored = compute_progress(
            extraction.record,
            stage,
            strict=self.settings.strict_stage_advancement,
        )

        logger.info(
            "Intake turn: stage %s -> %s, progress %d%%, extracted=%s",
            stage.value,
            scored.next_stage.value,
            scored.progress,
            extraction.updated,
        )

        return TurnResult(
            message=reply,
            record=extraction.record,
            progress=scored.progress,
            stage=scored.next_stage,
            extraction=extraction,
        )
