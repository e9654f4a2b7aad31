# app/intake/state.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from app.intake.schema import ChatMessage, PatientRecord
from app.intake.stages import IntakeStage


APOLOGY_MESSAGE = (
    "I apologize, but I'm having trouble processing your response right now. "
    "Could you please try again?"
)


def _new_message(role: str, content: str) -> ChatMessage:
    return ChatMessage(
        id=uuid.uuid4().hex,
        type=role,
        content=content,
        timestamp=datetime.now(timezone.utc),
    )


@dataclass
class IntakeSession:
    """
    Client-side view of one intake conversation.

    Nothing here is persisted; the server is stateless and the client sends
    `record`, `stage` and `messages` back on every turn.
    """

    messages: List[ChatMessage] = field(default_factory=list)
    record: PatientRecord = field(default_factory=PatientRecord)
    stage: IntakeStage = IntakeStage.DEMOGRAPHICS
    progress: int = 0

    @classmethod
    def start(cls, welcome_message: str) -> "IntakeSession":
        session = cls()
        session.messages.append(_new_message("assistant", welcome_message))
        return session

    @property
    def is_complete(self) -> bool:
        return self.stage == IntakeStage.COMPLETE

    def add_user_message(self, content: str) -> ChatMessage:
        message = _new_message("user", content)
        self.messages.append(message)
        return message

    def apply_turn(
        self,
        reply: str,
        record: PatientRecord,
        progress: int,
        stage: IntakeStage,
    ) -> None:
        self.messages.append(_new_message("assistant", reply))
        self.record = record
        self.progress = progress
        self.stage = stage

    def fail_turn(self) -> None:
        # Record, stage and progress stay as they were before the turn.
        self.messages.append(_new_message("assistant", APOLOGY_MESSAGE))
