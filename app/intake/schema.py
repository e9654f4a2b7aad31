# app/intake/schema.py
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


StressLevel = Literal["low", "moderate", "high"]
SleepQuality = Literal["good", "fair", "poor"]


def _dedupe(items: List[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


class Demographics(BaseModel):
    age: Optional[int] = None
    gender: Optional[str] = None
    location: Optional[str] = None


class Lifestyle(BaseModel):
    stress_level: Optional[StressLevel] = None
    sleep_quality: Optional[SleepQuality] = None
    exercise_frequency: Optional[str] = None
    diet_type: Optional[str] = None

    def filled(self) -> dict:
        """Only the keys that have a value, in declaration order."""
        return self.model_dump(exclude_none=True)


class PatientRecord(BaseModel):
    """
    Structured patient data accumulated over one intake conversation.

    Field names on the wire are camelCase (medicalHistory, ...) because the
    client round-trips this object on every turn.
    """

    demographics: Demographics = Field(default_factory=Demographics)
    symptoms: List[str] = Field(default_factory=list)
    medical_history: List[str] = Field(default_factory=list, alias="medicalHistory")
    current_medications: List[str] = Field(
        default_factory=list, alias="currentMedications"
    )
    lifestyle: Lifestyle = Field(default_factory=Lifestyle)
    concerns: List[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("symptoms", "medical_history")
    @classmethod
    def _no_duplicates(cls, value: List[str]) -> List[str]:
        return _dedupe(value)

    def to_wire(self) -> dict:
        """JSON-ready dict using client field names; unset optionals dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ChatMessage(BaseModel):
    """
    One exchanged message as the client sends it back in messageHistory.
    Clients send either `type` or `role` for the speaker.
    """

    id: Optional[str] = None
    type: Literal["user", "assistant"] = Field(
        validation_alias=AliasChoices("type", "role")
    )
    content: str
    timestamp: Optional[datetime] = None

    model_config = ConfigDict(extra="ignore")

    def as_llm_message(self) -> dict:
        return {"role": self.type, "content": self.content}
