# app/api/schemas.py
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from app.intake.schema import ChatMessage, PatientRecord
from app.intake.stages import IntakeStage


class StageInfo(BaseModel):
    key: IntakeStage
    label: str


class StartIntakeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    current_stage: IntakeStage = Field(alias="currentStage")
    progress: int
    stages: List[StageInfo]


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    patient_data: PatientRecord = Field(default_factory=PatientRecord, alias="patientData")
    message_history: List[ChatMessage] = Field(default_factory=list, alias="messageHistory")
    current_stage: IntakeStage = Field(IntakeStage.DEMOGRAPHICS, alias="currentStage")


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    updated_patient_data: PatientRecord = Field(alias="updatedPatientData")
    progress: int
    current_stage: IntakeStage = Field(alias="currentStage")
    report_available: bool = Field(alias="reportAvailable")


class ReportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    patient_data: PatientRecord = Field(alias="patientData")
    message_history: List[ChatMessage] = Field(default_factory=list, alias="messageHistory")


class ErrorResponse(BaseModel):
    error: str
