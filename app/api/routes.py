# app/api/routes.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from app.intake.stages import STAGE_LABELS, STAGE_ORDER, IntakeStage
from app.services import IntakeSessionService, ReportBuilder
from .schemas import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    ReportRequest,
    StageInfo,
    StartIntakeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _intake_service(request: Request) -> IntakeSessionService:
    return request.app.state.intake_service


def _report_builder(request: Request) -> ReportBuilder:
    return request.app.state.report_builder


@router.get("/intake/start", response_model=StartIntakeResponse, response_model_by_alias=True)
def start_intake(request: Request) -> StartIntakeResponse:
    """
    Opening message and stage list for a new client-side session.
    Nothing is stored on the server.
    """
    return StartIntakeResponse(
        message=_intake_service(request).welcome_message(),
        current_stage=IntakeStage.DEMOGRAPHICS,
        progress=0,
        stages=[StageInfo(key=s, label=STAGE_LABELS[s]) for s in STAGE_ORDER],
    )


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
)
def chat(payload: ChatRequest, request: Request):
    try:
        result = _intake_service(request).handle_turn(
            message=payload.message,
            record=payload.patient_data,
            history=payload.message_history,
            stage=payload.current_stage,
        )
    except Exception:
        logger.exception("Chat turn failed")
        return JSONResponse(status_code=500, content={"error": "Failed to process request"})

    return ChatResponse(
        message=result.message,
        updated_patient_data=result.record,
        progress=result.progress,
        current_stage=result.stage,
        report_available=result.report_available,
    )


@router.post(
    "/generate-report",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}},
        500: {"model": ErrorResponse},
    },
)
def generate_report(payload: ReportRequest, request: Request):
    try:
        filename, pdf = _report_builder(request).build(
            record=payload.patient_data,
            history=payload.message_history,
        )
    except Exception:
        logger.exception("Report generation failed")
        return JSONResponse(status_code=500, content={"error": "Failed to generate report"})

    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
