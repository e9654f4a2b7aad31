# app/main.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router as api_router
from app.config import Settings, get_settings
from app.llm import LLMClient, OpenAILLMClient
from app.prompts import get_template
from app.services import IntakeSessionService, ReportBuilder


def create_app(
    settings: Optional[Settings] = None,
    llm_client: Optional[LLMClient] = None,
) -> FastAPI:
    """
    Build the API with explicitly constructed collaborators.
    Run with `uvicorn app.main:create_app --factory`.

    Tests pass their own settings and a fake LLM client; in production both
    come from the environment.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    llm_client = llm_client or OpenAILLMClient(settings)
    template = get_template(settings.clinic_template, settings.clinic_name)

    app = FastAPI(title="Health Screening Intake API", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    app.state.settings = settings
    app.state.intake_service = IntakeSessionService(settings, llm_client, template)
    app.state.report_builder = ReportBuilder(settings, llm_client, template)

    @app.get("/")
    def root():
        return {"message": "Health Screening Intake API is running"}

    app.include_router(api_router, prefix="/api")

    logging.getLogger(__name__).info(
        "Intake API ready (template=%s, model=%s)", template.key, settings.llm_model
    )
    return app
