# app/services/report_builder.py
from __future__ import annotations

import json
import logging
from datetime import date
from typing import List, Optional, Tuple

from app.advisory import (
    analyze_symptoms,
    check_drug_interactions,
    get_lifestyle_recommendations,
    get_specialist_recommendations,
)
from app.config import Settings
from app.intake.schema import ChatMessage, PatientRecord
from app.llm import LLMClient
from app.prompts import ClinicTemplate
from app.report import render_report_pdf

logger = logging.getLogger(__name__)


FALLBACK_ANALYSIS = "Unable to generate analysis"
REPORT_TEMPERATURE = 0.3
REPORT_MAX_TOKENS = 2000


def _dump(value) -> str:
    return json.dumps(value, indent=2)


def _transcript(history: List[ChatMessage]) -> str:
    return "\n".join(f"{m.type}: {m.content}" for m in history)


class ReportBuilder:
    """
    Builds the end-of-intake PDF:
      - static advisory rules over the record
      - a narrative analysis from the LLM
      - PDF layout
    """

    def __init__(self, settings: Settings, llm_client: LLMClient, template: ClinicTemplate):
        self.settings = settings
        self.llm = llm_client
        self.template = template

    def _analysis_prompt(self, record: PatientRecord, history: List[ChatMessage]) -> str:
        insights = analyze_symptoms(record.symptoms)
        specialists = get_specialist_recommendations(insights)
        lifestyle_tips = get_lifestyle_recommendations(record)
        drug_warnings = check_drug_interactions(record.current_medications)

        logger.debug(
            "Advisory rules: %d insights, %d specialists, %d drug warnings",
            len(insights),
            len(specialists),
            len(drug_warnings),
        )

        window = self.settings.report_history_window
        recent = history[-window:] if window > 0 else []

        return (
            "Generate a comprehensive functional medicine health screening report based on "
            "this patient data:\n\n"
            f"Patient Data: {_dump(record.to_wire())}\n\n"
            f"Medical Insights: {_dump([i.model_dump() for i in insights])}\n\n"
            f"Specialist Recommendations: {_dump([s.model_dump() for s in specialists])}\n\n"
            f"Lifestyle Recommendations: {_dump(lifestyle_tips)}\n\n"
            f"Drug Interaction Warnings: {_dump(drug_warnings)}\n\n"
            f"Conversation Summary: {_transcript(recent)}\n\n"
            "Please provide a detailed functional medicine analysis incorporating the "
            "medical insights and recommendations provided."
        )

    def generate_analysis(self, record: PatientRecord, history: List[ChatMessage]) -> str:
        messages = [
            {"role": "system", "content": self.template.report_system_prompt},
            {"role": "user", "content": self._analysis_prompt(record, history)},
        ]
        analysis = self.llm.chat(
            messages,
            temperature=REPORT_TEMPERATURE,
            max_tokens=REPORT_MAX_TOKENS,
        )
        return analysis if analysis.strip() else FALLBACK_ANALYSIS

    def build(
        self,
        record: PatientRecord,
        history: List[ChatMessage],
        generated_on: Optional[date] = None,
    ) -> Tuple[str, bytes]:
        """
        Returns:
          - attachment filename
          - PDF bytes
        """
        analysis = self.generate_analysis(record, history)
        pdf = render_report_pdf(record, analysis, self.template, generated_on=generated_on)
        logger.info("Generated %s (%d bytes)", self.template.report_filename, len(pdf))
        return self.template.report_filename, pdf
