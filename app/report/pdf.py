# app/report/pdf.py
from __future__ import annotations

import re
from datetime import date
from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer

from app.intake.schema import PatientRecord
from app.prompts import ClinicTemplate


MARGIN = 20 * mm

_ALL_CAPS = re.compile(r"^[A-Z\s]+$")
_NUMBERED = re.compile(r"^\d+\.")


def _build_styles():
    styles = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "ReportTitle", parent=styles["Title"], fontName="Helvetica-Bold",
            fontSize=20, leading=24, alignment=0, spaceAfter=6,
        ),
        "meta": ParagraphStyle(
            "ReportMeta", parent=styles["Normal"], fontName="Helvetica",
            fontSize=12, leading=15, spaceAfter=18,
        ),
        "section": ParagraphStyle(
            "ReportSection", parent=styles["Heading2"], fontName="Helvetica-Bold",
            fontSize=16, leading=20, spaceBefore=10, spaceAfter=8,
        ),
        "body": ParagraphStyle(
            "ReportBody", parent=styles["Normal"], fontName="Helvetica",
            fontSize=11, leading=14, spaceAfter=4,
        ),
        "body_bold": ParagraphStyle(
            "ReportBodyBold", parent=styles["Normal"], fontName="Helvetica-Bold",
            fontSize=12, leading=15, spaceAfter=8,
        ),
        "disclaimer_title": ParagraphStyle(
            "DisclaimerTitle", parent=styles["Heading2"], fontName="Helvetica-Bold",
            fontSize=14, leading=18, spaceAfter=10,
        ),
    }


def _para(text: str, style: ParagraphStyle) -> Paragraph:
    # Paragraph takes a mini-markup; user and model text must be escaped.
    return Paragraph(escape(text).replace("\n", "<br/>"), style)


def is_heading_paragraph(paragraph: str) -> bool:
    """
    Heuristic used on the model's analysis text: all-caps lines, numbered
    items and anything with a colon are rendered bold.
    """
    return bool(
        _ALL_CAPS.match(paragraph)
        or _NUMBERED.match(paragraph)
        or ":" in paragraph
    )


def _label(key: str) -> str:
    return key.replace("_", " ").title()


def _patient_section(record: PatientRecord, styles) -> List:
    flow: List = [_para("Patient Information", styles["section"])]
    demo = record.demographics
    if demo.age is not None:
        flow.append(_para(f"Age: {demo.age}", styles["body"]))
    if demo.gender:
        flow.append(_para(f"Gender: {demo.gender}", styles["body"]))
    flow.append(Spacer(1, 8))

    if record.symptoms:
        flow.append(_para("Reported Symptoms", styles["section"]))
        flow.extend(_para(f"• {s}", styles["body"]) for s in record.symptoms)
        flow.append(Spacer(1, 8))

    if record.medical_history:
        flow.append(_para("Medical History", styles["section"]))
        flow.extend(_para(f"• {h}", styles["body"]) for h in record.medical_history)
        flow.append(Spacer(1, 8))

    lifestyle = record.lifestyle.filled()
    if lifestyle:
        flow.append(_para("Lifestyle Factors", styles["section"]))
        flow.extend(
            _para(f"{_label(key)}: {value}", styles["body"])
            for key, value in lifestyle.items()
        )
    return flow


def _analysis_section(analysis: str, heading: str, styles) -> List:
    flow: List = [_para(heading, styles["section"]), Spacer(1, 6)]
    for paragraph in analysis.split("\n\n"):
        if not paragraph.strip():
            continue
        style = styles["body_bold"] if is_heading_paragraph(paragraph) else styles["body"]
        flow.append(_para(paragraph.strip(), style))
    return flow


def _disclaimer_section(disclaimer: str, styles) -> List:
    flow: List = [_para("Important Disclaimer", styles["disclaimer_title"])]
    for block in disclaimer.split("\n\n"):
        flow.append(_para(block.strip(), styles["body"]))
        flow.append(Spacer(1, 6))
    return flow


def render_report_pdf(
    record: PatientRecord,
    analysis: str,
    template: ClinicTemplate,
    generated_on: Optional[date] = None,
) -> bytes:
    """
    Lay out the report and return the PDF bytes.

    Page 1 holds the structured record, then the model's analysis starts on a
    new page, and the disclaimer gets a page of its own.
    """
    generated_on = generated_on or date.today()
    styles = _build_styles()

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=MARGIN,
        title=template.report_title,
    )

    story: List = [
        _para(template.report_title, styles["title"]),
        _para(f"Generated: {generated_on.strftime('%m/%d/%Y')}", styles["meta"]),
    ]
    story.extend(_patient_section(record, styles))
    story.append(PageBreak())
    story.extend(_analysis_section(analysis, template.analysis_heading, styles))
    story.append(PageBreak())
    story.extend(_disclaimer_section(template.disclaimer, styles))

    doc.build(story)
    return buffer.getvalue()
