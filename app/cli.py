# app/cli.py
"""
Terminal client for the intake conversation.

Holds the session the way the browser does and calls the services
in-process:

    python -m app.cli --report-out report.pdf
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from app.config import get_settings
from app.intake.state import IntakeSession
from app.llm import LLMError, OpenAILLMClient
from app.prompts import get_template
from app.services import IntakeSessionService, ReportBuilder

logger = logging.getLogger(__name__)


def run_turn(service: IntakeSessionService, session: IntakeSession, text: str) -> str:
    """
    Send one patient message and fold the result into `session`.
    Returns the assistant text that was appended.
    """
    history = list(session.messages)
    session.add_user_message(text)
    try:
        result = service.handle_turn(
            message=text,
            record=session.record,
            history=history,
            stage=session.stage,
        )
    except LLMError:
        logger.exception("Turn failed")
        session.fail_turn()
    else:
        session.apply_turn(result.message, result.record, result.progress, result.stage)
    return session.messages[-1].content


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Chat through a health screening intake.")
    parser.add_argument("--template", choices=["screening", "onboarding"], default=None)
    parser.add_argument("--report-out", type=Path, default=None,
                        help="Write the PDF report here once the intake is complete.")
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.template:
        settings = settings.model_copy(update={"clinic_template": args.template})
    logging.basicConfig(level=settings.log_level.upper())

    template = get_template(settings.clinic_template, settings.clinic_name)
    llm = OpenAILLMClient(settings)
    service = IntakeSessionService(settings, llm, template)

    session = IntakeSession.start(service.welcome_message())
    print(f"assistant: {session.messages[0].content}")

    while not session.is_complete:
        try:
            text = input("you: ").strip()
        except EOFError:
            break
        if not text:
            continue
        reply = run_turn(service, session, text)
        print(f"assistant: {reply}")
        print(f"[{session.stage.value} - {session.progress}% complete]")

    if args.report_out and session.is_complete:
        filename, pdf = ReportBuilder(settings, llm, template).build(
            session.record, session.messages
        )
        args.report_out.write_bytes(pdf)
        print(f"Saved {filename} to {args.report_out}")


if __name__ == "__main__":
    main()
