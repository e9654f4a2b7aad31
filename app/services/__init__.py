from .intake_session import IntakeSessionService, TurnResult
from .report_builder import ReportBuilder

__all__ = ["IntakeSessionService", "TurnResult", "ReportBuilder"]
