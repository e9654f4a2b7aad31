from .pdf import is_heading_paragraph, render_report_pdf

__all__ = ["is_heading_paragraph", "render_report_pdf"]
