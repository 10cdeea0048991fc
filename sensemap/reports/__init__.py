"""Text and HTML reports for sense assignments and their evaluation."""

from .html import assignments_table, write_assignment_table, write_evaluation_html
from .save_config import ReportDestinations, ReportSaveConfig
from .text import format_summary, write_summary

__all__ = [
    "ReportDestinations",
    "ReportSaveConfig",
    "assignments_table",
    "format_summary",
    "write_assignment_table",
    "write_evaluation_html",
    "write_summary",
]
