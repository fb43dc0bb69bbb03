"""
Token count and size comparison across encodings.
"""
from reporting.report_table import format_report, progress_bar
from reporting.token_counter import FileStats, TokenCounter, TokenStats

__all__ = ["FileStats", "TokenCounter", "TokenStats", "format_report", "progress_bar"]
