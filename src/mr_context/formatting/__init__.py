"""
Report Formatter

This module renders change analysis results as a Markdown
merge request context report.
"""

from .report import ReportGenerator

__all__ = ['ReportGenerator']
