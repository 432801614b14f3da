"""
Change Analysis

This module resolves the comparison range and builds per-file
declaration and diff contexts for a branch comparison.
"""

from .analyzer import ChangeAnalyzer, AnalysisTimeoutError

__all__ = ['ChangeAnalyzer', 'AnalysisTimeoutError']
