"""
Data Models

mr-context 분석 파이프라인의 핵심 데이터 모델들
"""

from .changes import (
    ComparisonOptions,
    Position,
    Span,
    Declaration,
    FunctionContext,
    FileContext,
    DiffHunk,
    DiffContext,
    AnalysisResult,
)

__all__ = [
    "ComparisonOptions",
    "Position",
    "Span",
    "Declaration",
    "FunctionContext",
    "FileContext",
    "DiffHunk",
    "DiffContext",
    "AnalysisResult",
]
