"""
mr-context

브랜치 비교에서 머지 리퀘스트 리뷰용 컨텍스트를 생성하는 CLI 도구
"""

__version__ = "0.1.0"

from .review.analyzer import ChangeAnalyzer
from .formatting.report import ReportGenerator

__all__ = ["ChangeAnalyzer", "ReportGenerator"]
