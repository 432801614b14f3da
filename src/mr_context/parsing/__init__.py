"""
Source Parsing

This module provides TypeScript parsing and declaration
extraction from syntax trees.
"""

from .typescript import TypeScriptParser, SourceParseError
from .declarations import DeclarationExtractor

__all__ = ['TypeScriptParser', 'SourceParseError', 'DeclarationExtractor']
