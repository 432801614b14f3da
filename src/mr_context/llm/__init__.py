"""
LLM Prompting

This module provides the review prompt template used to hand
raw branch diffs to an LLM.
"""

from .prompts import PromptBuilder, DEFAULT_REVIEW_PROMPT

__all__ = ['PromptBuilder', 'DEFAULT_REVIEW_PROMPT']
