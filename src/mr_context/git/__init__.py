"""
Git Integration Layer

This module provides git repository access and unified diff
hunk decoding for branch comparisons.
"""

from .repository import GitRepository, GitRepositoryError
from .hunks import HunkDecoder

__all__ = ['GitRepository', 'GitRepositoryError', 'HunkDecoder']
