"""
Report Output

This module delivers rendered reports to a file, the clipboard
or stdout.
"""

from .handler import OutputHandler, OutputError

__all__ = ['OutputHandler', 'OutputError']
