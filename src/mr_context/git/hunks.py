"""
Hunk Decoder

Parses unified diff text for a single file into structured hunks.
Decoding is purely textual and never raises.
"""

import re
import logging
from typing import List, Optional, Tuple

from ..models.changes import DiffHunk


logger = logging.getLogger(__name__)


class HunkDecoder:
    """
    Decoder for unified diff hunks.

    Splits the per-file diff produced by ``git diff`` into DiffHunk
    objects, keeping each hunk's text verbatim including its header.
    """

    def __init__(self):
        """Initialize hunk decoder."""
        self.hunk_header_pattern = re.compile(r'@@ -(\d+),(\d+) \+(\d+),(\d+) @@')

    def parse_hunks(self, diff_text: str) -> List[DiffHunk]:
        """
        Parse diff text into structured hunks.

        Args:
            diff_text: Raw unified diff output for one file

        Returns:
            List of DiffHunk objects in header order (empty on malformed input)
        """
        if not diff_text:
            return []

        try:
            hunks = []
            current_header: Optional[Tuple[int, int, int, int]] = None
            current_lines: List[str] = []

            for line in diff_text.split('\n'):
                header_match = self.hunk_header_pattern.search(line)
                if header_match:
                    # Close previous hunk
                    if current_header is not None:
                        hunks.append(self._build_hunk(current_header, current_lines))

                    current_header = tuple(int(group, 10) for group in header_match.groups())
                    current_lines = [line]
                elif current_header is not None:
                    current_lines.append(line)

            # Close last hunk
            if current_header is not None:
                hunks.append(self._build_hunk(current_header, current_lines))

            logger.debug(f"Parsed {len(hunks)} diff hunks")
            return hunks

        except Exception as e:
            logger.error(f"Error parsing hunks: {e}")
            return []

    def _build_hunk(self, header: Tuple[int, int, int, int], lines: List[str]) -> DiffHunk:
        """Build a DiffHunk from its decoded header and collected lines."""
        old_start, old_line_count, new_start, new_line_count = header
        return DiffHunk(
            content=''.join(f"{line}\n" for line in lines),
            old_start=old_start,
            old_line_count=old_line_count,
            new_start=new_start,
            new_line_count=new_line_count
        )

    def extract_changed_lines(self, hunk: DiffHunk) -> Tuple[List[str], List[str]]:
        """
        Extract added and removed lines from a hunk.

        Args:
            hunk: DiffHunk to analyze

        Returns:
            Tuple of (added_lines, removed_lines)
        """
        added_lines = []
        removed_lines = []

        # First line is the header
        for line in hunk.content.split('\n')[1:]:
            if line.startswith('+') and not line.startswith('+++'):
                added_lines.append(line[1:])  # Remove leading +
            elif line.startswith('-') and not line.startswith('---'):
                removed_lines.append(line[1:])  # Remove leading -

        return added_lines, removed_lines
