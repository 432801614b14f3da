"""
Output Handler

Delivers the rendered report: written to a file, copied to the
clipboard, or printed to stdout when neither is requested.
"""

import logging
from pathlib import Path
from typing import Optional, TextIO

import pyperclip
import typer


logger = logging.getLogger(__name__)


class OutputError(Exception):
    """Raised when the report cannot be delivered"""
    def __init__(self, message: str, destination: Optional[str] = None):
        super().__init__(message)
        self.destination = destination


class OutputHandler:
    """
    Writes report content to the requested destinations.

    File and clipboard output may both apply; stdout is used
    only when no other destination is given.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Initialize output handler.

        Args:
            stream: Stream for undirected output (defaults to stdout)
        """
        self.stream = stream

    def handle(
        self,
        content: str,
        output_path: Optional[str] = None,
        copy_to_clipboard: bool = False
    ) -> None:
        """
        Deliver content.

        Args:
            content: Text to deliver
            output_path: Optional file path to write to
            copy_to_clipboard: Whether to copy content to the clipboard

        Raises:
            OutputError: If writing or copying fails
        """
        if output_path:
            self.write_file(content, output_path)

        if copy_to_clipboard:
            self.copy_to_clipboard(content)

        if not output_path and not copy_to_clipboard:
            # Written verbatim so diff whitespace and brackets survive
            typer.echo(content, file=self.stream, nl=False)

    def write_file(self, content: str, output_path: str) -> None:
        """Write content to a UTF-8 file, creating parent directories."""
        path = Path(output_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise OutputError(f"Cannot write report to {output_path}: {e}", destination=output_path) from e

        logger.info(f"Wrote {len(content)} chars to {output_path}")

    def copy_to_clipboard(self, content: str) -> None:
        """Copy content to the system clipboard."""
        try:
            pyperclip.copy(content)
        except pyperclip.PyperclipException as e:
            raise OutputError(f"Clipboard error: {e}", destination="clipboard") from e

        logger.info(f"Copied {len(content)} chars to clipboard")
