"""
Report Generator

Renders analysis results into a Markdown merge request context
document for human or LLM review.
"""

import logging
from typing import List

from ..models.changes import AnalysisResult, DiffContext, FileContext


logger = logging.getLogger(__name__)


class ReportGenerator:
    """
    Formats an AnalysisResult as Markdown.

    Output depends only on the input data: header, modified files
    overview, per-file diffs and a fixed review request section.
    """

    def __init__(self, source_language: str = "typescript"):
        """
        Initialize report generator.

        Args:
            source_language: Code fence language for modified function bodies
        """
        self.source_language = source_language

    def generate(self, result: AnalysisResult) -> str:
        """
        Generate the complete report.

        Args:
            result: AnalysisResult to render

        Returns:
            Markdown document
        """
        logger.debug(f"Generating report for {len(result.files)} files")

        sections = [
            self._generate_header(),
            self._generate_file_overview(result.files),
            self._generate_diffs(result.diffs),
            self._generate_review_request(),
        ]

        return "\n\n".join(sections)

    def _generate_header(self) -> str:
        return "\n".join([
            "# Merge Request Context",
            "",
            "This report provides context for reviewing the merge request changes.",
            "",
        ])

    def _generate_file_overview(self, files: List[FileContext]) -> str:
        sections = ["## Modified Files Overview", ""]

        for file_context in files:
            sections.append(f"### {file_context.path}")
            sections.append("")

            if file_context.declarations:
                sections.append("#### Declarations")
                sections.append("")
                for declaration in file_context.declarations:
                    sections.append(f"- {declaration.kind}: `{declaration.name}`")
                sections.append("")

            if file_context.modified_functions:
                sections.append("#### Modified Functions")
                sections.append("")
                for function in file_context.modified_functions:
                    sections.extend([
                        "<details>",
                        f"<summary>`{function.name}`</summary>",
                        "",
                        f"```{self.source_language}",
                        function.content,
                        "```",
                        "",
                        "</details>",
                        "",
                    ])

        return "\n".join(sections)

    def _generate_diffs(self, diffs: List[DiffContext]) -> str:
        sections = ["## Changes", ""]

        for diff_context in diffs:
            sections.extend([
                f"### {diff_context.file_path}",
                "",
                "<details>",
                "<summary>View changes</summary>",
                "",
                "```diff",
                diff_context.diff,
                "```",
                "",
                "</details>",
                "",
            ])

        return "\n".join(sections)

    def _generate_review_request(self) -> str:
        return "\n".join([
            "## Review Request",
            "",
            "Please review these changes with attention to:",
            "- Code correctness and potential bugs",
            "- Design patterns and architecture",
            "- Performance implications",
            "- Security considerations",
            "- Test coverage",
            "",
            "Provide specific, actionable feedback and suggestions for improvement if needed.",
        ])
