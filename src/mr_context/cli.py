"""
mr-context CLI

Commands:
- analyze: Build a merge request context report for a branch comparison
"""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import AppConfig, init_config
from .formatting.report import ReportGenerator
from .git.hunks import HunkDecoder
from .git.repository import GitRepository
from .llm.prompts import PromptBuilder
from .models.changes import AnalysisResult, ComparisonOptions
from .output.handler import OutputHandler
from .review.analyzer import ChangeAnalyzer

app = typer.Typer(name="mr-context", help="Generate context for merge request reviews", add_completion=False)
console = Console(stderr=True)


def _version_callback(value: bool):
    if value:
        typer.echo(f"mr-context {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Generate context for merge request reviews."""


@app.command()
def analyze(
    repo_path: str = typer.Argument(".", help="Path to the git repository"),
    branch: Optional[str] = typer.Option(None, "--branch", "-b", help="Branch to analyze (defaults to current)"),
    base: Optional[str] = typer.Option(
        None, "--base", help="Base branch/commit for comparison (defaults to main/master)"
    ),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the result to this file"),
    clipboard: bool = typer.Option(False, "--clipboard", "-c", help="Copy result to clipboard"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Include build and lock files in the raw diff, log debug output"
    ),
    raw: bool = typer.Option(False, "--raw", help="Wrap the raw diff in a review prompt instead of a report"),
    config_path: Optional[str] = typer.Option(None, "--config", help="YAML configuration file"),
):
    """
    Show changes between the current branch and main/master.

    Examples:
        mr-context analyze
        mr-context analyze ../service -b feature/login --base develop -o context.md
        mr-context analyze --raw --clipboard
    """
    try:
        config = AppConfig.from_yaml(config_path) if config_path else AppConfig.from_env()
        if verbose:
            config.logging.level = "DEBUG"
        init_config(config)

        options = ComparisonOptions(
            repo_path=repo_path,
            branch=branch,
            base=base,
            output_path=output,
            copy_to_clipboard=clipboard,
            verbose=verbose,
            raw=raw,
        )

        analyzer = ChangeAnalyzer(GitRepository(options.repo_path), config=config.analysis)

        if options.raw:
            diff = asyncio.run(analyzer.collect_raw_diff(options))
            if not diff:
                console.print("[yellow]No changes found[/yellow]")
                return
            content = PromptBuilder().build_review_prompt(diff)
        else:
            result = asyncio.run(analyzer.analyze(options))
            if options.verbose:
                _print_summary(result)
            content = ReportGenerator().generate(result)

        OutputHandler().handle(
            content,
            output_path=options.output_path,
            copy_to_clipboard=options.copy_to_clipboard,
        )

        if options.output_path:
            console.print(f"[green]Result written to {escape(options.output_path)}[/green]")
        if options.copy_to_clipboard:
            console.print("[green]Result copied to clipboard[/green]")

    except Exception as e:
        console.print(f"[red]{escape(str(e)) or 'Unknown error'}[/red]")
        raise typer.Exit(1)


def _print_summary(result: AnalysisResult) -> None:
    """Print per-file change statistics to stderr."""
    decoder = HunkDecoder()

    for file_context, diff_context in zip(result.files, result.diffs):
        added = removed = 0
        for hunk in diff_context.hunks:
            added_lines, removed_lines = decoder.extract_changed_lines(hunk)
            added += len(added_lines)
            removed += len(removed_lines)

        console.print(
            f"[cyan]{escape(file_context.path)}[/cyan]: "
            f"{len(file_context.declarations)} declarations, "
            f"{len(file_context.modified_functions)} modified functions, "
            f"{len(diff_context.hunks)} hunks (+{added}/-{removed})"
        )

    console.print(f"[bold]{len(result.files)} files, {result.total_hunks} hunks[/bold]")


if __name__ == "__main__":
    app()
