"""
End-to-End Integration Tests

Runs the complete flow against a real git repository: branch
comparison, declaration extraction, hunk decoding and report output.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from mr_context.cli import app
from mr_context.formatting.report import ReportGenerator
from mr_context.git.repository import GitRepository
from mr_context.models.changes import ComparisonOptions
from mr_context.review.analyzer import ChangeAnalyzer


class TestEndToEndFlow:
    """Test the complete analysis flow."""

    @pytest.mark.asyncio
    async def test_analyze_feature_branch(self, ts_repo):
        analyzer = ChangeAnalyzer(GitRepository(ts_repo.working_dir))

        result = await analyzer.analyze(ComparisonOptions(repo_path=ts_repo.working_dir))

        # gone.ts no longer exists on the feature branch and is dropped
        assert [f.path for f in result.files] == ["foo.ts", "src/added.ts"]
        assert [d.file_path for d in result.diffs] == ["foo.ts", "src/added.ts"]

        foo = result.files[0]
        assert [(d.kind, d.name) for d in foo.declarations] == [("function", "bar")]
        assert [f.name for f in foo.modified_functions] == ["bar"]
        assert foo.modified_functions[0].content == "function bar() {\n  return 2;\n}"

        foo_diff = result.diffs[0]
        assert len(foo_diff.hunks) == 1
        assert foo_diff.hunks[0].content.startswith("@@ -1,3 +1,3 @@")

        added = result.files[1]
        assert [(d.kind, d.name) for d in added.declarations] == [("class", "Added"), ("function", "run")]
        assert result.diffs[1].hunks[0].new_start == 1

    @pytest.mark.asyncio
    async def test_analyze_with_branch_checkout(self, ts_repo):
        ts_repo.git.checkout("main")
        repository = GitRepository(ts_repo.working_dir)
        analyzer = ChangeAnalyzer(repository)

        result = await analyzer.analyze(ComparisonOptions(branch="feature", base="main"))

        assert repository.current_branch_name() == "feature"
        assert [f.path for f in result.files] == ["foo.ts", "src/added.ts"]

    @pytest.mark.asyncio
    async def test_analyze_non_ascii_file_name(self, ts_repo):
        (Path(ts_repo.working_dir) / "héllo.ts").write_text("function greet() {\n  return 1;\n}\n", encoding="utf-8")
        ts_repo.index.add(["héllo.ts"])
        ts_repo.index.commit("add non-ascii file")
        analyzer = ChangeAnalyzer(GitRepository(ts_repo.working_dir))

        result = await analyzer.analyze(ComparisonOptions())

        assert [f.path for f in result.files] == ["foo.ts", "héllo.ts", "src/added.ts"]
        greet = result.files[1]
        assert [(d.kind, d.name) for d in greet.declarations] == [("function", "greet")]
        assert [f.name for f in greet.modified_functions] == ["greet"]

    @pytest.mark.asyncio
    async def test_no_changes(self, ts_repo):
        analyzer = ChangeAnalyzer(GitRepository(ts_repo.working_dir))

        result = await analyzer.analyze(ComparisonOptions(base="feature"))

        assert result.files == []
        assert result.diffs == []

    @pytest.mark.asyncio
    async def test_report(self, ts_repo):
        analyzer = ChangeAnalyzer(GitRepository(ts_repo.working_dir))
        result = await analyzer.analyze(ComparisonOptions())

        report = ReportGenerator().generate(result)

        assert "### foo.ts" in report
        assert "- function: `bar`" in report
        assert "- class: `Added`" in report
        assert "<summary>`bar`</summary>" in report
        assert "+  return 2;" in report

    @pytest.mark.asyncio
    async def test_raw_diff_excludes_lock_files(self, ts_repo):
        analyzer = ChangeAnalyzer(GitRepository(ts_repo.working_dir))

        diff = await analyzer.collect_raw_diff(ComparisonOptions())
        verbose_diff = await analyzer.collect_raw_diff(ComparisonOptions(verbose=True))

        assert "foo.ts" in diff
        assert "yarn.lock" not in diff
        assert "yarn.lock" in verbose_diff


class TestCliEndToEnd:
    """Run the CLI against a real repository."""

    def test_cli_writes_report(self, ts_repo, tmp_path):
        output_path = tmp_path / "out" / "context.md"

        result = CliRunner().invoke(app, ["analyze", ts_repo.working_dir, "--output", str(output_path)])

        assert result.exit_code == 0, result.output
        report = output_path.read_text(encoding="utf-8")
        assert report.startswith("# Merge Request Context")
        assert "### src/added.ts" in report

    def test_cli_unknown_branch_fails(self, ts_repo):
        result = CliRunner().invoke(app, ["analyze", ts_repo.working_dir, "--branch", "missing"])

        assert result.exit_code == 1
