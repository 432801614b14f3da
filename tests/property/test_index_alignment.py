"""
Property-based tests for change analysis result alignment.

Property: files and diffs stay index aligned in discovery order,
whichever files fail
"""

import asyncio
from unittest.mock import Mock

from hypothesis import given, settings, strategies as st

from mr_context.git.repository import GitRepositoryError
from mr_context.models.changes import ComparisonOptions
from mr_context.review.analyzer import ChangeAnalyzer


OUTCOMES = ["ok", "no_content", "content_error", "parse_error", "no_diff", "diff_error", "other_extension"]


def build_repository(outcomes):
    paths = []
    contents = {}
    diffs = {}

    for i, outcome in enumerate(outcomes):
        path = f"src/file{i}.{'js' if outcome == 'other_extension' else 'ts'}"
        paths.append(path)
        contents[path] = {
            "no_content": "",
            "content_error": GitRepositoryError("missing"),
            "parse_error": "function broken( {\n",
        }.get(outcome, f"export const value{i} = {i};\n")
        diffs[path] = {
            "no_diff": "",
            "diff_error": GitRepositoryError("diff failed"),
        }.get(outcome, f"@@ -1,1 +1,1 @@\n-export const value{i} = 0;\n+export const value{i} = {i};\n")

    def serve(table, path):
        value = table[path]
        if isinstance(value, Exception):
            raise value
        return value

    repository = Mock()
    repository.list_branch_names.return_value = {"main"}
    repository.diff_name_only.return_value = paths
    repository.show_file_at.side_effect = lambda ref, path: serve(contents, path)
    repository.diff.side_effect = lambda ref_a, ref_b, pathspecs=None: serve(diffs, pathspecs[0])
    return repository, paths


class TestIndexAlignment:
    """Property tests for ChangeAnalyzer result alignment."""

    @settings(max_examples=50, deadline=None)
    @given(outcomes=st.lists(st.sampled_from(OUTCOMES), max_size=12))
    def test_results_stay_aligned(self, outcomes):
        """
        Property: every file contributes to both lists or to neither.

        Given: Files with random per-file failures
        When: Changes are analyzed
        Then: files[i].path == diffs[i].file_path, in discovery order
        """
        repository, paths = build_repository(outcomes)

        result = asyncio.run(ChangeAnalyzer(repository).analyze(ComparisonOptions()))

        expected = [path for path, outcome in zip(paths, outcomes) if outcome == "ok"]
        assert [f.path for f in result.files] == expected
        assert [d.file_path for d in result.diffs] == expected
        assert all(len(d.hunks) == 1 for d in result.diffs)
