"""
Shared fixtures: temporary git repositories with TypeScript changes.
"""

from pathlib import Path

import pytest
from git import Repo


def commit_files(repo: Repo, files: dict, message: str, removed=()) -> None:
    """Write files, stage removals, and commit."""
    root = Path(repo.working_dir)
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    if files:
        repo.index.add(list(files))
    if removed:
        repo.index.remove(list(removed), working_tree=True)
    repo.index.commit(message)


@pytest.fixture
def ts_repo(tmp_path):
    """
    Repository with a main branch and a feature branch that:
    modifies foo.ts, adds added.ts, deletes gone.ts and touches yarn.lock.
    The feature branch is checked out.
    """
    repo = Repo.init(tmp_path)
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")

    commit_files(repo, {
        "foo.ts": "function bar() {\n  return 1;\n}\n",
        "gone.ts": "export const gone = true;\n",
        "yarn.lock": "# yarn lockfile v1\n",
        "README.md": "# demo\n",
    }, "initial")
    repo.git.branch("-M", "main")

    repo.git.checkout("-b", "feature")
    commit_files(repo, {
        "foo.ts": "function bar() {\n  return 2;\n}\n",
        "src/added.ts": "export class Added {\n  run() {}\n}\n",
        "yarn.lock": "# yarn lockfile v1\nleft-pad@1.3.0\n",
        "README.md": "# demo\n\nmore docs\n",
    }, "feature work", removed=["gone.ts"])

    return repo
