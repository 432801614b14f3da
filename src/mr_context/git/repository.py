"""
Git Repository Adapter

Handles the git queries the change analysis needs: branch resolution,
checkout, diffs and file contents at a given ref. Built on GitPython.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Set

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError


logger = logging.getLogger(__name__)


class GitRepositoryError(Exception):
    """Git repository related errors"""
    def __init__(self, message: str, command: Optional[str] = None):
        super().__init__(message)
        self.command = command


class GitRepository:
    """
    Git repository wrapper used by the change analyzer.

    Provides methods for:
    - Current branch lookup, branch listing and checkout
    - Full and path-restricted diffs between two refs
    - Changed file listing and file content at a ref
    """

    def __init__(self, repo_path: str = "."):
        """
        Open git repository.

        Args:
            repo_path: Path to the repository working tree

        Raises:
            GitRepositoryError: If the path is not a git repository
        """
        self.repo_path = Path(repo_path)

        try:
            self.repo = Repo(self.repo_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise GitRepositoryError(f"Not a git repository: {repo_path}") from e

        logger.debug(f"Opened git repository at {self.repo.working_dir}")

    def _run(self, command: str, *args, **kwargs) -> str:
        """
        Run a git command through GitPython.

        Args:
            command: Git sub-command name (diff, show, checkout, ...)
            *args: Positional command arguments
            **kwargs: Command options

        Returns:
            Command output

        Raises:
            GitRepositoryError: When the command fails
        """
        try:
            return getattr(self.repo.git, command)(*args, **kwargs)
        except GitCommandError as e:
            logger.error(f"git {command} failed: {e.stderr.strip() if e.stderr else e}")
            raise GitRepositoryError(f"git {command} failed: {e}", command=command) from e

    def current_branch_name(self) -> str:
        """
        Get the name of the checked out branch.

        Returns:
            Branch name ("HEAD" when detached)
        """
        return self._run('rev_parse', '--abbrev-ref', 'HEAD').strip()

    def list_branch_names(self) -> Set[str]:
        """
        List local branch names.

        Returns:
            Set of branch names
        """
        output = self._run('branch', '--format=%(refname:short)')
        return {line.strip() for line in output.splitlines() if line.strip()}

    def checkout(self, branch_name: str) -> None:
        """
        Switch the working tree to a branch.

        Args:
            branch_name: Branch to check out
        """
        logger.info(f"Checking out branch: {branch_name}")
        self._run('checkout', branch_name)

    def diff(self, ref_a: str, ref_b: str, paths: Optional[Sequence[str]] = None) -> str:
        """
        Get unified diff between two refs.

        Args:
            ref_a: Left side ref
            ref_b: Right side ref
            paths: Optional pathspecs restricting the diff

        Returns:
            Unified diff text (empty when nothing differs)
        """
        args = [ref_a, ref_b]
        if paths:
            args.append('--')
            args.extend(paths)

        return self._run('diff', *args)

    def diff_name_only(self, ref_a: str, ref_b: str) -> List[str]:
        """
        List paths that differ between two refs.

        Args:
            ref_a: Left side ref
            ref_b: Right side ref

        Returns:
            Repository-relative paths in git's output order
        """
        # -z leaves non-ASCII paths unquoted
        output = self._run('diff', ref_a, ref_b, name_only=True, z=True)
        return [path for path in output.split('\0') if path]

    def show_file_at(self, ref: str, path: str) -> str:
        """
        Get file content at a ref.

        Args:
            ref: Commit, branch or tag
            path: Repository-relative file path

        Returns:
            File content
        """
        return self._run('show', f"{ref}:{path}")
