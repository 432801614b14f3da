"""
Change Analyzer

Orchestrates the change analysis for a branch comparison:
resolves the comparison range, lists changed source files and builds
per-file declaration and diff contexts.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ..config import AnalysisConfig
from ..git.hunks import HunkDecoder
from ..git.repository import GitRepository, GitRepositoryError
from ..models.changes import AnalysisResult, ComparisonOptions, DiffContext, FileContext
from ..parsing.declarations import DeclarationExtractor
from ..parsing.typescript import TypeScriptParser


BASE_BRANCH_CANDIDATES = ("main", "master")
FALLBACK_BASE_BRANCH = "master"


class AnalysisTimeoutError(Exception):
    """Raised when the per-file analysis exceeds the configured timeout"""
    def __init__(self, timeout_seconds: float):
        super().__init__(f"Analysis timed out after {timeout_seconds}s")
        self.timeout_seconds = timeout_seconds


@dataclass
class FileAnalysis:
    """Paired contexts produced for one changed file."""
    file_context: FileContext
    diff_context: DiffContext


class ChangeAnalyzer:
    """
    Analyzes changes between a base ref and a target branch.

    Each changed source file is processed as an independent task;
    a failure in one file only drops that file from the result.
    """

    def __init__(
        self,
        repository: GitRepository,
        config: Optional[AnalysisConfig] = None,
        parser: Optional[TypeScriptParser] = None,
        extractor: Optional[DeclarationExtractor] = None,
        hunk_decoder: Optional[HunkDecoder] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize change analyzer.

        Args:
            repository: Repository to query
            config: Analysis settings (extension filter, concurrency, timeout)
            parser: TypeScript parser
            extractor: Declaration extractor
            hunk_decoder: Unified diff hunk decoder
            logger: Logger for progress messages
        """
        self.repository = repository
        self.config = config or AnalysisConfig()
        self.parser = parser or TypeScriptParser()
        self.extractor = extractor or DeclarationExtractor()
        self.hunk_decoder = hunk_decoder or HunkDecoder()
        self.logger = logger or logging.getLogger(__name__)

    async def analyze(self, options: ComparisonOptions) -> AnalysisResult:
        """
        Analyze changes for a comparison.

        Args:
            options: Comparison options (branch, base)

        Returns:
            AnalysisResult with index-aligned file and diff contexts

        Raises:
            GitRepositoryError: If checkout or changed file listing fails
            AnalysisTimeoutError: If the configured timeout expires
        """
        base = await self._prepare_comparison(options)
        target = options.target_ref

        self.logger.info("Getting modified files...")
        changed_files = await asyncio.to_thread(self.repository.diff_name_only, base, target)
        source_files = [
            path for path in changed_files
            if path.endswith(self.config.source_extension)
        ]
        self.logger.info(f"Found {len(source_files)} modified {self.config.source_extension} files")

        if not source_files:
            return AnalysisResult(files=[], diffs=[])

        semaphore = asyncio.Semaphore(self.config.max_concurrency)

        async def bounded(path: str) -> Optional[FileAnalysis]:
            async with semaphore:
                return await self._analyze_file(path, base, target)

        # gather keeps argument order, so results stay in discovery order
        fan_out = asyncio.gather(*(bounded(path) for path in source_files))
        if self.config.timeout_seconds is not None:
            try:
                results = await asyncio.wait_for(fan_out, timeout=self.config.timeout_seconds)
            except asyncio.TimeoutError as e:
                raise AnalysisTimeoutError(self.config.timeout_seconds) from e
        else:
            results = await fan_out

        valid_results = [r for r in results if r is not None]
        self.logger.info(
            f"Successfully processed {len(valid_results)} out of {len(source_files)} files"
        )

        return AnalysisResult(
            files=[r.file_context for r in valid_results],
            diffs=[r.diff_context for r in valid_results]
        )

    async def collect_raw_diff(self, options: ComparisonOptions) -> str:
        """
        Get the full diff for a comparison without structured extraction.

        Args:
            options: Comparison options; verbose keeps build/lock files

        Returns:
            Unified diff text
        """
        base = await self._prepare_comparison(options)

        pathspecs = None
        if not options.verbose:
            pathspecs = [f":(exclude,glob)**/{pattern}" for pattern in self.config.excluded_patterns]

        return await asyncio.to_thread(self.repository.diff, base, options.target_ref, pathspecs)

    async def resolve_base_ref(self) -> str:
        """
        Determine the default base branch.

        Returns:
            "main" if it exists, otherwise "master"
        """
        try:
            branches = await asyncio.to_thread(self.repository.list_branch_names)
        except GitRepositoryError as e:
            self.logger.warning(f"Could not list branches, falling back to {FALLBACK_BASE_BRANCH}: {e}")
            return FALLBACK_BASE_BRANCH

        for candidate in BASE_BRANCH_CANDIDATES:
            if candidate in branches:
                return candidate

        return FALLBACK_BASE_BRANCH

    async def _prepare_comparison(self, options: ComparisonOptions) -> str:
        """Check out the target branch and resolve the base ref."""
        if options.branch:
            self.logger.info(f"Checking out branch: {options.branch}")
            await asyncio.to_thread(self.repository.checkout, options.branch)

        base = options.base or await self.resolve_base_ref()
        self.logger.info(f"Using base branch/ref: {base}")
        return base

    async def _analyze_file(self, path: str, base: str, target: str) -> Optional[FileAnalysis]:
        """
        Build file and diff contexts for one file.

        Args:
            path: Repository-relative file path
            base: Base ref
            target: Target ref

        Returns:
            FileAnalysis, or None if the file contributes nothing
        """
        try:
            self.logger.debug(f"Processing file: {path}")

            content = await asyncio.to_thread(self.repository.show_file_at, target, path)
            if not content:
                self.logger.warning(f"No content found for file: {path}")
                return None

            tree = self.parser.parse(content, path=path)
            declarations, _ = self.extractor.extract(tree, content)

            file_diff = await asyncio.to_thread(self.repository.diff, base, target, [path])
            if not file_diff:
                self.logger.warning(f"No diff found for file: {path}")
                return None

            hunks = self.hunk_decoder.parse_hunks(file_diff)
            self.logger.debug(f"Found {len(hunks)} diff hunks for file: {path}")

            modified_functions = self.extractor.find_modified_functions(declarations, hunks, content)

            return FileAnalysis(
                file_context=FileContext(
                    path=path,
                    declarations=declarations,
                    modified_functions=modified_functions
                ),
                diff_context=DiffContext(
                    file_path=path,
                    diff=file_diff,
                    hunks=hunks
                )
            )

        except Exception as e:
            self.logger.error(f"Error processing file {path}: {e}")
            return None
