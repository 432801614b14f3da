"""
TypeScript Parser

Thin wrapper around the tree-sitter TypeScript grammar.
"""

import logging
from typing import Optional

import tree_sitter_typescript
from tree_sitter import Language, Parser, Tree


logger = logging.getLogger(__name__)


class SourceParseError(Exception):
    """Raised when source text is not valid TypeScript"""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class TypeScriptParser:
    """
    Parses TypeScript source into tree-sitter syntax trees.

    The grammar is loaded once per parser instance.
    """

    def __init__(self):
        """Initialize parser with the TypeScript grammar."""
        self.language = Language(tree_sitter_typescript.language_typescript())
        self._parser = Parser(self.language)

    def parse(self, source: str, path: Optional[str] = None) -> Tree:
        """
        Parse TypeScript source.

        Args:
            source: Source text
            path: Optional file path, used in error messages

        Returns:
            tree-sitter Tree

        Raises:
            SourceParseError: If the source contains syntax errors
        """
        tree = self._parser.parse(source.encode('utf-8'))

        if tree.root_node.has_error:
            location = self._first_error_location(tree)
            raise SourceParseError(
                f"Syntax error in {path or '<source>'} at line {location}",
                path=path
            )

        logger.debug(f"Parsed {path or '<source>'}: {tree.root_node.child_count} top-level nodes")
        return tree

    def _first_error_location(self, tree: Tree) -> int:
        """Find the 1-based line of the first ERROR or missing node."""
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            if node.is_error or node.is_missing:
                return node.start_point[0] + 1
            stack.extend(reversed(node.children))
        return tree.root_node.start_point[0] + 1
