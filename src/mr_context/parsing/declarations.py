"""
Declaration Extractor

Walks TypeScript syntax trees to collect named declarations
(functions, methods, variables, classes, interfaces and type aliases)
and the functions touched by a diff.
"""

import logging
from typing import Callable, Dict, List, Sequence, Tuple

from tree_sitter import Node, Tree

from ..models.changes import Declaration, DiffHunk, FunctionContext, Position, Span


logger = logging.getLogger(__name__)


class DeclarationExtractor:
    """
    Extracts declarations from tree-sitter TypeScript trees.

    Nodes are visited in pre-order. Each supported node kind has its own
    handler; every other node is only traversed. Arrow functions are not
    extracted and their bodies are not visited.
    """

    def __init__(self):
        """Initialize extractor with the node kind handlers."""
        self.handlers: Dict[str, Callable[[Node, bytes], List[Declaration]]] = {
            'function_declaration': self._extract_function,
            'generator_function_declaration': self._extract_function,
            'method_definition': self._extract_method,
            'lexical_declaration': self._extract_variables,
            'variable_declaration': self._extract_variables,
            'class_declaration': self._extract_class,
            'abstract_class_declaration': self._extract_class,
            'interface_declaration': self._extract_type,
            'type_alias_declaration': self._extract_type,
        }
        self.skipped_node_types = {'arrow_function'}

    def extract(self, tree: Tree, source: str) -> Tuple[List[Declaration], List[FunctionContext]]:
        """
        Extract declarations from a parsed file.

        Args:
            tree: tree-sitter Tree for the file
            source: Original source text

        Returns:
            Tuple of (declarations in pre-order, modified functions).
            Modified functions are filled in by find_modified_functions.
        """
        declarations: List[Declaration] = []
        modified_functions: List[FunctionContext] = []
        source_bytes = source.encode('utf-8')

        try:
            for node in tree.root_node.named_children:
                self._visit(node, source_bytes, declarations)
        except Exception as e:
            logger.error(f"Error processing syntax tree: {e}")

        logger.debug(f"Extracted {len(declarations)} declarations")
        return declarations, modified_functions

    def _visit(self, node: Node, source_bytes: bytes, declarations: List[Declaration]) -> None:
        """Visit a node and then its named children."""
        if node is None or not node.type or node.start_point is None:
            return

        if node.type in self.skipped_node_types:
            return

        try:
            handler = self.handlers.get(node.type)
            if handler:
                declarations.extend(handler(node, source_bytes))

            for child in node.named_children:
                self._visit(child, source_bytes, declarations)
        except Exception as e:
            logger.warning(f"Error processing node of type {node.type}: {e}")

    def _extract_function(self, node: Node, source_bytes: bytes) -> List[Declaration]:
        name_node = node.child_by_field_name('name')
        if name_node is None or name_node.type != 'identifier':
            return []
        return [self._declaration('function', name_node, node, source_bytes)]

    def _extract_method(self, node: Node, source_bytes: bytes) -> List[Declaration]:
        # Object literal methods share the node type; only class members count
        if node.parent is None or node.parent.type != 'class_body':
            return []

        # Computed, string and private (#name) keys are not identifiers
        name_node = node.child_by_field_name('name')
        if name_node is None or name_node.type != 'property_identifier':
            return []
        return [self._declaration('function', name_node, node, source_bytes)]

    def _extract_variables(self, node: Node, source_bytes: bytes) -> List[Declaration]:
        declarations = []
        for declarator in node.named_children:
            if declarator.type != 'variable_declarator':
                continue
            name_node = declarator.child_by_field_name('name')
            # Destructuring patterns have no single identifier
            if name_node is not None and name_node.type == 'identifier':
                declarations.append(
                    self._declaration('variable', name_node, declarator, source_bytes)
                )
        return declarations

    def _extract_class(self, node: Node, source_bytes: bytes) -> List[Declaration]:
        name_node = node.child_by_field_name('name')
        if name_node is None:
            return []
        return [self._declaration('class', name_node, node, source_bytes)]

    def _extract_type(self, node: Node, source_bytes: bytes) -> List[Declaration]:
        name_node = node.child_by_field_name('name')
        if name_node is None:
            return []
        return [self._declaration('type', name_node, node, source_bytes)]

    def _declaration(self, kind: str, name_node: Node, span_node: Node, source_bytes: bytes) -> Declaration:
        return Declaration(
            kind=kind,
            name=name_node.text.decode('utf-8'),
            span=self._span(span_node, source_bytes)
        )

    def _span(self, node: Node, source_bytes: bytes) -> Span:
        return Span(
            start=self._position(source_bytes, node.start_byte, node.start_point),
            end=self._position(source_bytes, node.end_byte, node.end_point)
        )

    def _position(self, source_bytes: bytes, byte_offset: int, point) -> Position:
        """Convert a tree-sitter point (byte column) to a character column position."""
        row, byte_column = point[0], point[1]
        line_start = byte_offset - byte_column
        column = len(source_bytes[line_start:byte_offset].decode('utf-8', errors='replace'))
        return Position(line=row + 1, column=column)

    def find_modified_functions(
        self,
        declarations: Sequence[Declaration],
        hunks: Sequence[DiffHunk],
        source: str
    ) -> List[FunctionContext]:
        """
        Find function declarations touched by the diff.

        Args:
            declarations: Declarations extracted from the new file content
            hunks: Decoded hunks of the file's diff
            source: New file content

        Returns:
            FunctionContext for every function whose span overlaps
            a hunk's new-side line range, in declaration order
        """
        if not hunks:
            return []

        line_ranges = [hunk.new_line_range for hunk in hunks]
        source_lines = source.split('\n')
        modified_functions = []

        for declaration in declarations:
            if declaration.kind != 'function':
                continue

            if any(declaration.span.overlaps_lines(first, last) for first, last in line_ranges):
                modified_functions.append(FunctionContext(
                    name=declaration.name,
                    content=self._slice_source(source_lines, declaration.span),
                    span=declaration.span
                ))

        logger.debug(f"Found {len(modified_functions)} modified functions")
        return modified_functions

    def _slice_source(self, source_lines: List[str], span: Span) -> str:
        """Cut the verbatim text covered by a span."""
        start, end = span.start, span.end
        if start.line == end.line:
            return source_lines[start.line - 1][start.column:end.column]

        parts = [source_lines[start.line - 1][start.column:]]
        parts.extend(source_lines[start.line:end.line - 1])
        parts.append(source_lines[end.line - 1][:end.column])
        return '\n'.join(parts)
