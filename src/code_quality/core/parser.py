"""Syntax tree adapter: tree-sitter Java trees behind a small query surface.

Analyzers never touch tree-sitter directly; they ask a ``ParsedTree`` for
nodes of a given kind, their 1-based line, and the exact source text of a
node's span.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import tree_sitter_java as tsjava
from tree_sitter import Language, Node, Parser, Tree

from code_quality.core.config import AnalysisConfig
from code_quality.core.discover import is_source_file, iter_source_files

_logger = logging.getLogger(__name__)

JAVA_LANGUAGE = Language(tsjava.language())


class ParseError(ValueError):
    """Raised when a source file cannot be parsed cleanly."""

    def __init__(self, path: Path | str, detail: str = "syntax error") -> None:
        self.path = Path(path)
        self.detail = detail
        super().__init__(f"{self.path}: {detail}")


@dataclass(frozen=True)
class ParsedTree:
    """One parsed compilation unit plus the bytes it was parsed from."""

    tree: Tree
    source: bytes

    @property
    def root(self) -> Node:
        return self.tree.root_node

    # ── traversal ───────────────────────────────────────────────────

    def find_all(self, *kinds: str, postorder: bool = False) -> list[Node]:
        """Every node whose type is in *kinds*.

        Preorder (document order) by default.  ``postorder=True`` yields
        children before their parent, the order a visitor that recurses
        before inspecting reports in.
        """
        wanted = set(kinds)
        walk = _postorder if postorder else _preorder
        return [node for node in walk(self.root) if node.type in wanted]

    # ── node queries ────────────────────────────────────────────────

    @staticmethod
    def line_of(node: Node) -> int:
        return node.start_point[0] + 1

    def render(self, node: Node | None) -> str:
        """Exact source text of *node*'s span ("" for ``None``)."""
        if node is None:
            return ""
        return self.source[node.start_byte:node.end_byte].decode(
            "utf-8", errors="replace"
        )

    def name_of(self, node: Node) -> str:
        return self.render(node.child_by_field_name("name"))

    @staticmethod
    def field_of(node: Node, field: str) -> Node | None:
        return node.child_by_field_name(field)

    @staticmethod
    def body_of(node: Node) -> Node | None:
        return node.child_by_field_name("body")

    def modifiers_of(self, node: Node) -> set[str]:
        """Modifier keywords written on a declaration (annotations excluded)."""
        for child in node.children:
            if child.type == "modifiers":
                return {
                    self.render(m) for m in child.children if not m.is_named
                }
        return set()

    @staticmethod
    def attached_comment(node: Node) -> Node | None:
        """The line or block comment directly before *node*, if any."""
        prev = node.prev_sibling
        if prev is not None and prev.type in ("line_comment", "block_comment"):
            return prev
        return None

    def doc_comment(self, node: Node) -> Node | None:
        """The ``/** ... */`` comment attached directly before *node*, if any."""
        prev = self.attached_comment(node)
        if prev is not None and self.render(prev).startswith("/**"):
            return prev
        return None

    def field_names(self, node: Node) -> list[tuple[Node, str]]:
        """(declarator, name) for every variable declared by a field node."""
        return [
            (decl, self.name_of(decl))
            for decl in node.children_by_field_name("declarator")
        ]


def _preorder(root: Node) -> Iterator[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _postorder(root: Node) -> Iterator[Node]:
    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        stack.extend((child, False) for child in reversed(node.children))


@dataclass(frozen=True)
class SourceUnit:
    """A file and its tree; ``tree`` is ``None`` for unparseable input."""

    path: Path
    tree: ParsedTree | None = None

    @property
    def file_name(self) -> str:
        return self.path.name


class JavaSourceParser:
    """Parses Java files into ``ParsedTree`` objects.

    A fresh tree-sitter ``Parser`` is built per call so one instance can be
    shared between worker threads.
    """

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        self.config = config or AnalysisConfig()

    def parse_bytes(self, source: bytes, path: Path | str = "<memory>") -> ParsedTree:
        tree = Parser(JAVA_LANGUAGE).parse(source)
        if tree.root_node.has_error:
            raise ParseError(path, _first_error(tree.root_node))
        return ParsedTree(tree=tree, source=source)

    def parse(self, path: Path) -> ParsedTree:
        """Parse *path*.

        Raises ``FileNotFoundError`` for a missing path and ``ParseError``
        when the file has syntax errors.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return self.parse_bytes(path.read_bytes(), path)

    def load(self, path: Path) -> SourceUnit:
        """Like ``parse`` but degrade non-Java or broken files to an empty unit."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if not path.is_file() or not is_source_file(path, self.config):
            return SourceUnit(path)
        try:
            return SourceUnit(path, self.parse(path))
        except ParseError as exc:
            _logger.debug("Could not parse %s: %s", path, exc.detail)
            return SourceUnit(path)

    def walk(self, root: Path, max_workers: int | None = None) -> list[SourceUnit]:
        """Parse every Java file under *root* in canonical walk order.

        Files that fail to parse or read are logged and skipped.
        """
        root = Path(root)
        if not root.exists():
            raise FileNotFoundError(f"Directory not found: {root}")
        files = list(iter_source_files(root, self.config))
        workers = max_workers if max_workers is not None else self.config.max_workers

        if workers > 1 and len(files) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                parsed = list(pool.map(self._parse_or_none, files))
        else:
            parsed = [self._parse_or_none(f) for f in files]

        return [
            SourceUnit(path, tree)
            for path, tree in zip(files, parsed)
            if tree is not None
        ]

    def _parse_or_none(self, path: Path) -> ParsedTree | None:
        try:
            return self.parse(path)
        except (ParseError, OSError) as exc:
            _logger.warning("Skipping %s: %s", path, exc)
            return None


def _first_error(root: Node) -> str:
    for node in _preorder(root):
        if node.type == "ERROR" or node.is_missing:
            row, col = node.start_point[0] + 1, node.start_point[1] + 1
            return f"syntax error at line {row}, column {col}"
    return "syntax error"
