"""
onion_lint — Import extraction.

Parses Python sources with the ast module and turns relative
``from ... import ...`` statements into ImportEdges with resolved targets.
Absolute imports (``import x``, ``from x import y``) name installed packages
and are not part of the layer analysis.
"""

from __future__ import annotations

import ast
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from .config import LintConfig
from .layers import normalize
from .scanner import SourceFile

# Module-level compound statements whose bodies still count as top level
_BLOCK_NODES = tuple(
    getattr(ast, name) for name in ("If", "Try", "TryStar", "With") if hasattr(ast, name)
)


@dataclass(frozen=True)
class ImportEdge:
    """One local import statement and the path it points at."""
    source: Path            # absolute path of the importing file
    specifier: str          # as written, e.g. "..domain.model"
    normalized_path: str    # target relative to base_dir, posix separators
    line: int               # 1-based
    col: int                # 0-based


def _iter_top_level(body: Iterable[ast.stmt]) -> Iterator[ast.stmt]:
    """Yield module-level statements, descending into if/try/with blocks."""
    for node in body:
        yield node
        if not isinstance(node, _BLOCK_NODES):
            continue
        # Source order: body, except handlers, else, finally
        yield from _iter_top_level(node.body)
        for handler in getattr(node, "handlers", []):
            yield from _iter_top_level(handler.body)
        yield from _iter_top_level(getattr(node, "orelse", []))
        yield from _iter_top_level(getattr(node, "finalbody", []))


def _relative_base(path: Path, level: int) -> Path:
    """Directory a relative import of the given level starts from."""
    base = path.parent
    for _ in range(level - 1):
        base = base.parent
    return base


def _targets(node: ast.ImportFrom, source: Path) -> list[tuple[str, Path]]:
    """(specifier, absolute target) pairs for a relative ImportFrom."""
    dots = "." * node.level
    base = _relative_base(source, node.level)

    if node.module:
        return [(dots + node.module, base.joinpath(*node.module.split(".")))]

    # from . import a, b  -> each name is a sibling module or package
    targets: list[tuple[str, Path]] = []
    for alias in node.names:
        if alias.name == "*":
            targets.append((dots, base))
        else:
            targets.append((dots + alias.name, base / alias.name))
    return targets


def extract_imports(src: SourceFile, cfg: LintConfig) -> list[ImportEdge]:
    """
    Collect the local import edges of one source file, in file order.

    Raises:
        SyntaxError, ValueError: If the source cannot be parsed.
    """
    tree = ast.parse(src.text, filename=str(src.path))

    edges: list[ImportEdge] = []
    for node in _iter_top_level(tree.body):
        if not isinstance(node, ast.ImportFrom) or node.level == 0:
            continue
        for specifier, target in _targets(node, src.path):
            rel = os.path.relpath(normalize(target), cfg.base_dir)
            edges.append(ImportEdge(
                source=src.path,
                specifier=specifier,
                normalized_path=Path(rel).as_posix(),
                line=node.lineno,
                col=node.col_offset,
            ))
    return edges
