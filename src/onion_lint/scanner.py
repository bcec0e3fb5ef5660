"""
onion_lint — File scanning and source loading.

Handles:
- Walking a layer directory for source files
- Source file loading
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .config import LintConfig, is_source_file
from .errors import LayerDirectoryNotFoundError
from .layers import layer_root

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
    """A loaded source file with content."""
    path: Path
    text: str


def load_source(path: Path) -> SourceFile:
    """
    Load a single source file.

    Raises:
        OSError, UnicodeDecodeError: If the file cannot be read as UTF-8.
    """
    text = path.read_text(encoding="utf-8")
    return SourceFile(path=path, text=text)


def _walk(
    cfg: LintConfig,
    directory: Path,
    results: list[Path],
    onerror: Callable[[Path, OSError], None],
) -> None:
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        onerror(directory, e)
        return

    for entry in entries:
        if entry.is_dir():
            if entry.name in cfg.exclude_dirs:
                logger.debug(f"Skipping excluded directory {entry}")
                continue
            _walk(cfg, entry, results, onerror)
        elif entry.is_file() and is_source_file(cfg, entry.name):
            results.append(entry)


def _raise(directory: Path, error: OSError) -> None:
    raise error


def list_layer_files(
    cfg: LintConfig,
    layer: str,
    layer_path: str,
    onerror: Optional[Callable[[Path, OSError], None]] = None,
) -> list[Path]:
    """
    List every source file under a layer's root directory.

    Stub files are skipped. Order is traversal order with each directory's
    entries sorted by name.

    Args:
        onerror: Called with each directory that cannot be listed and its
            OSError; the walk then continues with its siblings. Without it the
            error propagates, as with os.walk.

    Raises:
        LayerDirectoryNotFoundError: If the layer root is not a directory.
    """
    root = layer_root(cfg, layer_path)
    if not root.is_dir():
        raise LayerDirectoryNotFoundError(layer, root)

    results: list[Path] = []
    _walk(cfg, root, results, onerror or _raise)
    logger.debug(f"Layer {layer}: {len(results)} files under {root}")
    return results
