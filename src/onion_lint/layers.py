"""
onion_lint — Layer resolution.

Maps paths to the layer whose root directory contains them.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .config import LintConfig, OnionConfig


def normalize(path: Path) -> Path:
    """Collapse '.' and '..' segments without touching the filesystem."""
    return Path(os.path.normpath(path))


def layer_root(cfg: LintConfig, layer_path: str) -> Path:
    """Absolute root directory of a layer."""
    return normalize(cfg.base_dir / layer_path)


def is_within(path: Path, root: Path) -> bool:
    """Path containment by components: src/app does not contain src/application."""
    return path == root or root in path.parents


def resolve_layer(
    normalized_path: str,
    config: OnionConfig,
    cfg: LintConfig,
) -> Optional[str]:
    """
    Find the layer containing an import target.

    Args:
        normalized_path: Target path relative to cfg.base_dir
        config: Parsed onion config
        cfg: Runtime config

    Returns:
        The layer with the longest matching root, or None. Between layers
        sharing the same root, the first declared wins.
    """
    target = normalize(cfg.base_dir / normalized_path)

    best: Optional[str] = None
    best_depth = -1
    for name, layer_path in config.layers.items():
        root = layer_root(cfg, layer_path)
        if not is_within(target, root):
            continue
        depth = len(root.parts)
        if depth > best_depth:
            best, best_depth = name, depth
    return best
