"""
onion_lint — Rule evaluation.

Checks every import edge of every file in a layer against that layer's rule.
Each check function returns findings; nothing is printed or aborted here.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .analysis import ImportEdge, extract_imports
from .config import LintConfig, OnionConfig, Rule
from .errors import LayerDirectoryNotFoundError
from .layers import resolve_layer
from .reporting import ERROR, WARN, Finding
from .scanner import list_layer_files, load_source

logger = logging.getLogger(__name__)


def _relpath_str(root: Path, p: Path) -> str:
    """Get relative path as posix string."""
    try:
        return p.relative_to(root).as_posix()
    except ValueError:
        return p.as_posix()


def check_edge(
    layer: str,
    rule: Rule,
    edge: ImportEdge,
    config: OnionConfig,
    cfg: LintConfig,
) -> list[Finding]:
    """Decide whether one import edge complies with the layer's rule."""
    rel_file = _relpath_str(cfg.base_dir, edge.source)
    target_layer = resolve_layer(edge.normalized_path, config, cfg)

    if target_layer is None:
        return [Finding(
            rule_id="UNRESOLVED-LAYER",
            severity=ERROR,
            message=(
                f"❓ Could not determine layer for import path: "
                f"{edge.normalized_path} in {rel_file}"
            ),
            path=rel_file,
            line=edge.line,
            col=edge.col,
            layer=layer,
            evidence=edge.specifier,
        )]

    if target_layer == layer or target_layer in rule.allowed_imports:
        return []

    return [Finding(
        rule_id="BOUNDARY-VIOLATION",
        severity=ERROR,
        message=(
            f"❌ {layer} ({rel_file}:{edge.line}:{edge.col}) "
            f"is importing from {target_layer} ({edge.normalized_path})"
        ),
        path=rel_file,
        line=edge.line,
        col=edge.col,
        layer=layer,
        target_layer=target_layer,
        evidence=edge.specifier,
    )]


def check_file(
    layer: str,
    rule: Rule,
    path: Path,
    config: OnionConfig,
    cfg: LintConfig,
) -> list[Finding]:
    """Check all import edges of one file."""
    rel_file = _relpath_str(cfg.base_dir, path)

    try:
        src = load_source(path)
    except (OSError, UnicodeDecodeError) as e:
        return [Finding(
            rule_id="UNREADABLE-FILE",
            severity=ERROR,
            message=f"Could not read {rel_file}: {e}",
            path=rel_file,
            layer=layer,
        )]

    try:
        edges = extract_imports(src, cfg)
    except SyntaxError as e:
        return [Finding(
            rule_id="UNPARSABLE-FILE",
            severity=ERROR,
            message=f"Could not parse {rel_file}:{e.lineno or 0}:{e.offset or 0}: {e.msg}",
            path=rel_file,
            line=e.lineno or 0,
            col=e.offset or 0,
            layer=layer,
        )]
    except ValueError as e:
        # ast.parse rejects null bytes with ValueError on older interpreters
        return [Finding(
            rule_id="UNPARSABLE-FILE",
            severity=ERROR,
            message=f"Could not parse {rel_file}: {e}",
            path=rel_file,
            layer=layer,
        )]

    logger.debug(f"{rel_file}: {len(edges)} local imports")
    findings: list[Finding] = []
    for edge in edges:
        findings.extend(check_edge(layer, rule, edge, config, cfg))
    return findings


def check_layer(layer: str, config: OnionConfig, cfg: LintConfig) -> list[Finding]:
    """Check every file in one layer."""
    rule = config.rule_for(layer)
    if rule is None:
        return [Finding(
            rule_id="LAYER-NO-RULE",
            severity=WARN,
            message=f"No rules defined for layer {layer}",
            layer=layer,
        )]

    findings: list[Finding] = []

    def unreadable_dir(directory: Path, error: OSError) -> None:
        rel_dir = _relpath_str(cfg.base_dir, directory)
        logger.warning(f"Cannot read directory {rel_dir}: {error}")
        findings.append(Finding(
            rule_id="UNREADABLE-DIR",
            severity=ERROR,
            message=f"Could not read directory {rel_dir}: {error}",
            path=rel_dir,
            layer=layer,
        ))

    try:
        files = list_layer_files(cfg, layer, config.layers[layer], onerror=unreadable_dir)
    except LayerDirectoryNotFoundError as e:
        return [Finding(
            rule_id="LAYER-MISSING-DIR",
            severity=ERROR,
            message=f"Directory for layer {layer} does not exist: {config.layers[layer]}",
            path=_relpath_str(cfg.base_dir, e.path),
            layer=layer,
        )]

    for path in files:
        findings.extend(check_file(layer, rule, path, config, cfg))
    return findings


def check_layers(config: OnionConfig, cfg: LintConfig) -> list[Finding]:
    """Check all layers in declaration order."""
    findings: list[Finding] = []
    for layer in config.layers:
        logger.debug(f"Checking layer {layer}")
        findings.extend(check_layer(layer, config, cfg))
    return findings
