"""
onion_lint — Configuration.

Two kinds of configuration live here:
- OnionConfig: the layer map and import rules read from onion.config.json
- LintConfig: runtime scanning settings (extensions, exclusions)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigNotFoundError, ConfigParseError
from .reporting import ERROR, Finding

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "onion.config.json"

# VCS and tool caches only; these never hold package sources
DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (
    ".git",
    "__pycache__",
    ".mypy_cache",
    ".pytest_cache",
)


@dataclass(frozen=True)
class LintConfig:
    """Runtime configuration for a lint run."""

    # Directory holding onion.config.json; layer paths are relative to it
    base_dir: Path

    # File extensions
    source_exts: tuple[str, ...] = (".py",)
    stub_exts: tuple[str, ...] = (".pyi",)

    # Directory exclusions
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS


def is_source_file(cfg: LintConfig, name: str) -> bool:
    """True for source files, false for stubs and anything else."""
    if any(name.endswith(ext) for ext in cfg.stub_exts):
        return False
    return any(name.endswith(ext) for ext in cfg.source_exts)


# =============================================================================
# onion.config.json
# =============================================================================

class Rule(BaseModel):
    """The set of layers one layer may import from."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_layer: str = Field(alias="from")
    allowed_imports: tuple[str, ...] = Field(alias="allowedImports")


class OnionConfig(BaseModel):
    """
    Parsed onion.config.json.

    Attributes:
        layers: Layer name -> directory relative to the config file, in
            declaration order
        rules: One Rule per layer
    """
    model_config = ConfigDict(frozen=True)

    layers: dict[str, str]
    rules: tuple[Rule, ...]

    @property
    def layer_names(self) -> list[str]:
        return list(self.layers)

    def rule_for(self, layer: str) -> Optional[Rule]:
        """Return the first rule whose source is *layer*, if any."""
        for rule in self.rules:
            if rule.from_layer == layer:
                return rule
        return None


def _find_file_recursive(
    directory: Path,
    filename: str,
    exclude_dirs: tuple[str, ...],
) -> Optional[Path]:
    candidate = directory / filename
    if candidate.is_file():
        return candidate

    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        logger.debug(f"Cannot list {directory}: {e}")
        return None

    for entry in entries:
        if not entry.is_dir():
            continue
        if entry.name in exclude_dirs:
            continue
        found = _find_file_recursive(entry, filename, exclude_dirs)
        if found is not None:
            return found
    return None


def find_config_file(
    start_dir: Path,
    filename: str = CONFIG_FILENAME,
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS,
) -> Path:
    """
    Depth-first search for *filename* in start_dir and its descendants.

    A directory's own file is checked before its subdirectories, which are
    visited in sorted order, so the first match is deterministic.

    Raises:
        ConfigNotFoundError: If no such file exists in the tree.
    """
    start = start_dir.resolve()
    found = _find_file_recursive(start, filename, exclude_dirs)
    if found is None:
        raise ConfigNotFoundError(filename, start)
    return found


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """json object hook: layer names and other keys must be unique."""
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"Duplicate key {key!r}")
        result[key] = value
    return result


def load_config(path: Path) -> OnionConfig:
    """
    Read and parse a config file.

    Raises:
        ConfigParseError: If the file cannot be read, is not JSON, or does not
            match the layers/rules shape, or repeats a key.
    """
    try:
        data = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigParseError(path, str(e)) from e

    try:
        document = json.loads(data, object_pairs_hook=_reject_duplicate_keys)
    except ValueError as e:
        raise ConfigParseError(path, str(e)) from e

    try:
        return OnionConfig.model_validate(document)
    except ValidationError as e:
        raise ConfigParseError(path, str(e)) from e


def validate_config(config: OnionConfig) -> list[Finding]:
    """
    Check the structural invariants of a parsed config.

    Every problem is reported; an empty list means the config is valid.
    """
    findings: list[Finding] = []
    layer_names = set(config.layers)

    for rule in config.rules:
        if rule.from_layer not in layer_names:
            findings.append(Finding(
                rule_id="CONFIG-UNKNOWN-LAYER",
                severity=ERROR,
                message=f"Rule from layer {rule.from_layer} does not exist",
                layer=rule.from_layer,
            ))
        for allowed in rule.allowed_imports:
            if allowed not in layer_names:
                findings.append(Finding(
                    rule_id="CONFIG-UNKNOWN-IMPORT",
                    severity=ERROR,
                    message=(
                        f"Rule from layer {rule.from_layer} allows import "
                        f"from non-existent layer {allowed}"
                    ),
                    layer=rule.from_layer,
                    target_layer=allowed,
                ))

    for layer in config.layers:
        count = sum(1 for rule in config.rules if rule.from_layer == layer)
        if count == 0:
            findings.append(Finding(
                rule_id="CONFIG-NO-RULES",
                severity=ERROR,
                message=f"Layer {layer} has no rules",
                layer=layer,
            ))
        elif count > 1:
            findings.append(Finding(
                rule_id="CONFIG-DUPLICATE-RULE",
                severity=ERROR,
                message=f"Layer {layer} has more than one rule",
                layer=layer,
            ))

    return findings
