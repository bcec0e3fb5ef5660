"""
onion_lint — Exception types.

Only fatal conditions are raised. Everything the linter can keep going after
(bad rules, unreadable files, boundary violations) is reported as a Finding.
"""

from __future__ import annotations

from pathlib import Path


class OnionLintError(Exception):
    """Base class for fatal onion_lint errors."""


class ConfigNotFoundError(OnionLintError):
    """Raised when no config file exists under the search directory."""
    def __init__(self, filename: str, start_dir: Path):
        self.filename = filename
        self.start_dir = start_dir
        super().__init__(f"Could not find {filename} under {start_dir}")


class ConfigParseError(OnionLintError):
    """Raised when the config file cannot be read or has the wrong shape."""
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid config {path}: {reason}")


class LayerDirectoryNotFoundError(OnionLintError):
    """Raised when a layer's root directory does not exist."""
    def __init__(self, layer: str, path: Path):
        self.layer = layer
        self.path = path
        super().__init__(f"Directory for layer {layer} does not exist: {path}")
