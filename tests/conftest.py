"""
Pytest configuration and shared fixtures.
"""

import json
import sys
import textwrap
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from onion_lint.config import LintConfig, OnionConfig


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def demos_dir():
    """Path to the sample projects."""
    return Path(__file__).parent / "fixtures" / "demos"


@pytest.fixture
def fresh_demo(demos_dir):
    """Sample project whose imports all follow the rules."""
    return demos_dir / "fresh"


@pytest.fixture
def rotten_demo(demos_dir):
    """Sample project where app-services imports infrastructure."""
    return demos_dir / "rotten"


# =============================================================================
# PROJECT FACTORY
# =============================================================================

AB_CONFIG = {
    "layers": {"A": "a", "B": "b"},
    "rules": [
        {"from": "A", "allowedImports": ["B"]},
        {"from": "B", "allowedImports": []},
    ],
}


@pytest.fixture
def make_project(tmp_path):
    """
    Build a project under tmp_path.

    Call with a config dict (written as onion.config.json, or skipped when
    None) and a {relative_path: source} dict. Returns the project root.
    """
    def _make(config, files=None):
        if config is not None:
            (tmp_path / "onion.config.json").write_text(json.dumps(config), encoding="utf-8")
        for rel, text in (files or {}).items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(text), encoding="utf-8")
        return tmp_path
    return _make


@pytest.fixture
def ab_config():
    return OnionConfig.model_validate(AB_CONFIG)


@pytest.fixture
def lint_cfg(tmp_path):
    return LintConfig(base_dir=tmp_path)


@pytest.fixture
def deny_listing(monkeypatch):
    """Make Path.iterdir raise PermissionError for directories with a given name."""
    original = Path.iterdir

    def _deny(name):
        def iterdir(self):
            if self.name == name:
                raise PermissionError(13, "Permission denied", str(self))
            return original(self)

        monkeypatch.setattr(Path, "iterdir", iterdir)
    return _deny
