"""
onion_lint v1.0 — Dependency-direction linter for layered Python projects.

Reads onion.config.json, which maps layer names to directories and lists the
layers each layer may import from, then checks every relative import in
every layer against those rules.

Usage:
    onion-lint
    python -m onion_lint --json
    python -m onion_lint --root path/to/project
"""

__version__ = "1.0"
