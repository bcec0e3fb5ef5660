"""
onion_lint — Reporting and output formatting.

Handles:
- Finding dataclass
- Human-readable output
- JSON lines output
- Fresh / Rotten verdict banners
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Iterable, Optional

FRESH_BANNER = "👍 Fresh 🧅"
ROTTEN_BANNER = "👎 Rotten 🧅"

ERROR = "ERROR"
WARN = "WARN"


@dataclass(frozen=True)
class Finding:
    """A single lint finding."""
    rule_id: str
    severity: str  # "ERROR" or "WARN"
    message: str
    path: str = ""
    line: int = 0
    col: int = 0
    layer: Optional[str] = None
    target_layer: Optional[str] = None
    evidence: str = ""

    def __str__(self) -> str:
        return self.message


class Reporter:
    """Collects findings in the order they were produced."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self.config_path = config_path
        self.findings: list[Finding] = []

    def add(self, finding: Finding) -> None:
        self.findings.append(finding)

    def extend(self, findings: Iterable[Finding]) -> None:
        for finding in findings:
            self.add(finding)

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == WARN]

    @property
    def passed(self) -> bool:
        """True when no ERROR finding was recorded."""
        return not self.errors

    @property
    def banner(self) -> str:
        return FRESH_BANNER if self.passed else ROTTEN_BANNER

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def render_human(self) -> str:
        """Render findings one per line, keeping scan order."""
        lines = [str(f) for f in self.findings]
        lines.append(self.banner)
        return "\n".join(lines)

    def to_jsonl(self) -> str:
        return "\n".join(json.dumps(asdict(f), ensure_ascii=False) for f in self.findings)
