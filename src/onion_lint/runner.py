"""
onion_lint — Main runner and CLI.

Finds onion.config.json, validates it, checks every layer and prints the
verdict.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .config import LintConfig, find_config_file, load_config, validate_config
from .errors import OnionLintError
from .reporting import ROTTEN_BANNER, Reporter
from .rules import check_layers

logger = logging.getLogger(__name__)


def run_with_config(config_path: Path) -> Reporter:
    """
    Lint the project described by a known config file.

    An invalid config ends the run before any file is scanned.

    Raises:
        ConfigParseError: If the config cannot be parsed.
    """
    config = load_config(config_path)
    cfg = LintConfig(base_dir=config_path.parent)
    reporter = Reporter(config_path=config_path)

    reporter.extend(validate_config(config))
    if not reporter.passed:
        logger.debug("Config is invalid; skipping scan")
        return reporter

    reporter.extend(check_layers(config, cfg))
    return reporter


def run(start_dir: Path) -> Reporter:
    """
    Search start_dir for onion.config.json and lint that project.

    Raises:
        ConfigNotFoundError: If no config file exists under start_dir.
        ConfigParseError: If the config cannot be parsed.
    """
    config_path = find_config_file(start_dir)
    logger.debug(f"Found config at {config_path}")
    return run_with_config(config_path)


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    # Fix unicode output on Windows console
    if sys.platform == "win32":
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding="utf-8", errors="replace")  # type: ignore[union-attr]

    parser = argparse.ArgumentParser(
        prog="onion-lint",
        description=f"onion_lint v{__version__} — layer dependency-direction linter",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Directory to search for onion.config.json (default: current directory)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Print findings as JSON lines on stdout",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    # In JSON mode stdout carries only findings
    info_stream = sys.stderr if args.json_output else sys.stdout
    start_dir = args.root if args.root is not None else Path.cwd()

    try:
        config_path = find_config_file(start_dir)
        print(f"Using config {config_path}", file=info_stream)
        reporter = run_with_config(config_path)
    except OnionLintError as e:
        print(f"Failed to load config: {e}", file=sys.stderr)
        print(ROTTEN_BANNER, file=info_stream)
        return 1

    if args.json_output:
        if reporter.findings:
            print(reporter.to_jsonl())
        print(reporter.banner, file=info_stream)
    else:
        print(reporter.render_human())

    return reporter.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
