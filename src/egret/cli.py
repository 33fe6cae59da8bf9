"""Command-line interface for scanning regex patterns."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from egret.errors import ScanError

CONFIG_NAME = "egret.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    patterns: list[str]
    debug: bool
    strict: bool
    verbose: bool


class _Totals:
    """Collects scanner statistics across patterns."""

    def __init__(self) -> None:
        self.values: dict[tuple[str, str], int] = {}

    def add(self, component: str, name: str, value: int) -> None:
        key = (component, name)
        self.values[key] = self.values.get(key, 0) + value


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="egret-scan",
        description="Tokenize regular expressions and report unsupported constructs",
    )
    p.add_argument("patterns", nargs="*", metavar="PATTERN", help="Pattern to scan")
    p.add_argument(
        "-f",
        "--file",
        action="append",
        default=[],
        metavar="FILE",
        help="File with one pattern per line (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--debug", action="store_true", help="Dump token streams to stderr")
    p.add_argument("--strict", action="store_true", help="Fail on advisory warnings")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def read_pattern_file(path: Path) -> list[str]:
    """Return the non-blank lines of *path*, one pattern each."""
    text = path.read_text(encoding="utf-8")
    return [line for line in text.splitlines() if line.strip()]


def resolve_options(args: argparse.Namespace, search_dir: Path | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    if search_dir is None:
        search_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir)

    cfg_scan = config.get("scan")
    if not isinstance(cfg_scan, dict):
        cfg_scan = {}

    # Patterns: config, then files, then positional
    patterns: list[str] = []
    cfg_patterns = cfg_scan.get("patterns")
    if isinstance(cfg_patterns, list):
        patterns.extend(str(p) for p in cfg_patterns)
    for raw in args.file:
        patterns.extend(read_pattern_file(Path(raw)))
    patterns.extend(args.patterns)

    # Flags: config < CLI (a CLI flag can only switch on)
    debug = cfg_scan.get("debug") is True or args.debug
    strict = cfg_scan.get("strict") is True or args.strict

    return CliOptions(
        patterns=patterns,
        debug=debug,
        strict=strict,
        verbose=args.verbose,
    )


def scan_pattern(pattern: str, options: CliOptions, totals: _Totals) -> bool:
    """Scan one pattern and report it. Returns True if it passes."""
    from egret.debug import dump_tokens
    from egret.scanner import Scanner

    try:
        scanner = Scanner(pattern)
    except ScanError as exc:
        print(str(exc), file=sys.stderr)
        totals.add("SCANNER", "Failures", 1)
        return False

    scanner.add_stats(totals)
    totals.add("SCANNER", "Warnings", len(scanner.warnings))
    print(f"{pattern}: {len(scanner)} tokens")
    for warning in scanner.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    if options.debug:
        dump_tokens(scanner.tokens, file=sys.stderr)

    return not (options.strict and scanner.warnings)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if not options.patterns:
        print("error: no patterns given", file=sys.stderr)
        return 2

    totals = _Totals()
    ok = True
    for pattern in options.patterns:
        if not scan_pattern(pattern, options, totals):
            ok = False

    tokens = totals.values.get(("SCANNER", "Tokens"), 0)
    failures = totals.values.get(("SCANNER", "Failures"), 0)
    print(
        f"scanned {len(options.patterns)} patterns: {failures} failed, {tokens} tokens",
        file=sys.stderr,
    )
    return 0 if ok else 1
