"""Lexical front end for the EGRET regular-expression dialect."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from egret.scanner import Scanner

__version__ = "0.1.0"


def scan(pattern: str) -> Scanner:
    """Tokenize a pattern and return a Scanner positioned at its first token."""
    from egret.scanner import Scanner

    return Scanner(pattern)
