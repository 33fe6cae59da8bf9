"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from egret.errors import ScanWarning
from egret.lexer import tokenize
from egret.scanner import Scanner
from egret.tokens import CharToken, RepeatToken, Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes a pattern and returns its tokens."""

    def _lex(pattern: str) -> list[Token]:
        tokens, _ = tokenize(pattern)
        return tokens

    return _lex


@pytest.fixture
def lex_warnings():
    """Return a helper that tokenizes a pattern and returns its warnings."""

    def _lex_warnings(pattern: str) -> list[ScanWarning]:
        _, warnings = tokenize(pattern)
        return warnings

    return _lex_warnings


@pytest.fixture
def scan():
    """Return a helper that builds a Scanner, optionally advanced to an index."""

    def _scan(pattern: str, index: int = 0) -> Scanner:
        scanner = Scanner(pattern)
        for _ in range(index):
            scanner.advance()
        return scanner

    return _scan


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_chars(tokens: list[Token], expected: list[str]) -> None:
    """Assert that every token is a CHARACTER with the expected values."""
    assert all(t.type == TokenType.CHARACTER for t in tokens), [t.type for t in tokens]
    actual = [t.character for t in tokens if isinstance(t, CharToken)]
    assert actual == expected, f"Expected {expected}, got {actual}"


def repeat_bounds(tok: Token) -> tuple[int, int | None]:
    """Return (lower, upper) of a REPEAT token."""
    assert isinstance(tok, RepeatToken), f"Expected RepeatToken, got {tok!r}"
    return tok.lower, tok.upper
