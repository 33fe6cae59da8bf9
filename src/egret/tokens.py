"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Operators
    ALTERNATION = auto()  # |
    STAR = auto()  # * or *?
    PLUS = auto()  # + or +?
    QUESTION = auto()  # ? or ??
    REPEAT = auto()  # {n}, {n,}, {,m}, {n,m}

    # Groups
    LEFT_PAREN = auto()  # (
    RIGHT_PAREN = auto()  # )

    # Content
    CHARACTER = auto()  # literal character — value is the decoded character
    CHAR_CLASS = auto()  # \d \D \w \W \s \S or . — value is the selector letter

    # Sets
    LEFT_BRACKET = auto()  # [
    RIGHT_BRACKET = auto()  # ]
    HYPHEN = auto()  # range hyphen inside a set

    # Anchors
    CARET = auto()  # ^ or \A
    DOLLAR = auto()  # $ or \Z
    WORD_BOUNDARY = auto()  # \b or \B (ignored downstream)

    # Extensions: (?...)
    NO_GROUP_EXT = auto()  # ?:
    NAMED_GROUP_EXT = auto()  # ?P<name>
    IGNORED_EXT = auto()  # ?# ?= ?! ?<= ?<!

    EOF = auto()


@dataclass(frozen=True, slots=True)
class Span:
    """Source range as 0-based offsets, end exclusive."""

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Token:
    """A token with no payload: operators, delimiters, anchors, markers."""

    type: TokenType
    span: Span


@dataclass(frozen=True, slots=True)
class CharToken(Token):
    """A CHARACTER or CHAR_CLASS token."""

    character: str


@dataclass(frozen=True, slots=True)
class RepeatToken(Token):
    """A REPEAT token. ``upper`` is None when there is no upper bound."""

    lower: int
    upper: int | None


# Escaped letters that select a character class
CLASS_LETTERS = frozenset("dDwWsS")

# Escaped letters the dialect rejects outright
UNSUPPORTED_ESCAPES = frozenset("afnrtvp")

# Printable ASCII range accepted from numeric escapes
MIN_PRINTABLE = 32
MAX_PRINTABLE = 126


def token_name(tt: TokenType) -> str:
    """Return the display name of a token kind."""
    if tt is TokenType.EOF:
        return "<end of regex>"
    return tt.name


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch != "" and ch in "0123456789"


def is_octal_digit(ch: str) -> bool:
    """Return True if ch is an octal digit."""
    return ch != "" and ch in "01234567"


def is_hex_digit(ch: str) -> bool:
    """Return True if ch is a hexadecimal digit."""
    return ch != "" and ch in "0123456789abcdefABCDEF"


def is_printable(value: int) -> bool:
    """Return True if value is a printable ASCII code point."""
    return MIN_PRINTABLE <= value <= MAX_PRINTABLE
