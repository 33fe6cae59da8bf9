"""Error types with formatted source context, and advisory warnings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from egret.tokens import Span


class ErrorKind(Enum):
    UNSUPPORTED_CONSTRUCT = auto()
    MALFORMED_INPUT = auto()
    INVALID_RANGE = auto()
    INVALID_QUANTIFIER = auto()


def _display(text: str) -> str:
    """Escape non-printable characters so a pattern prints on one line."""
    return "".join(
        ch if ch.isprintable() else ch.encode("unicode_escape").decode("ascii") for ch in text
    )


class ScanError(Exception):
    """Raised on the first fatal scanning error, with position and source context."""

    kind: ErrorKind

    def __init__(self, message: str, position: int, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    @property
    def column(self) -> int:
        """1-based column of the error within the pattern."""
        return self.position + 1

    def format(self, name: str = "pattern") -> str:
        source_line = _display(self.source)
        col = len(_display(self.source[: self.position])) + 1

        pad = " " * (col - 1)
        gutter = "  |"

        return (
            f"error: {self.message}\n"
            f"  --> {name}:{col}\n"
            f"{gutter}\n"
            f"{gutter} {source_line}\n"
            f"{gutter} {pad}^"
        )


class UnsupportedConstructError(ScanError):
    """The dialect deliberately excludes the construct."""

    kind = ErrorKind.UNSUPPORTED_CONSTRUCT


class MalformedInputError(ScanError):
    """The pattern ends, or is garbled, where a construct needs more input."""

    kind = ErrorKind.MALFORMED_INPUT


class InvalidRangeError(ScanError):
    """A set range is inverted or uses a character class as a bound."""

    kind = ErrorKind.INVALID_RANGE


class InvalidQuantifierError(ScanError):
    """A repeat quantifier is inverted or pointless."""

    kind = ErrorKind.INVALID_QUANTIFIER


class InternalConsistencyError(Exception):
    """A token accessor was called on a token kind that lacks the field.

    Signals a defect in the calling parser, never a problem with the pattern.
    """


@dataclass(frozen=True, slots=True)
class ScanWarning:
    """Advisory diagnostic: the construct is accepted but has no effect."""

    message: str
    span: Span

    def __str__(self) -> str:
        return self.message
