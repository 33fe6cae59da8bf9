"""Repeat quantifier parsing: {n}, {n,}, {,m}, {n,m}.

The bounds are runs of ASCII digits. Any other shape, including embedded
spaces, is not a quantifier and the caller treats the ``{`` as a literal:
``a{3, 4}`` only matches the text ``a{3, 4}``. The fatal cases are a
pattern that ends inside the braces, an inverted ``{n,m}`` and the
pointless ``{0}``, ``{,0}`` and ``{0,0}``.
"""

from __future__ import annotations

from dataclasses import dataclass

from egret.errors import InvalidQuantifierError, MalformedInputError
from egret.tokens import is_digit


@dataclass(frozen=True, slots=True)
class RepeatMatch:
    lower: int
    upper: int | None
    end: int  # offset just past the closing brace


def _read_digits(source: str, pos: int, start: int) -> tuple[str, int, str]:
    """Read a digit run at ``pos``; return (digits, stop offset, stop character)."""
    end = pos
    while end < len(source) and is_digit(source[end]):
        end += 1
    if end >= len(source):
        raise MalformedInputError("input string ended prematurely", start, source)
    return source[pos:end], end, source[end]


def parse_repeat(source: str, pos: int) -> RepeatMatch | None:
    """Parse a quantifier whose ``{`` is at ``pos``.

    Returns None when the text is not a well-formed quantifier; nothing is
    consumed in that case.
    """
    lower_text, i, stop = _read_digits(source, pos + 1, pos)

    if stop == "}":
        if not lower_text:
            return None
        count = int(lower_text)
        if count == 0:
            raise InvalidQuantifierError("pointless repeat quantifier {0}", pos, source)
        return RepeatMatch(count, count, i + 1)

    if stop != ",":
        return None

    upper_text, i, stop = _read_digits(source, i + 1, pos)
    if stop != "}" or not (lower_text or upper_text):
        return None

    lower = int(lower_text) if lower_text else 0
    if not upper_text:
        return RepeatMatch(lower, None, i + 1)

    upper = int(upper_text)
    if lower > upper:
        raise InvalidQuantifierError(
            f"invalid repeat quantifier: lower bound {lower} is greater than "
            f"upper bound {upper}",
            pos,
            source,
        )
    if upper == 0:
        raise InvalidQuantifierError(
            f"pointless repeat quantifier {source[pos : i + 1]}", pos, source
        )
    return RepeatMatch(lower, upper, i + 1)
