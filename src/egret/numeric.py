"""Octal and hex escape decoding.

Both decoders are pure: they take the source and the offset of the first
digit, and return the decoded character plus the offset just past the last
digit consumed. ``start`` is the offset of the backslash, used for errors.
"""

from __future__ import annotations

from egret.errors import MalformedInputError, UnsupportedConstructError
from egret.tokens import is_hex_digit, is_octal_digit, is_printable


def decode_octal(source: str, pos: int, start: int) -> tuple[str, int]:
    """Decode ``\\d``, ``\\dd`` or ``\\ddd`` with the first digit at ``pos``.

    The first digit is any decimal digit; the following one or two must be
    octal. A lone digit is a null byte or a backreference, both rejected.
    """
    first = source[pos]
    second = source[pos + 1] if pos + 1 < len(source) else ""

    if not is_octal_digit(second):
        if first == "0":
            raise UnsupportedConstructError("unsupported character '\\0'", start, source)
        raise UnsupportedConstructError(
            f"unsupported backreference '\\{first}'", start, source
        )

    third = source[pos + 2] if pos + 2 < len(source) else ""
    if is_octal_digit(third):
        value = int(first) * 64 + int(second) * 8 + int(third)
        end = pos + 3
    else:
        value = int(first) * 8 + int(second)
        end = pos + 2

    if not is_printable(value):
        raise UnsupportedConstructError(f"unsupported octal value {value}", start, source)
    return chr(value), end


def decode_hex(source: str, pos: int, digit_count: int, start: int) -> tuple[str, int]:
    """Decode ``digit_count`` hex digits (2, 4 or 8) beginning at ``pos``.

    Only ASCII is supported, so every digit before the final two must be '0'.
    """
    for _ in range(digit_count - 2):
        if pos >= len(source):
            raise MalformedInputError("input string ended prematurely", start, source)
        if source[pos] != "0":
            raise UnsupportedConstructError(
                f"unsupported {digit_count}-digit hex number", start, source
            )
        pos += 1

    if pos + 2 > len(source):
        raise MalformedInputError("input string ended prematurely", start, source)

    digits = source[pos : pos + 2]
    for ch in digits:
        if not is_hex_digit(ch):
            raise MalformedInputError(f"invalid hex digit '{ch}'", start, source)

    value = int(digits, 16)
    if not is_printable(value):
        raise UnsupportedConstructError(f"unsupported hex value {value}", start, source)
    return chr(value), pos + 2
