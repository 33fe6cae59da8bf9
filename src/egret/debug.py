"""--debug token stream dump to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from egret.tokens import CharToken, RepeatToken, Token, token_name


def format_token(tok: Token) -> str:
    """Render one token as ``KIND`` or ``KIND:payload``."""
    name = token_name(tok.type)
    if isinstance(tok, RepeatToken):
        upper = "" if tok.upper is None else str(tok.upper)
        return f"{name}:{tok.lower},{upper}"
    if isinstance(tok, CharToken):
        return f"{name}:{tok.character}"
    return name


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token to *file*."""
    file.write("Scanner:\n")
    for tok in tokens:
        file.write(f"  {format_token(tok)}\n")
