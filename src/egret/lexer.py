"""Regex lexer — converts a pattern string into a flat token stream."""

from __future__ import annotations

from enum import Enum, auto

from egret.errors import MalformedInputError, ScanWarning, UnsupportedConstructError
from egret.logger import get_logger
from egret.numeric import decode_hex, decode_octal
from egret.repeat import parse_repeat
from egret.tokens import (
    CLASS_LETTERS,
    UNSUPPORTED_ESCAPES,
    CharToken,
    RepeatToken,
    Span,
    Token,
    TokenType,
    is_digit,
)

logger = get_logger(__name__)

# Characters with a fixed meaning outside a set
_SIMPLE_OPERATORS = {
    "|": TokenType.ALTERNATION,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

_LAZY_OPERATORS = {
    "*": TokenType.STAR,
    "+": TokenType.PLUS,
    "?": TokenType.QUESTION,
}

_ANCHORS = {
    "^": TokenType.CARET,
    "$": TokenType.DOLLAR,
}

_HEX_DIGIT_COUNTS = {"x": 2, "u": 4, "U": 8}


class _Mode(Enum):
    NORMAL = auto()
    SET = auto()  # between [ and ]; sets do not nest


class Lexer:
    """Tokenize a regex pattern into a list of Token objects."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._tokens: list[Token] = []
        self._warnings: list[ScanWarning] = []
        self._mode = _Mode.NORMAL

    def tokenize(self) -> tuple[list[Token], list[ScanWarning]]:
        """Tokenize the full pattern and return (tokens, warnings)."""
        while self._pos < len(self._source):
            if self._mode == _Mode.SET:
                self._lex_set()
            else:
                self._lex_normal()

        logger.debug(
            "tokenized %r: %d tokens, %d warnings",
            self._source,
            len(self._tokens),
            len(self._warnings),
        )
        return self._tokens, self._warnings

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        return ch

    def _last_type(self) -> TokenType | None:
        if self._tokens:
            return self._tokens[-1].type
        return None

    def _emit(self, tt: TokenType, start: int) -> Token:
        tok = Token(tt, Span(start, self._pos))
        self._tokens.append(tok)
        return tok

    def _emit_char(self, tt: TokenType, character: str, start: int) -> Token:
        tok = CharToken(tt, Span(start, self._pos), character)
        self._tokens.append(tok)
        return tok

    def _warn(self, message: str, start: int) -> None:
        warning = ScanWarning(message, Span(start, self._pos))
        logger.debug("advisory at offset %d: %s", start, message)
        self._warnings.append(warning)

    def _next_char(self, start: int) -> str:
        """Consume and return the next character; the pattern must not end here."""
        if self._pos >= len(self._source):
            raise MalformedInputError("input string ended prematurely", start, self._source)
        return self._advance()

    def _skip_lazy_suffix(self) -> None:
        # Lazy quantifiers are accepted but emitted as their greedy kind
        if self._peek() == "?":
            self._advance()

    # ------------------------------------------------------------------
    # Normal mode
    # ------------------------------------------------------------------

    def _lex_normal(self) -> None:
        ch = self._peek()
        start = self._pos

        if ch == "\\":
            self._lex_escape()
            return

        if ch == "[":
            self._advance()
            self._emit(TokenType.LEFT_BRACKET, start)
            self._mode = _Mode.SET
            return

        if ch == "?" and self._last_type() == TokenType.LEFT_PAREN:
            self._lex_extension()
            return

        if ch in _LAZY_OPERATORS:
            self._advance()
            self._skip_lazy_suffix()
            self._emit(_LAZY_OPERATORS[ch], start)
            return

        if ch in _SIMPLE_OPERATORS:
            self._advance()
            self._emit(_SIMPLE_OPERATORS[ch], start)
            return

        if ch in _ANCHORS:
            self._advance()
            self._emit(_ANCHORS[ch], start)
            return

        if ch == ".":
            self._advance()
            self._emit_char(TokenType.CHAR_CLASS, ".", start)
            return

        if ch == "{":
            self._lex_repeat()
            return

        # Anything else, including ] and - outside a set, is a literal
        self._advance()
        self._emit_char(TokenType.CHARACTER, ch, start)

    def _lex_repeat(self) -> None:
        start = self._pos
        match = parse_repeat(self._source, start)
        if match is None:
            self._advance()
            self._emit_char(TokenType.CHARACTER, "{", start)
            return

        self._pos = match.end
        self._skip_lazy_suffix()
        tok = RepeatToken(TokenType.REPEAT, Span(start, self._pos), match.lower, match.upper)
        self._tokens.append(tok)

    # ------------------------------------------------------------------
    # Set mode (inside [...])
    # ------------------------------------------------------------------

    def _lex_set(self) -> None:
        ch = self._peek()
        start = self._pos

        if ch == "\\":
            self._lex_escape()
            return

        first_in_set = self._last_type() == TokenType.LEFT_BRACKET

        if ch == "]" and not first_in_set:
            self._advance()
            self._emit(TokenType.RIGHT_BRACKET, start)
            self._mode = _Mode.NORMAL
            return

        if ch == "-" and not first_in_set and self._peek(1) != "]":
            self._advance()
            self._emit(TokenType.HYPHEN, start)
            return

        # Anchors keep their meaning; there is no negated-set syntax
        if ch in _ANCHORS:
            self._advance()
            self._emit(_ANCHORS[ch], start)
            return

        self._advance()
        self._emit_char(TokenType.CHARACTER, ch, start)

    # ------------------------------------------------------------------
    # Escapes
    # ------------------------------------------------------------------

    def _lex_escape(self) -> None:
        start = self._pos
        self._advance()  # consume backslash
        ch = self._next_char(start)

        if ch in CLASS_LETTERS:
            self._emit_char(TokenType.CHAR_CLASS, ch, start)
            return

        # \A and \Z only differ from ^ and $ in multi-line mode
        if ch == "A":
            self._emit(TokenType.CARET, start)
            return

        if ch == "Z":
            self._emit(TokenType.DOLLAR, start)
            return

        if ch == "b":
            # \b in a set is a backspace
            if self._mode == _Mode.SET:
                raise UnsupportedConstructError(
                    "unsupported character '\\b' in character set", start, self._source
                )
            self._emit(TokenType.WORD_BOUNDARY, start)
            self._warn("regex contains ignored \\b", start)
            return

        if ch == "B":
            self._emit(TokenType.WORD_BOUNDARY, start)
            self._warn("regex contains ignored \\B", start)
            return

        if ch in UNSUPPORTED_ESCAPES:
            raise UnsupportedConstructError(
                f"unsupported character '\\{ch}'", start, self._source
            )

        if is_digit(ch):
            value, self._pos = decode_octal(self._source, self._pos - 1, start)
            self._emit_char(TokenType.CHARACTER, value, start)
            return

        if ch in _HEX_DIGIT_COUNTS:
            value, self._pos = decode_hex(
                self._source, self._pos, _HEX_DIGIT_COUNTS[ch], start
            )
            self._emit_char(TokenType.CHARACTER, value, start)
            return

        # \\, \', \" and every other escaped character stand for themselves
        self._emit_char(TokenType.CHARACTER, ch, start)

    # ------------------------------------------------------------------
    # Extensions: (?...)
    # ------------------------------------------------------------------

    def _lex_extension(self) -> None:
        start = self._pos
        self._advance()  # consume ?
        ext = self._next_char(start)

        if ext == ":":
            self._emit(TokenType.NO_GROUP_EXT, start)
            return

        if ext == "P":
            ch = self._next_char(start)
            if ch == "=":
                raise UnsupportedConstructError(
                    "unsupported named backreference (?P=", start, self._source
                )
            if ch != "<":
                raise MalformedInputError(
                    "improperly specified named group: expected '<' after (?P",
                    start,
                    self._source,
                )
            while ch != ">":
                ch = self._next_char(start)
            self._emit(TokenType.NAMED_GROUP_EXT, start)
            return

        if ext in "#=!":
            self._emit(TokenType.IGNORED_EXT, start)
            self._warn(f"regex contains ignored extension ?{ext}", start)
            return

        if ext == "<":
            ch = self._next_char(start)
            if ch in ("=", "!"):
                self._emit(TokenType.IGNORED_EXT, start)
                self._warn(f"regex contains ignored extension ?<{ch}", start)
                return
            raise UnsupportedConstructError(
                f"unsupported extension ?<{ch}", start, self._source
            )

        raise UnsupportedConstructError(f"unsupported extension ?{ext}", start, self._source)


def tokenize(source: str) -> tuple[list[Token], list[ScanWarning]]:
    """Convenience function: tokenize a pattern and return (tokens, warnings)."""
    return Lexer(source).tokenize()
