"""Read-only token cursor consumed by the regex parser."""

from __future__ import annotations

from typing import Protocol

from egret.errors import InternalConsistencyError, InvalidRangeError, ScanWarning
from egret.lexer import tokenize
from egret.tokens import CharToken, RepeatToken, Token, TokenType, token_name

# Kinds that can end an operand
_OPERAND_END = frozenset(
    {
        TokenType.STAR,
        TokenType.PLUS,
        TokenType.QUESTION,
        TokenType.REPEAT,
        TokenType.RIGHT_PAREN,
        TokenType.CHARACTER,
        TokenType.CARET,
        TokenType.DOLLAR,
        TokenType.WORD_BOUNDARY,
        TokenType.CHAR_CLASS,
        TokenType.RIGHT_BRACKET,
    }
)

# Kinds that continue the preceding operand rather than start a new one
_CONTINUATION = frozenset(
    {
        TokenType.ALTERNATION,
        TokenType.STAR,
        TokenType.PLUS,
        TokenType.QUESTION,
        TokenType.REPEAT,
        TokenType.RIGHT_PAREN,
        TokenType.RIGHT_BRACKET,
    }
)


class StatsSink(Protocol):
    def add(self, component: str, name: str, value: int) -> None: ...


class Scanner:
    """Tokenize a pattern up front, then hand tokens out one at a time.

    The token stream is fixed once the constructor returns. Fatal scan
    errors propagate from the constructor; no partial stream is kept.
    """

    def __init__(self, pattern: str) -> None:
        self._source = pattern
        tokens, warnings = tokenize(pattern)
        self._tokens: tuple[Token, ...] = tuple(tokens)
        self._warnings: tuple[ScanWarning, ...] = tuple(warnings)
        self._index = 0

    def __len__(self) -> int:
        return len(self._tokens)

    @property
    def source(self) -> str:
        return self._source

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._tokens

    @property
    def warnings(self) -> tuple[ScanWarning, ...]:
        return self._warnings

    @property
    def index(self) -> int:
        return self._index

    # ------------------------------------------------------------------
    # Accessors for the token at the cursor
    # ------------------------------------------------------------------

    def current(self) -> Token | None:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def type(self) -> TokenType:
        """Kind of the current token, or EOF past the end."""
        tok = self.current()
        return tok.type if tok is not None else TokenType.EOF

    def type_name(self) -> str:
        return token_name(self.type())

    def character(self) -> str:
        tok = self.current()
        if not isinstance(tok, CharToken):
            raise InternalConsistencyError(
                f"character requested for {self.type_name()} token at index {self._index}"
            )
        return tok.character

    def repeat_lower(self) -> int:
        return self._repeat_token().lower

    def repeat_upper(self) -> int | None:
        """Upper bound of the current REPEAT token; None if unbounded."""
        return self._repeat_token().upper

    def _repeat_token(self) -> RepeatToken:
        tok = self.current()
        if not isinstance(tok, RepeatToken):
            raise InternalConsistencyError(
                f"repeat bounds requested for {self.type_name()} token at index {self._index}"
            )
        return tok

    def advance(self) -> None:
        self._index += 1

    # ------------------------------------------------------------------
    # Lookahead predicates
    # ------------------------------------------------------------------

    def is_concat(self) -> bool:
        """Return True if an implicit concatenation belongs before the current token."""
        if self._index == 0 or self._index >= len(self._tokens):
            return False
        prev_type = self._tokens[self._index - 1].type
        next_type = self._tokens[self._index].type
        return prev_type in _OPERAND_END and next_type not in _CONTINUATION

    def is_char_range(self) -> bool:
        """Return True if the cursor is at ``CHARACTER HYPHEN CHARACTER``.

        Raises InvalidRangeError for an inverted range or a range whose
        bound is a character class.
        """
        if self._index + 3 > len(self._tokens):
            return False
        first, hyphen, last = self._tokens[self._index : self._index + 3]
        if hyphen.type != TokenType.HYPHEN:
            return False
        if not (isinstance(first, CharToken) and isinstance(last, CharToken)):
            return False

        if first.type == TokenType.CHAR_CLASS or last.type == TokenType.CHAR_CLASS:
            raise InvalidRangeError(
                "improperly constructed range using char class",
                first.span.start,
                self._source,
            )
        if ord(first.character) > ord(last.character):
            raise InvalidRangeError(
                f"improperly formed range {first.character}-{last.character}",
                first.span.start,
                self._source,
            )
        return True

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def add_stats(self, stats: StatsSink) -> None:
        stats.add("SCANNER", "Tokens", len(self._tokens))
