"""Test repeat quantifiers {n}, {n,}, {,m}, {n,m} and the literal fallback."""

import pytest

from egret.errors import InvalidQuantifierError, MalformedInputError
from egret.repeat import RepeatMatch, parse_repeat
from egret.tokens import Span, TokenType

from .conftest import assert_chars, assert_types, repeat_bounds


class TestWellFormed:
    def test_exact(self, lex):
        tokens = lex("a{3}")
        assert_types(tokens, [TokenType.CHARACTER, TokenType.REPEAT])
        assert repeat_bounds(tokens[1]) == (3, 3)
        assert tokens[1].span == Span(1, 4)

    def test_bounded(self, lex):
        tokens = lex("a{3,4}")
        assert_types(tokens, [TokenType.CHARACTER, TokenType.REPEAT])
        assert repeat_bounds(tokens[1]) == (3, 4)

    def test_lower_only(self, lex):
        assert repeat_bounds(lex("a{2,}")[1]) == (2, None)

    def test_upper_only(self, lex):
        assert repeat_bounds(lex("a{,4}")[1]) == (0, 4)

    def test_zero_lower_unbounded(self, lex):
        assert repeat_bounds(lex("a{0,}")[1]) == (0, None)

    def test_equal_bounds(self, lex):
        assert repeat_bounds(lex("a{2,2}")[1]) == (2, 2)

    def test_multi_digit(self, lex):
        assert repeat_bounds(lex("a{10,120}")[1]) == (10, 120)

    def test_followed_by_text(self, lex):
        assert_types(
            lex("a{2}b"),
            [TokenType.CHARACTER, TokenType.REPEAT, TokenType.CHARACTER],
        )


class TestLazyRepeat:
    def test_lazy_suffix_collapsed(self, lex):
        tokens = lex("a{2,3}?")
        assert_types(tokens, [TokenType.CHARACTER, TokenType.REPEAT])
        assert tokens[1].span == Span(1, 7)

    def test_literal_brace_keeps_question(self, lex):
        assert_types(
            lex("a{?"),
            [TokenType.CHARACTER, TokenType.CHARACTER, TokenType.QUESTION],
        )


class TestLiteralFallback:
    def test_embedded_space(self, lex):
        tokens = lex("a{3, 4}")
        assert_chars(tokens, ["a", "{", "3", ",", " ", "4", "}"])

    def test_empty_braces(self, lex):
        assert_chars(lex("a{}"), ["a", "{", "}"])

    def test_comma_only(self, lex):
        assert_chars(lex("a{,}"), ["a", "{", ",", "}"])

    def test_non_digit(self, lex):
        assert_chars(lex("a{x}"), ["a", "{", "x", "}"])

    def test_second_comma(self, lex):
        assert_chars(lex("a{1,2,3}"), ["a", "{", "1", ",", "2", ",", "3", "}"])

    def test_rescan_after_fallback(self, lex):
        # Only the brace becomes literal; the rest is scanned normally
        assert_types(
            lex("{a*}"),
            [
                TokenType.CHARACTER,
                TokenType.CHARACTER,
                TokenType.STAR,
                TokenType.CHARACTER,
            ],
        )


class TestUnterminated:
    @pytest.mark.parametrize("pattern", ["a{", "a{3", "a{3,", "a{,4", "a{3,4"])
    def test_end_inside_braces(self, lex, pattern):
        with pytest.raises(MalformedInputError, match="ended prematurely"):
            lex(pattern)

    def test_error_position_is_brace(self, lex):
        with pytest.raises(MalformedInputError) as exc_info:
            lex("ab{12")
        assert exc_info.value.position == 2

    def test_parse_repeat_raises(self):
        with pytest.raises(MalformedInputError):
            parse_repeat("x{2,", 1)


class TestInvalid:
    def test_zero_exact(self, lex):
        with pytest.raises(InvalidQuantifierError, match=r"\{0\}"):
            lex("a{0}")

    def test_zero_zero(self, lex):
        with pytest.raises(InvalidQuantifierError, match=r"\{0,0\}"):
            lex("a{0,0}")

    def test_upper_zero(self, lex):
        with pytest.raises(InvalidQuantifierError, match="pointless"):
            lex("a{,0}")

    def test_inverted(self, lex):
        with pytest.raises(InvalidQuantifierError, match="lower bound 5 is greater than upper bound 2"):
            lex("a{5,2}")

    def test_error_position_is_brace(self, lex):
        with pytest.raises(InvalidQuantifierError) as exc_info:
            lex("ab{5,2}")
        assert exc_info.value.position == 2


class TestParseRepeat:
    def test_returns_end_offset(self):
        assert parse_repeat("x{2,5}y", 1) == RepeatMatch(2, 5, 6)

    def test_fallback_returns_none(self):
        assert parse_repeat("x{2, 5}", 1) is None

    def test_empty_returns_none(self):
        assert parse_repeat("{}", 0) is None
