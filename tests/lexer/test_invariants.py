"""Property-based tests for lexer invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from lemo.errors import InvalidTokenError
from lemo.lexer import lex
from lemo.tokens import KEYWORDS, Number, Operation, OpKind
from lemo.utils.integers import INT64_MAX

digit_words = st.text(alphabet="0123456789", min_size=1, max_size=25)
keyword_words = st.sampled_from(sorted(KEYWORDS))
words = st.one_of(digit_words, keyword_words)
separators = st.text(alphabet=" \n", min_size=1, max_size=3)


@st.composite
def programs(draw: st.DrawFn) -> str:
    """Valid source text: keywords and literals joined by delimiter runs."""
    parts = draw(st.lists(words, max_size=30))
    out = []
    for part in parts:
        out.append(part)
        out.append(draw(separators))
    return "".join(out)


class TestLiteralClassification:
    """Digit-only words are literals; digit-led mixed words are invalid."""

    @given(digit_words)
    @settings(max_examples=200)
    def test_push_digit_word(self, word: str) -> None:
        assert lex("push " + word) == (Operation(OpKind.PUSH), Number(min(int(word), INT64_MAX)))

    @given(
        st.sampled_from("0123456789"),
        st.text(min_size=1, max_size=10).filter(lambda s: s[0] not in "0123456789 \n"),
    )
    @settings(max_examples=200)
    def test_digit_followed_by_non_digit(self, lead: str, rest: str) -> None:
        word = lead + rest.split(" ")[0].split("\n")[0]
        with pytest.raises(InvalidTokenError):
            lex(word)


class TestBasicInvariants:
    """Structural invariants of valid programs."""

    @given(programs())
    @settings(max_examples=100)
    def test_one_token_per_word(self, source: str) -> None:
        assert len(lex(source)) == len(source.split())

    @given(programs())
    @settings(max_examples=100)
    def test_positions_point_at_words(self, source: str) -> None:
        """Each token's offsets slice its own word out of the source."""
        for token in lex(source):
            loc = token.location
            text = source[loc.offset : loc.end_offset]
            if isinstance(token, Operation):
                assert text == token.kind.keyword
            else:
                assert int(text) >= token.value

    @given(programs())
    @settings(max_examples=100)
    def test_line_numbers_match_newlines(self, source: str) -> None:
        for token in lex(source):
            loc = token.location
            assert loc.lineno == source.count("\n", 0, loc.offset) + 1
            assert loc.col_offset >= 1


class TestDeterminism:
    """Test that lexing is deterministic."""

    @given(programs())
    @settings(max_examples=50)
    def test_repeated_lexing_identical(self, source: str) -> None:
        assert lex(source) == lex(source)

    @given(st.integers(min_value=2, max_value=10), programs())
    @settings(max_examples=30)
    def test_n_times_lexing(self, n: int, source: str) -> None:
        first_result = lex(source)
        for _ in range(n - 1):
            assert lex(source) == first_result


class TestComments:
    """Comment lines never contribute tokens."""

    @given(programs(), st.text(alphabet=st.characters(blacklist_characters="\n"), max_size=50))
    @settings(max_examples=100)
    def test_comment_line_is_invisible(self, source: str, comment: str) -> None:
        commented = f"// {comment}\n{source}"
        assert lex(commented) == lex(source)
