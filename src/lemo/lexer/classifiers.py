"""Word classifier mixin for the lemo lexer.

Classifiers are pure logic: given one delimiter-free word they decide which
token it is, or reject it. They never move the lexer position.
"""

from lemo.errors import InvalidTokenError
from lemo.tokens import KEYWORDS, Number, Operation, OpKind, Token
from lemo.utils.integers import INT64_MAX, saturate_i64
from lemo.utils.logger import get_logger

logger = get_logger(__name__)

# ASCII only: str.isdigit() would also accept other Unicode digits
DIGITS = frozenset("0123456789")
_MAX_LITERAL_DIGITS = len(str(INT64_MAX))


class WordClassifierMixin:
    """Mixin providing literal and keyword classification."""

    def _make_number(self, value: int, start_pos: int, end_pos: int) -> Number:
        """Create a Number token with raw coordinates. Implemented by Lexer."""
        raise NotImplementedError

    def _make_operation(self, kind: OpKind, start_pos: int, end_pos: int) -> Operation:
        """Create an Operation token with raw coordinates. Implemented by Lexer."""
        raise NotImplementedError

    def _invalid_token(self, word: str) -> InvalidTokenError:
        """Build an InvalidTokenError at the saved location. Implemented by Lexer."""
        raise NotImplementedError

    def _classify_word(self, word: str, start_pos: int) -> Token:
        """Classify a word as a literal or a keyword.

        A word starting with a decimal digit is a literal and must be all
        digits; anything else must be a keyword.

        Args:
            word: Non-empty run of non-delimiter characters
            start_pos: Position in source where the word starts

        Returns:
            Number or Operation token.

        Raises:
            InvalidTokenError: If the word matches neither grammar.
        """
        end_pos = start_pos + len(word)
        if word[0] in DIGITS:
            return self._make_number(self._parse_literal(word), start_pos, end_pos)

        kind = KEYWORDS.get(word)
        if kind is None:
            raise self._invalid_token(word)
        return self._make_operation(kind, start_pos, end_pos)

    def _parse_literal(self, word: str) -> int:
        """Parse an all-digit word as a signed 64-bit literal.

        Literals past the 64-bit maximum saturate instead of wrapping.
        """
        for ch in word:
            if ch not in DIGITS:
                raise self._invalid_token(word)

        # Skip int() on huge words; it refuses very long digit strings
        if len(word.lstrip("0")) > _MAX_LITERAL_DIGITS:
            value = INT64_MAX + 1
        else:
            value = int(word, 10)
        saturated = saturate_i64(value)
        if saturated != value:
            logger.warning("Literal %s exceeds 64-bit range, saturating to %d", word, saturated)
        return saturated
