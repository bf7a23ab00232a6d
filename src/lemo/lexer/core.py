"""Single-pass lexer for lemo source text.

Scans words separated by delimiter characters, drops ``//`` line comments,
and classifies every other word as a literal or an operation keyword.

No regex in the hot path. Every step advances the position, so lexing is
O(n) in the length of the source.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from lemo.config import get_config, validate_delimiters
from lemo.errors import InvalidTokenError
from lemo.lexer.classifiers import WordClassifierMixin
from lemo.profiling import get_run_accumulator
from lemo.tokens import Number, Operation, OpKind, Token
from lemo.utils.logger import get_logger

logger = get_logger(__name__)

# A word exactly equal to this opens a comment running to end of line
COMMENT_MARKER = "//"


class Lexer(WordClassifierMixin):
    """Single-pass lexer for lemo.

    Usage:
            >>> lexer = Lexer("push 5 // five\\ndump")
            >>> list(lexer.tokenize())
        [Operation(PUSH), Number(5), Operation(DUMP)]

    Thread Safety:
        Lexer instances are single-use. Create one per source string.
        All state is instance-local; no shared mutable state.

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source) to avoid repeated calls
        "_delimiters",
        "_pos",
        "_lineno",
        "_col",
        "_source_file",
        "_saved_lineno",
        "_saved_col",
    )

    def __init__(
        self,
        source: str,
        *,
        delimiters: str | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: lemo source text
            delimiters: Word separator characters (defaults to the active
                InterpreterConfig's delimiters)
            source_file: Optional source file path for error messages

        Raises:
            ValueError: If an explicit delimiter set is empty or contains a digit.
        """
        if delimiters is None:
            delimiters = get_config().delimiters
        else:
            validate_delimiters(delimiters)
        self._source = source
        self._source_len = len(source)
        self._delimiters = frozenset(delimiters)
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._source_file = source_file
        self._saved_lineno = 1
        self._saved_col = 1

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into a token stream.

        Yields:
            Token objects in encounter order

        Raises:
            InvalidTokenError: On the first word that is neither a literal
                nor a keyword.
        """
        source_len = self._source_len
        while self._pos < source_len:
            self._commit_to(self._find_word_start())
            if self._pos >= source_len:
                break

            start = self._pos
            self._save_location()
            end = self._find_word_end()
            word = self._source[start:end]
            self._commit_to(end)

            if word == COMMENT_MARKER:
                self._commit_to(self._find_line_end())
                continue

            yield self._classify_word(word, start)

    # =========================================================================
    # Window navigation helpers
    # =========================================================================

    def _find_word_start(self) -> int:
        """Find the first non-delimiter position at or after the current one."""
        pos = self._pos
        delimiters = self._delimiters
        while pos < self._source_len and self._source[pos] in delimiters:
            pos += 1
        return pos

    def _find_word_end(self) -> int:
        """Find the end of the word starting at the current position."""
        pos = self._pos
        delimiters = self._delimiters
        while pos < self._source_len and self._source[pos] not in delimiters:
            pos += 1
        return pos

    def _find_line_end(self) -> int:
        """Find the end of the current line (position of \\n or EOF).

        The newline itself is left for the next delimiter skip.
        """
        idx = self._source.find("\n", self._pos)
        return idx if idx != -1 else self._source_len

    def _commit_to(self, target: int) -> None:
        """Advance position to target, updating line and column.

        Newlines count toward the line number whether or not they are
        delimiters.

        Args:
            target: Position to commit to.
        """
        if target == self._pos:
            return

        segment = self._source[self._pos : target]
        newline_count = segment.count("\n")
        if newline_count > 0:
            self._lineno += newline_count
            self._col = len(segment) - segment.rfind("\n")
        else:
            self._col += len(segment)
        self._pos = target

    # =========================================================================
    # Token construction
    # =========================================================================

    def _save_location(self) -> None:
        """Save current location as the start of the word being scanned."""
        self._saved_lineno = self._lineno
        self._saved_col = self._col

    def _make_number(self, value: int, start_pos: int, end_pos: int) -> Number:
        return Number(
            value,
            _lineno=self._saved_lineno,
            _col=self._saved_col,
            _start_offset=start_pos,
            _end_offset=end_pos,
            _source_file=self._source_file,
        )

    def _make_operation(self, kind: OpKind, start_pos: int, end_pos: int) -> Operation:
        return Operation(
            kind,
            _lineno=self._saved_lineno,
            _col=self._saved_col,
            _start_offset=start_pos,
            _end_offset=end_pos,
            _source_file=self._source_file,
        )

    def _invalid_token(self, word: str) -> InvalidTokenError:
        return InvalidTokenError(
            word,
            lineno=self._saved_lineno,
            col_offset=self._saved_col,
            source_file=self._source_file,
        )


def lex(
    source: str,
    delimiters: str | None = None,
    *,
    source_file: str | None = None,
) -> tuple[Token, ...]:
    """Lex source text into an immutable token sequence.

    Args:
        source: lemo source text
        delimiters: Word separator characters (defaults to the active
            InterpreterConfig's delimiters)
        source_file: Optional source file path for error messages

    Returns:
        Tuple of tokens in source order

    Raises:
        InvalidTokenError: If any word is neither a literal nor a keyword.

    Example:
        >>> lex("push 3 push 4 add dump")
        (Operation(PUSH), Number(3), Operation(PUSH), Number(4), Operation(ADD), Operation(DUMP))
    """
    tokens = tuple(Lexer(source, delimiters=delimiters, source_file=source_file).tokenize())
    logger.debug("Lexed %d token(s) from %s", len(tokens), source_file or "<string>")

    acc = get_run_accumulator()
    if acc is not None:
        acc.record_lex(source_length=len(source), token_count=len(tokens))

    return tokens
