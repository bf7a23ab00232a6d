"""Lexer for the lemo stack language.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, lex
├── core.py              # Lexer class (navigation + location tracking), lex()
└── classifiers.py       # Literal / keyword classification mixin

Usage:
    >>> from lemo.lexer import lex
    >>> lex("push 8 lshift dump")
(Operation(PUSH), Number(8), Operation(LSHIFT), Operation(DUMP))

"""

from lemo.lexer.core import COMMENT_MARKER, Lexer, lex

__all__ = ["COMMENT_MARKER", "Lexer", "lex"]
