"""Lex and run a lemo program in 3 lines, no configuration needed."""

from lemo import interpret, lex

tokens = lex("push 8 lshift dump push 8 rshift dump")
print(tokens)
interpret(tokens)
