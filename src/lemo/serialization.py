"""Token serialization: JSON round-trip for lemo token sequences.

Converts tokens to/from JSON-compatible dicts. Useful for:
- Inspecting what the lexer produced (``lemo --tokens``)
- Feeding hand-edited token sequences to the evaluator in tests

All output is deterministic (sorted keys). Source coordinates are kept.

Example:
    from lemo import lex
    from lemo.serialization import to_json, from_json

    tokens = lex("push 1 dump")
    assert from_json(to_json(tokens)) == tokens

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Iterable
from typing import Any

from lemo.tokens import Number, Operation, OpKind, Token


def to_dict(token: Token) -> dict[str, Any]:
    """Convert a token to a JSON-compatible dict."""
    result: dict[str, Any]
    match token:
        case Number(value=value):
            result = {"type": "number", "value": value}
        case Operation(kind=kind):
            result = {"type": "operation", "op": kind.keyword}
        case _:
            raise TypeError(f"Cannot serialize {type(token).__name__}")

    if token.lineno:
        result["lineno"] = token.lineno
        result["col"] = token.col
        result["offset"] = token.location.offset
        result["end_offset"] = token.location.end_offset
    if token.source_file:
        result["source_file"] = token.source_file
    return result


def from_dict(data: dict[str, Any]) -> Token:
    """Reconstruct a token from a dict produced by to_dict().

    Raises:
        ValueError: On an unknown token type or operation keyword, a missing
            payload key, or a literal outside the signed 64-bit range.
    """
    coords = {
        "_lineno": data.get("lineno", 0),
        "_col": data.get("col", 0),
        "_start_offset": data.get("offset", 0),
        "_end_offset": data.get("end_offset", 0),
        "_source_file": data.get("source_file"),
    }
    token_type = data.get("type")
    try:
        if token_type == "number":
            return Number(int(data["value"]), **coords)
        if token_type == "operation":
            return Operation(OpKind(data["op"]), **coords)
    except KeyError as exc:
        raise ValueError(f"{token_type} token is missing key {exc.args[0]!r}") from None
    raise ValueError(f"Unknown token type: {token_type!r}")


def to_json(tokens: Iterable[Token], *, indent: int | None = None) -> str:
    """Serialize a token sequence to a JSON string."""
    return json.dumps([to_dict(t) for t in tokens], sort_keys=True, indent=indent)


def from_json(text: str) -> tuple[Token, ...]:
    """Deserialize a JSON string produced by to_json()."""
    return tuple(from_dict(item) for item in json.loads(text))


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
