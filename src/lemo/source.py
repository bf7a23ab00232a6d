"""Loading lemo source text from disk."""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from lemo.errors import SourceReadError
from lemo.utils.logger import get_logger

logger = get_logger(__name__)


def read_source(path: str | PathLike[str]) -> str:
    """Read a whole source file as UTF-8 text.

    Args:
        path: Path to a lemo source file

    Returns:
        File contents

    Raises:
        SourceReadError: If the file is missing, unreadable, or not UTF-8.
    """
    source_path = Path(path)
    try:
        text = source_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SourceReadError(str(path), exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise SourceReadError(str(path), f"not valid UTF-8 ({exc.reason})") from exc

    logger.debug("Read %d character(s) from %s", len(text), source_path)
    return text


__all__ = ["read_source"]
