"""Token dumps in text or JSON-lines form."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable
from typing import TextIO

from nipl.tokens import Token

FORMATS = ("text", "json")


def format_token(tok: Token, fmt: str = "text", *, line_offset: int = 0) -> str:
    """Render one token as a single line of output.

    *line_offset* is added to the token's line, for chunks taken from the
    middle of a file.
    """
    if fmt == "json":
        record: dict[str, object] = {"type": tok.type.name, "literal": tok.literal}
        if tok.position is not None:
            record["line"] = tok.position.line + line_offset
            record["column"] = tok.position.column
        return json.dumps(record)
    return f"{tok.type.name} {tok.literal!r}"


def dump_tokens(
    tokens: Iterable[Token],
    *,
    fmt: str = "text",
    file: TextIO = sys.stdout,
    line_offset: int = 0,
) -> None:
    """Print each token on its own line to *file*."""
    for tok in tokens:
        file.write(format_token(tok, fmt, line_offset=line_offset) + "\n")
