"""nipl scripting language tokenizer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nipl.tokens import Token

__version__ = "0.1.0"


def tokenize(source: str) -> list[Token]:
    """Tokenize one chunk of nipl source; the list ends with an EOF token."""
    from nipl.lexer import tokenize as _tokenize

    return _tokenize(source)
