"""Error types with formatted source context."""

from __future__ import annotations

from collections.abc import Iterable

from nipl.lexer import split_lines
from nipl.tokens import Position, Token, TokenType


class IllegalCharacterError(Exception):
    """Raised by consumers that refuse ILLEGAL tokens, with source context.

    The lexer itself never raises this; it emits ILLEGAL tokens and leaves the
    decision to the caller.
    """

    def __init__(self, message: str, position: Position, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    @classmethod
    def from_token(
        cls, token: Token, source: str, line_offset: int = 0
    ) -> IllegalCharacterError:
        pos = token.position or Position(1, 1, 0)
        line = pos.line + line_offset
        # Offset into the whole source, not the chunk the token came from
        offset = sum(len(text) for text in split_lines(source)[: line - 1]) + pos.column - 1
        position = Position(line, pos.column, offset)
        return cls(f"illegal character {token.literal!r}", position, source)

    def format(self, filename: str = "<stdin>") -> str:
        lines = split_lines(self.source)
        line_idx = self.position.line - 1
        col = self.position.column

        # Build the source line (strip trailing newline for display)
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        pad = " " * (col - 1)

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )


class ConfigError(Exception):
    """Raised when nipl.toml holds a value the front end cannot use."""


def check_tokens(tokens: Iterable[Token], source: str, line_offset: int = 0) -> None:
    """Raise IllegalCharacterError for the first ILLEGAL token, if any.

    *line_offset* shifts chunk-relative lines so that *source* can be the
    whole file a chunk was cut from.
    """
    for tok in tokens:
        if tok.type == TokenType.ILLEGAL:
            raise IllegalCharacterError.from_token(tok, source, line_offset)
