"""nipl lexer: pulls tokens one at a time from a chunk of source text."""

from __future__ import annotations

import re
from collections.abc import Iterator

from nipl.tokens import (
    EOF_LITERAL,
    SINGLE_CHAR_TOKENS,
    TWO_CHAR_OPERATORS,
    WHITESPACE,
    Position,
    Token,
    TokenType,
    is_digit,
    is_letter_or_underscore,
    lookup_identifier,
)


class Lexer:
    """Scan a single chunk of nipl source (usually one line) into tokens.

    The lexer is a cursor over ``input``: ``position`` is the index of
    ``current_char`` and ``read_position`` the index of the next character to
    read. ``current_char`` is None once the cursor has moved past the end.
    Call ``next_token()`` until it returns an EOF token; after that it keeps
    returning EOF. Build a new Lexer for the next chunk.
    """

    def __init__(self, source: str) -> None:
        self.input = source
        self.position = 0
        self.read_position = 0
        self.current_char: str | None = None
        self._line = 1
        self._line_start = 0
        self.read_char()

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to, but not including, EOF."""
        while True:
            tok = self.next_token()
            if tok.type == TokenType.EOF:
                return
            yield tok

    def tokenize(self) -> list[Token]:
        """Scan the rest of the chunk and return the token list, EOF included."""
        tokens = list(self)
        tokens.append(self.next_token())
        return tokens

    # ------------------------------------------------------------------
    # Cursor primitives
    # ------------------------------------------------------------------

    def peek_char(self) -> str | None:
        """Return the character at read_position without consuming it."""
        if self.read_position < len(self.input):
            return self.input[self.read_position]
        return None

    def read_char(self) -> None:
        """Advance the cursor by one character. Safe past the end of input."""
        if self.current_char == "\n" or (self.current_char == "\r" and self.peek_char() != "\n"):
            self._line += 1
            self._line_start = self.read_position
        self.current_char = self.peek_char()
        self.position = self.read_position
        self.read_position += 1

    def skip_whitespace(self) -> None:
        while self.current_char is not None and self.current_char in WHITESPACE:
            self.read_char()

    def current_pos(self) -> Position:
        return Position(self._line, self.position - self._line_start + 1, self.position)

    # ------------------------------------------------------------------
    # Scans
    # ------------------------------------------------------------------

    def read_identifier(self) -> str:
        """Consume a run of letters/underscores and return it.

        Digits end the run, so ``five5`` scans as ``five`` followed by ``5``.
        """
        start = self.position
        while is_letter_or_underscore(self.current_char):
            self.read_char()
        return self.input[start : self.position]

    def read_number(self) -> str:
        """Consume a run of decimal digits and return it, leading zeros kept."""
        start = self.position
        while is_digit(self.current_char):
            self.read_char()
        return self.input[start : self.position]

    def _two_char_operator(self, ch: str, pos: Position) -> Token:
        single, double = TWO_CHAR_OPERATORS[ch]
        if self.peek_char() == "=":
            self.read_char()
            return Token(double, ch + "=", pos)
        return Token(single, ch, pos)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def next_token(self) -> Token:
        """Return the next token in the chunk, or EOF once it is exhausted."""
        self.skip_whitespace()

        pos = self.current_pos()
        ch = self.current_char
        if ch is None:
            return Token(TokenType.EOF, EOF_LITERAL, pos)

        if ch in TWO_CHAR_OPERATORS:
            tok = self._two_char_operator(ch, pos)
        elif ch in SINGLE_CHAR_TOKENS:
            tok = Token(SINGLE_CHAR_TOKENS[ch], ch, pos)
        elif is_letter_or_underscore(ch):
            text = self.read_identifier()
            return Token(lookup_identifier(text), text, pos)
        elif is_digit(ch):
            return Token(TokenType.INT, self.read_number(), pos)
        else:
            tok = Token(TokenType.ILLEGAL, ch, pos)

        # Step past the last character of a fixed-width token
        self.read_char()
        return tok


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source).tokenize()


_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(source: str) -> list[str]:
    """Split source into chunks at \\n, \\r\\n and \\r, keeping the line endings.

    Unlike str.splitlines, form feeds and other Unicode separators stay
    inside their line.
    """
    lines = []
    start = 0
    for m in _LINE_BREAK.finditer(source):
        lines.append(source[start : m.end()])
        start = m.end()
    if start < len(source):
        lines.append(source[start:])
    return lines
