"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class TokenType(Enum):
    ILLEGAL = auto()  # any character that starts no lexeme
    EOF = auto()  # \0

    # Identifiers + literals
    IDENT = auto()  # add, foobar, x, y
    INT = auto()  # 1343456

    # Operators
    ASSIGN = auto()  # =
    PLUS = auto()  # +
    MINUS = auto()  # -
    BANG = auto()  # !
    SLASH = auto()  # /
    ASTERISK = auto()  # *
    LT = auto()  # <
    GT = auto()  # >
    EQ = auto()  # ==
    NOT_EQ = auto()  # !=
    LTE = auto()  # <=
    GTE = auto()  # >=

    # Delimiters
    COMMA = auto()  # ,
    SEMICOLON = auto()  # ;
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACE = auto()  # {
    RBRACE = auto()  # }

    # Keywords
    LET = auto()
    FUNCTION = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()
    TRUE = auto()
    FALSE = auto()


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Token:
    """A single token: its type and the exact source text it was scanned from.

    ``literal`` may be given as a single character or a string; it is stored
    as text. ``position`` is informational and ignored by equality.
    """

    type: TokenType
    literal: str
    position: Position | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.literal, str):
            object.__setattr__(self, "literal", str(self.literal))


EOF_LITERAL = "\0"

KEYWORDS: dict[str, TokenType] = {
    "let": TokenType.LET,
    "fn": TokenType.FUNCTION,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

# Operators that become a two-character token when followed by "=".
# char -> (single form, doubled form)
TWO_CHAR_OPERATORS: dict[str, tuple[TokenType, TokenType]] = {
    "=": (TokenType.ASSIGN, TokenType.EQ),
    "!": (TokenType.BANG, TokenType.NOT_EQ),
    "<": (TokenType.LT, TokenType.LTE),
    ">": (TokenType.GT, TokenType.GTE),
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "/": TokenType.SLASH,
    "*": TokenType.ASTERISK,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

WHITESPACE = frozenset(" \t\n\r")


def lookup_identifier(text: str) -> TokenType:
    """Return the keyword type for text, or IDENT if it is not reserved."""
    return KEYWORDS.get(text, TokenType.IDENT)


def is_letter_or_underscore(ch: str | None) -> bool:
    """Return True if ch is an ASCII letter or an underscore."""
    if ch is None:
        return False
    return "a" <= ch <= "z" or "A" <= ch <= "Z" or ch == "_"


def is_digit(ch: str | None) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    if ch is None:
        return False
    return "0" <= ch <= "9"
