"""Interactive read loop: one line in, one line's tokens out."""

from __future__ import annotations

from typing import TextIO

from nipl.debug import dump_tokens
from nipl.errors import IllegalCharacterError, check_tokens
from nipl.lexer import Lexer

PROMPT = ">> "

BANNER = """\
==============================Starting REPL==============================

    Welcome to the nipl repl...
    Type in valid commands and process them.
    Quit the terminal by entering a new line without any commands, or type 'quit'.

=========================================================================
"""


def is_terminator(line: str) -> bool:
    """Return True if line ends the session (end of input, bare newline, quit)."""
    if line == "":
        return True
    if line in ("\n", "\r\n"):
        return True
    return line.strip() == "quit"


def start(
    stdin: TextIO,
    stdout: TextIO,
    stderr: TextIO,
    *,
    prompt: str = PROMPT,
    banner: bool = True,
    fmt: str = "text",
    strict: bool = False,
) -> None:
    """Run the read loop until a terminator line is read.

    Each line gets a fresh Lexer; nothing carries over between lines. In
    strict mode an illegal character is reported on *stderr* after the line's
    tokens, and the session continues. Ctrl-C ends the session quietly, and
    so does input that cannot be decoded, after an error on *stderr*.
    """
    if banner:
        stdout.write(BANNER)

    try:
        while True:
            stdout.write(prompt)
            stdout.flush()

            try:
                line = stdin.readline()
            except UnicodeDecodeError as exc:
                print(f"error: cannot decode input: {exc}", file=stderr)
                return
            if is_terminator(line):
                return

            tokens = list(Lexer(line))
            dump_tokens(tokens, fmt=fmt, file=stdout)

            if strict:
                try:
                    check_tokens(tokens, line)
                except IllegalCharacterError as exc:
                    print(str(exc), file=stderr)
    except KeyboardInterrupt:
        stdout.write("\n")
