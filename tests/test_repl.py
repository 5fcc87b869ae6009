"""Tests for the interactive read loop."""

from __future__ import annotations

import io

import pytest

from nipl.repl import BANNER, PROMPT, is_terminator, start


def run(text: str, **kwargs) -> tuple[str, str]:
    stdin = io.StringIO(text)
    stdout = io.StringIO()
    stderr = io.StringIO()
    kwargs.setdefault("banner", False)
    start(stdin, stdout, stderr, **kwargs)
    return stdout.getvalue(), stderr.getvalue()


class TestTerminators:
    @pytest.mark.parametrize("line", ["", "\n", "\r\n", "quit\n", "quit", "  quit  \n"])
    def test_terminates(self, line: str) -> None:
        assert is_terminator(line)

    @pytest.mark.parametrize("line", ["let x = 1;\n", " \n", "quitter\n", "quit;\n"])
    def test_continues(self, line: str) -> None:
        assert not is_terminator(line)


class TestLoop:
    def test_prints_tokens(self) -> None:
        out, _ = run("let five = 5;\n\n")
        assert out == (
            PROMPT
            + "LET 'let'\n"
            + "IDENT 'five'\n"
            + "ASSIGN '='\n"
            + "INT '5'\n"
            + "SEMICOLON ';'\n"
            + PROMPT
        )

    def test_eof_token_not_printed(self) -> None:
        out, _ = run("x\n")
        assert "EOF" not in out

    def test_multiple_lines(self) -> None:
        out, _ = run("a\nb\nquit\n")
        assert out.count(PROMPT) == 3
        assert "IDENT 'a'" in out
        assert "IDENT 'b'" in out

    def test_stops_at_blank_line(self) -> None:
        out, _ = run("a\n\nb\n")
        assert "IDENT 'b'" not in out

    def test_stops_at_end_of_input(self) -> None:
        out, _ = run("10 != 9;")
        assert "NOT_EQ '!='" in out
        assert out.endswith(PROMPT)

    def test_whitespace_line_continues(self) -> None:
        out, _ = run("   \nx\n")
        assert "IDENT 'x'" in out

    def test_custom_prompt(self) -> None:
        out, _ = run("quit\n", prompt="nipl> ")
        assert out == "nipl> "

    def test_banner(self) -> None:
        out, _ = run("\n", banner=True)
        assert out.startswith(BANNER)
        assert "Welcome to the nipl repl" in out

    def test_json_format(self) -> None:
        out, _ = run("1\n", fmt="json")
        assert '"type": "INT"' in out

    def test_illegal_printed_as_token(self) -> None:
        out, err = run("@\n")
        assert "ILLEGAL '@'" in out
        assert err == ""

    def test_strict_reports_and_continues(self) -> None:
        out, err = run("let @\nx\n", strict=True)
        assert "error: illegal character '@'" in err
        assert "IDENT 'x'" in out


class _InterruptingInput(io.StringIO):
    """Serves its text, then raises KeyboardInterrupt like Ctrl-C at the prompt."""

    def readline(self, size: int = -1) -> str:
        line = super().readline(size)
        if not line:
            raise KeyboardInterrupt
        return line


class TestInterruptions:
    def test_ctrl_c_ends_session(self) -> None:
        stdout = io.StringIO()
        stderr = io.StringIO()
        start(_InterruptingInput("let x;\n"), stdout, stderr, banner=False)
        out = stdout.getvalue()
        assert "LET 'let'" in out
        assert out.endswith(PROMPT + "\n")
        assert stderr.getvalue() == ""

    def test_undecodable_input_reported(self) -> None:
        stdin = io.TextIOWrapper(io.BytesIO(b"\xff\n"), encoding="utf-8")
        stdout = io.StringIO()
        stderr = io.StringIO()
        start(stdin, stdout, stderr, banner=False)
        assert stderr.getvalue().startswith("error: cannot decode input:")
        assert stdout.getvalue() == PROMPT
