"""Command-line interface for nipl."""

from __future__ import annotations

import argparse
import io
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from nipl.debug import FORMATS, dump_tokens
from nipl.errors import ConfigError, IllegalCharacterError, check_tokens


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    prompt: str
    banner: bool
    fmt: str
    strict: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="nipl",
        description="nipl tokenizer: interactive read loop or line-by-line file dump",
    )
    p.add_argument("input", nargs="?", help="Source file to tokenize (default: start the REPL)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover nipl.toml)",
    )
    p.add_argument("--prompt", default=None, metavar="TEXT", help="REPL prompt (default: '>> ')")
    p.add_argument(
        "--format",
        dest="fmt",
        choices=FORMATS,
        default=None,
        help="Token output format (default: text)",
    )
    p.add_argument("--strict", action="store_true", help="Report illegal characters as errors")
    p.add_argument("--no-banner", action="store_true", help="Do not print the REPL banner")
    return p


def load_config(config_path: Path | None, base_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else base_dir / "nipl.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input) if args.input else None
    if input_file is not None:
        base_dir = input_file.parent
        if not base_dir.parts:
            base_dir = Path(".")
    else:
        base_dir = Path.cwd()

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, base_dir)

    prompt = ">> "
    banner = True
    cfg_repl = config.get("repl")
    if isinstance(cfg_repl, dict):
        cfg_prompt = cfg_repl.get("prompt")
        if cfg_prompt is not None:
            prompt = str(cfg_prompt)
        cfg_banner = cfg_repl.get("banner")
        if isinstance(cfg_banner, bool):
            banner = cfg_banner
    if args.prompt is not None:
        prompt = args.prompt
    if args.no_banner:
        banner = False

    fmt = "text"
    strict = False
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_fmt = cfg_output.get("format")
        if cfg_fmt is not None:
            if cfg_fmt not in FORMATS:
                raise ConfigError(f"invalid output format in config: {cfg_fmt!r}")
            fmt = cfg_fmt
        cfg_strict = cfg_output.get("strict")
        if isinstance(cfg_strict, bool):
            strict = cfg_strict
    if args.fmt is not None:
        fmt = args.fmt
    if args.strict:
        strict = True

    return CliOptions(
        input_file=input_file,
        prompt=prompt,
        banner=banner,
        fmt=fmt,
        strict=strict,
    )


def tokenize_file(options: CliOptions) -> int:
    """Tokenize the input file one line at a time and print the tokens.

    Each line is scanned by its own Lexer, as the REPL would. Returns 1 on
    the first illegal character in strict mode, 0 otherwise.
    """
    from nipl.lexer import Lexer, split_lines

    assert options.input_file is not None
    source = options.input_file.read_text(encoding="utf-8")

    for line_idx, line in enumerate(split_lines(source)):
        tokens = list(Lexer(line))
        if options.strict:
            try:
                check_tokens(tokens, source, line_offset=line_idx)
            except IllegalCharacterError as exc:
                print(exc.format(str(options.input_file)), file=sys.stderr)
                return 1
        dump_tokens(tokens, fmt=options.fmt, file=sys.stdout, line_offset=line_idx)

    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    from nipl import repl

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (ConfigError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.input_file is None:
        stdin = sys.stdin
        # Undecodable bytes reach the lexer as U+FFFD and come out as ILLEGAL
        if isinstance(stdin, io.TextIOWrapper):
            stdin.reconfigure(errors="replace")
        repl.start(
            stdin,
            sys.stdout,
            sys.stderr,
            prompt=options.prompt,
            banner=options.banner,
            fmt=options.fmt,
            strict=options.strict,
        )
        return 0

    try:
        return tokenize_file(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
        return 2
