"""Command-line interface for punctok."""

from __future__ import annotations

import argparse
import io
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from punctok.config import (
    PRESETS,
    load_config,
    options_from_config,
    parse_punct_arg,
    table_from_config,
)
from punctok.errors import ConfigError, LexError
from punctok.table import PunctuationTable
from punctok.tokens import Options, Token

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None  # None reads stdin
    output_file: Path | None
    table: PunctuationTable
    options: Options
    strict: bool
    output_format: str
    show_table: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="punctok",
        description="Tokenize a file against a configurable punctuation table",
    )
    p.add_argument("input", help="Input file ('-' for stdin)")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-p",
        "--punct",
        action="append",
        default=[],
        metavar="PATTERN=ID",
        help="Punctuation pattern and id, in priority order (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover punctok.toml)",
    )
    p.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        help="Start from a built-in punctuation table",
    )
    p.add_argument(
        "--single-quotes",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Scan '...' as a single token",
    )
    p.add_argument(
        "--double-quotes",
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Scan "..." as a single token',
    )
    p.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fail on unterminated quoted strings",
    )
    p.add_argument(
        "--format",
        dest="output_format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )
    p.add_argument("--show-table", action="store_true", help="Print the punctuation table first")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge preset, config file, and CLI args into CliOptions.

    Precedence: preset < config file < CLI flags. Punctuation is appended in
    that order, so preset patterns take priority over later ones.
    """
    input_file = None if args.input == "-" else Path(args.input)
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    table = PunctuationTable()
    options = Options.NONE
    if args.preset:
        pairs, options = PRESETS[args.preset]
        table.extend(pairs)

    # Punctuation: preset < config < CLI
    table_from_config(config, table)
    for raw in args.punct:
        table.append(*parse_punct_arg(raw))

    # Options: config replaces preset when it has an [options] table
    cfg_options, strict = options_from_config(config)
    if "options" in config:
        options = cfg_options
    for flag, enabled in (
        (Options.ACCEPT_SINGLE_QUOTES, args.single_quotes),
        (Options.ACCEPT_DOUBLE_QUOTES, args.double_quotes),
    ):
        if enabled is True:
            options |= flag
        elif enabled is False:
            options &= ~flag
    if args.strict is not None:
        strict = args.strict

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        table=table,
        options=options,
        strict=strict,
        output_format=args.output_format,
        show_table=args.show_table,
        verbose=args.verbose,
    )


def read_input(options: CliOptions) -> bytes:
    if options.input_file is None:
        return sys.stdin.buffer.read()
    return options.input_file.read_bytes()


def tokenize_file(options: CliOptions) -> tuple[Token, ...]:
    """Read and scan the input named by *options*."""
    from punctok.scanner import scan

    source = read_input(options)
    logger.debug("read %d bytes from %s", len(source), options.input_file or "<stdin>")
    return scan(source, options.table, options.options, strict=options.strict)


def render_output(options: CliOptions, tokens: tuple[Token, ...]) -> str:
    """Format the table (optionally) and the tokens per *options*."""
    from punctok.debug import dump_table, dump_tokens, dump_tokens_json

    out = io.StringIO()
    if options.output_format == "json":
        dump_tokens_json(tokens, file=out)
        return out.getvalue()
    if options.show_table:
        dump_table(options.table, file=out)
    dump_tokens(tokens, file=out)
    return out.getvalue()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        tokens = tokenize_file(options)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except LexError as exc:
        name = str(options.input_file) if options.input_file else "<stdin>"
        print(exc.format(name), file=sys.stderr)
        return 1

    text = render_output(options, tokens)
    if options.output_file:
        options.output_file.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)

    return 0
