"""TOML configuration: punctuation tables and scan options."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from punctok.errors import ConfigError, InvalidArgumentError
from punctok.table import PunctuationTable
from punctok.tokens import Options

CONFIG_NAME = "punctok.toml"

# Operator table used by the demo preset; multi-byte patterns come first.
DEMO_PUNCTUATION: tuple[tuple[str, int], ...] = (
    ("<<", 10),
    (">>", 11),
    ("(", 12),
    (")", 13),
    ("[", 14),
    ("]", 15),
    ("+", 16),
    ("-", 17),
    ("*", 18),
    ("/", 19),
)
DEMO_OPTIONS = Options.ACCEPT_SINGLE_QUOTES | Options.ACCEPT_DOUBLE_QUOTES

PRESETS: dict[str, tuple[tuple[tuple[str, int], ...], Options]] = {
    "demo": (DEMO_PUNCTUATION, DEMO_OPTIONS),
}


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from exc


def parse_punct_arg(s: str) -> tuple[str, int]:
    """Parse a PATTERN=ID string into (pattern, id).

    The split happens at the last '=' so '=' itself can be a pattern ('==5').
    """
    pattern, sep, raw_id = s.rpartition("=")
    if not sep or not pattern:
        raise ConfigError(f"invalid punctuation (expected PATTERN=ID): {s}")
    try:
        return pattern, int(raw_id)
    except ValueError:
        raise ConfigError(f"invalid punctuation id in {s!r}: {raw_id!r}") from None


def table_from_config(config: dict[str, Any], table: PunctuationTable | None = None) -> PunctuationTable:
    """Append the config's [[punctuation]] entries, in file order, to *table*."""
    if table is None:
        table = PunctuationTable()

    entries = config.get("punctuation", [])
    if not isinstance(entries, list):
        raise ConfigError("'punctuation' must be an array of tables")

    for n, entry in enumerate(entries, 1):
        if not isinstance(entry, dict):
            raise ConfigError(f"punctuation entry {n} must be a table")
        pattern = entry.get("pattern")
        punct_id = entry.get("id")
        if not isinstance(pattern, str):
            raise ConfigError(f"punctuation entry {n}: 'pattern' must be a string")
        if isinstance(punct_id, bool) or not isinstance(punct_id, int):
            raise ConfigError(f"punctuation entry {n}: 'id' must be an integer")
        try:
            table.append(pattern, punct_id)
        except InvalidArgumentError as exc:
            raise ConfigError(f"punctuation entry {n}: {exc}") from exc
    return table


def options_from_config(config: dict[str, Any]) -> tuple[Options, bool]:
    """Return (options, strict) from the config's [options] table."""
    options = Options.NONE
    strict = False
    cfg_options = config.get("options")
    if cfg_options is None:
        return options, strict
    if not isinstance(cfg_options, dict):
        raise ConfigError("'options' must be a table")

    for key, flag in (
        ("single_quotes", Options.ACCEPT_SINGLE_QUOTES),
        ("double_quotes", Options.ACCEPT_DOUBLE_QUOTES),
    ):
        value = cfg_options.get(key, False)
        if not isinstance(value, bool):
            raise ConfigError(f"options.{key} must be true or false")
        if value:
            options |= flag

    value = cfg_options.get("strict", False)
    if not isinstance(value, bool):
        raise ConfigError("options.strict must be true or false")
    strict = value
    return options, strict
