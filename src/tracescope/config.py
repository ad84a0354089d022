from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

DEFAULT_CONFIG_NAME = "tracescope.toml"
DEFAULT_PARSER = "ast"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


def _read_table(path: Path) -> TomlTable:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def frames_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    """The `[frames]` table of `tracescope.toml`, or `{}` when absent or unreadable."""
    if config_path is None:
        config_path = (root if root is not None else Path.cwd()) / DEFAULT_CONFIG_NAME
    section = _read_table(config_path).get("frames", {})
    return section if isinstance(section, dict) else {}


_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})


def _flag(value: TomlValue) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_WORDS
    # bool is an int subclass
    return isinstance(value, int) and value != 0


def frames_parser(section: TomlTable | None) -> str:
    if not isinstance(section, dict):
        return DEFAULT_PARSER
    value = section.get("parser")
    if isinstance(value, str) and value.strip():
        return value.strip().lower()
    return DEFAULT_PARSER


def frames_resolve_names(section: TomlTable | None) -> bool:
    if not isinstance(section, dict):
        return True
    if "resolve_names" not in section:
        return True
    return _flag(section.get("resolve_names"))


def frames_default_version(section: TomlTable | None) -> str | None:
    if not isinstance(section, dict):
        return None
    value = section.get("default_version")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Unquoted `default_version = 3.11` arrives as a float; quote 3.10.
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    """Overlay explicit command line values on configured defaults; None means unset."""
    return {**defaults, **{key: value for key, value in payload.items() if value is not None}}
