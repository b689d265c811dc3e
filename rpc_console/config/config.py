#!/usr/bin/env python3
# rpc_console/config/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low -> high):
  1) Built-in defaults
  2) Files in the base directory (CWD by default), in this order:
     .env, config.ini, config.json, config.toml
  3) Environment variables prefixed RPC_CONSOLE_ (RPC_CONSOLE_PROMPT, ...)
  4) Explicit overrides (command-line flags)

Keys are UPPER_SNAKE after loading. Nested tables/objects and ini sections
flatten into the key name: {"log": {"level": "debug"}} -> LOG_LEVEL.

Validation:
  - PROMPT: str (may be empty)
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - LOG_FILE_PATH / HISTORY_FILE_PATH: None or normalized path
  - ENABLE_COMPLETION / SHOW_BANNER: bool
  - METHODS_PACKAGE: dotted module name
  - READ_POLL_INTERVAL: float > 0

A malformed config file is an error, not silently skipped.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping
from pathlib import Path
import configparser
import json
import os
import re
import tomllib

ENV_PREFIX = "RPC_CONSOLE_"

DEFAULTS: dict[str, Any] = {
    "PROMPT": ">>> ",
    "LOG_LEVEL": None,
    "LOG_FILE_PATH": None,
    "HISTORY_FILE_PATH": str(Path.home() / ".rpc_console_history"),
    "ENABLE_COMPLETION": True,
    "SHOW_BANNER": True,
    "METHODS_PACKAGE": "rpc_console.plugins",
    "READ_POLL_INTERVAL": 0.1,
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_DOTTED_NAME = re.compile(r"[A-Za-z_]\w*(\.[A-Za-z_]\w*)*")
_ENV_LINE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*)$")


@dataclass(frozen=True)
class AppConfig:
    prompt: str
    log_level: str | None
    log_file_path: Path | None
    history_file_path: Path | None
    enable_completion: bool
    show_banner: bool
    methods_package: str
    read_poll_interval: float

    # keys no setting consumes, kept for plugins and debugging
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- sources ----------

def _flatten(obj: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in obj.items():
        name = f"{prefix}_{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, name))
        else:
            flat[name.upper()] = value
    return flat


def _read_env(text: str) -> dict[str, Any]:
    """KEY=VALUE lines; '#' comments; one level of matching quotes is removed."""
    values: dict[str, Any] = {}
    for raw in text.splitlines():
        line = raw.strip()
        match = _ENV_LINE.match(line) if line and not line.startswith("#") else None
        if match is None:
            continue
        key, value = match.group(1), match.group(2).strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[key.upper()] = value
    return values


def _read_ini(text: str) -> dict[str, Any]:
    parser = configparser.ConfigParser(interpolation=None)
    parser.read_string(text)
    # section names are grouping only; the option name is the key
    return {key.upper(): value
            for section in parser.sections()
            for key, value in parser.items(section)}


def _read_json(text: str) -> dict[str, Any]:
    data = json.loads(text)
    if not isinstance(data, Mapping):
        raise ValueError("top-level JSON value must be an object")
    return _flatten(data)


def _read_toml(text: str) -> dict[str, Any]:
    return _flatten(tomllib.loads(text))


# File name -> reader, lowest precedence first
CONFIG_FILES: tuple[tuple[str, Callable[[str], dict[str, Any]]], ...] = (
    (".env", _read_env),
    ("config.ini", _read_ini),
    ("config.json", _read_json),
    ("config.toml", _read_toml),
)


def _read_files(base: Path) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for filename, reader in CONFIG_FILES:
        path = base / filename
        if not path.is_file():
            continue
        try:
            merged.update(reader(path.read_text(encoding="utf-8")))
        except (ValueError, configparser.Error) as exc:
            # JSONDecodeError and TOMLDecodeError are ValueErrors
            raise ValueError(f"{path}: {exc}") from exc
    return merged


def _read_environ(environ: Mapping[str, str]) -> dict[str, Any]:
    return {key[len(ENV_PREFIX):]: value for key, value in environ.items()
            if key.startswith(ENV_PREFIX) and len(key) > len(ENV_PREFIX)}


def _merge_sources(
    base: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    merged = dict(DEFAULTS)
    merged.update(_read_files(base or Path.cwd()))
    merged.update(_read_environ(os.environ if environ is None else environ))
    return merged


# ---------- coercion ----------

def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{key}: expected boolean, got {value!r}")


def _as_float(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{key}: expected number, got {value!r}")
    try:
        return float(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"{key}: expected number, got {value!r}") from exc


def _as_opt_str(value: Any) -> str | None:
    """None, '' and 'none' all mean unset."""
    if value is None or str(value).strip().lower() in {"", "none"}:
        return None
    return str(value)


def _as_opt_path(value: Any) -> Path | None:
    text = _as_opt_str(value)
    if text is None:
        return None
    return Path(os.path.expandvars(os.path.expanduser(text))).resolve()


def _as_log_level(value: Any) -> str | None:
    text = _as_opt_str(value)
    if text is None:
        return None
    if text.upper() not in _LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {list(_LOG_LEVELS)}, got {text!r}")
    return text.upper()


def _validate_and_build(config: Mapping[str, Any]) -> AppConfig:
    def get(key: str) -> Any:
        return config.get(key, DEFAULTS[key])

    prompt = get("PROMPT")
    methods_package = str(get("METHODS_PACKAGE")).strip()
    if not _DOTTED_NAME.fullmatch(methods_package):
        raise ValueError(f"METHODS_PACKAGE must be a dotted module name, got {methods_package!r}")

    poll = _as_float("READ_POLL_INTERVAL", get("READ_POLL_INTERVAL"))
    if poll <= 0:
        raise ValueError("READ_POLL_INTERVAL must be > 0")

    return AppConfig(
        prompt="" if prompt is None else str(prompt),
        log_level=_as_log_level(get("LOG_LEVEL")),
        log_file_path=_as_opt_path(get("LOG_FILE_PATH")),
        history_file_path=_as_opt_path(get("HISTORY_FILE_PATH")),
        enable_completion=_as_bool("ENABLE_COMPLETION", get("ENABLE_COMPLETION")),
        show_banner=_as_bool("SHOW_BANNER", get("SHOW_BANNER")),
        methods_package=methods_package,
        read_poll_interval=poll,
        extra={k: v for k, v in config.items() if k not in DEFAULTS},
    )


def load_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    base: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Load, merge, normalize, and validate configuration.

    `overrides` (e.g. parsed command-line flags) win over every other source;
    None values in it are ignored. No filesystem side-effects.
    """
    raw = _merge_sources(base, environ)
    if overrides:
        raw.update({k.upper(): v for k, v in overrides.items() if v is not None})
    return _validate_and_build(raw)
