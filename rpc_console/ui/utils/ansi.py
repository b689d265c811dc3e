#!/usr/bin/env python3
# rpc_console/ui/utils/ansi.py
from __future__ import annotations

import os
import re
from typing import IO, Optional

# SGR parameter per style name (30-37 foreground, 90-97 bright foreground)
_SGR_CODES = {
    "reset": 0,
    "bold": 1,
    "dim": 2,
    "underline": 4,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "bright_black": 90,
}

ANSI = {name: f"\x1b[{code}m" for name, code in _SGR_CODES.items()}

# CSI sequences only; the console never emits OSC
ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def supports_ansi(stream: Optional[IO[str]]) -> bool:
    """
    Return True if ANSI escapes should be written to `stream`.

    Honors NO_COLOR (https://no-color.org) and requires a terminal.
    """
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False


def colorize(text: str, *styles: str, stream: Optional[IO[str]] = None) -> str:
    """
    Wrap `text` in the given ANSI styles and a trailing reset.

    With `stream`, the text is returned unstyled unless that stream is a
    colour-capable terminal. Unknown style names are ignored.
    """
    if stream is not None and not supports_ansi(stream):
        return text
    seq = "".join(ANSI[s] for s in styles if s in ANSI)
    return f"{seq}{text}{ANSI['reset']}" if seq else text
