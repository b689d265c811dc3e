# rpc_console/plugins/demo/entrypoint.py
from __future__ import annotations

import platform
from numbers import Number
from typing import Any

from rpc_console import __version__
from rpc_console.methods import Method


def echo(*values: Any) -> Any:
    """Return the arguments unchanged (a single argument is returned bare)."""
    if len(values) == 1:
        return values[0]
    return list(values)


def add(*numbers: Any) -> Any:
    """Sum numeric arguments."""
    for value in numbers:
        if isinstance(value, bool) or not isinstance(value, Number):
            raise TypeError(f"add expects numbers, got {value!r}")
    return sum(numbers)


def about() -> dict[str, str]:
    return {
        "console": __version__,
        "python": platform.python_version(),
        "platform": f"{platform.system()} {platform.release()}",
    }


METHODS = [
    Method(
        name="echo",
        description="Return the arguments unchanged.",
        example='echo "hi"',
        callback=echo,
        module=__name__,
    ),
    Method(
        name="add",
        description="Sum numeric arguments.",
        example="add 1 2 3.5",
        callback=add,
        module=__name__,
        aliases=["sum"],
    ),
    Method(
        name="about",
        description="Console version and platform.",
        example="about",
        callback=about,
        module=__name__,
    ),
]
