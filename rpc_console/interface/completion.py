#!/usr/bin/env python3
# rpc_console/interface/completion.py
from __future__ import annotations

"""
Method-name completion.

- CommandRegistry: the ordered snapshot of method names taken at start().
- CompletionEngine: case-sensitive prefix matching against that snapshot.

The line editors only ever talk to the engine through complete(),
candidates() and count(); no matching logic lives in the editor adapters.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional


class CommandRegistry:
    """Ordered method names known to the console, replaced wholesale."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: tuple[str, ...] = tuple(names)

    def replace(self, names: Iterable[str]) -> None:
        # single reference swap, readers see either the old or the new tuple
        self._names = tuple(names)

    def names(self) -> tuple[str, ...]:
        return self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)


@dataclass(frozen=True, slots=True)
class CompletionResult:
    """Outcome of a completion query: `suffix` is set only for a unique match."""

    unique: bool
    suffix: Optional[str] = None


class CompletionEngine:
    """Prefix completion over a CommandRegistry."""

    def __init__(self, registry: CommandRegistry) -> None:
        self.registry = registry

    def candidates(self, token: str) -> list[str]:
        """All names starting with `token`, in registry order."""
        return [name for name in self.registry.names() if name.startswith(token)]

    def count(self, token: str) -> int:
        return len(self.candidates(token))

    def complete(self, token: str) -> CompletionResult:
        """
        Return the remaining suffix when exactly one name starts with `token`.

        Zero or several matches are not unique; callers list candidates()
        instead.
        """
        matches = self.candidates(token)
        if len(matches) == 1:
            return CompletionResult(unique=True, suffix=matches[0][len(token):])
        return CompletionResult(unique=False)
