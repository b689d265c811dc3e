#!/usr/bin/env python3
# rpc_console/ui/static/table.py
from __future__ import annotations

from typing import List, Optional, Sequence

from rpc_console.ui.utils import strip_ansi


def _column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
    """Visual width per column, ignoring ANSI sequences."""
    widths: List[int] = []
    for row in rows:
        for idx, cell in enumerate(row):
            length = len(strip_ansi(cell))
            if idx >= len(widths):
                widths.append(length)
            elif length > widths[idx]:
                widths[idx] = length
    return widths


def format_table(
    rows: Sequence[Sequence[object]],
    headers: Optional[Sequence[object]] = None,
    *,
    padding: int = 1,
) -> str:
    """Render rows as a bordered ASCII table (used by result formatters)."""
    body = [[str(cell) for cell in row] for row in rows]
    head = [str(h) for h in headers] if headers is not None else None
    widths = _column_widths(([head] if head else []) + body)
    if not widths:
        return ""

    pad = " " * padding
    rule = "+" + "+".join("-" * (w + 2 * padding) for w in widths) + "+"

    def render(row: Sequence[str]) -> str:
        cells = []
        for idx, width in enumerate(widths):
            cell = row[idx] if idx < len(row) else ""
            cells.append(f"{pad}{cell}{' ' * (width - len(strip_ansi(cell)))}{pad}")
        return "|" + "|".join(cells) + "|"

    lines = [rule]
    if head:
        lines += [render(head), rule]
    lines += [render(row) for row in body]
    lines.append(rule)
    return "\n".join(lines)
