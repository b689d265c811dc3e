#!/usr/bin/env python3
# rpc_console/interface/parser.py
from __future__ import annotations

"""
Line decoding for the console.

A line is either one JSON array:

    ["transfer", "alice", "bob", 10]

or a whitespace separated sequence of JSON values, where bare words are
taken as strings:

    transfer alice "bob" 10

Both decode to ["transfer", "alice", "bob", 10]. Element 0 is the method name.
"""

import json
from typing import Any

from rpc_console.errors import ParseError

_DECODER = json.JSONDecoder()

# First characters that start a JSON value rather than a bare word
_JSON_START = frozenset('"[{-0123456789')

_LITERALS: dict[str, Any] = {"true": True, "false": False, "null": None}


def decode_values(line: str) -> list[Any]:
    """Decode every value on `line`, left to right."""
    values: list[Any] = []
    index, length = 0, len(line)

    while True:
        while index < length and line[index].isspace():
            index += 1
        if index >= length:
            return values

        if line[index] in _JSON_START:
            try:
                value, index = _DECODER.raw_decode(line, index)
            except json.JSONDecodeError as exc:
                raise ParseError(f"{exc.msg} at column {exc.colno}") from exc
        else:
            end = index
            while end < length and not line[end].isspace():
                end += 1
            word = line[index:end]
            value = _LITERALS.get(word, word)
            index = end

        if index < length and not line[index].isspace():
            raise ParseError(
                f"Unexpected character {line[index]!r} at column {index + 1}")
        values.append(value)


def parse_line(line: str) -> list[Any]:
    """
    Decode a console line into [method, *args].

    Returns an empty list for blank lines and for an empty array.
    """
    values = decode_values(line)
    if len(values) == 1 and isinstance(values[0], list):
        values = values[0]
    if values and not isinstance(values[0], str):
        raise ParseError(
            f"Method name must be a string, got {type(values[0]).__name__}: {values[0]!r}")
    return values
