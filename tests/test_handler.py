from __future__ import annotations

import threading
import unittest

from rpc_console.errors import DispatchError, FormatError, ParseError
from rpc_console.interface.handler import (
    ResultFormatterRegistry,
    default_formatter,
    dispatch,
    handle_line,
)


class _EchoDispatcher:
    def __init__(self) -> None:
        self.calls: list[tuple[int, str, list]] = []

    def method_names(self, session_id: int) -> list[str]:
        return ["echo", "explode"]

    def invoke(self, session_id: int, method: str, args):
        self.calls.append((session_id, method, list(args)))
        if method == "explode":
            raise KeyError("missing")
        return {"method": method, "args": list(args)}


class ResultFormatterRegistryTests(unittest.TestCase):
    def test_default_formatter_pretty_prints_json(self) -> None:
        registry = ResultFormatterRegistry()
        self.assertEqual(registry.format("m", {"a": 1}, ["m"]), '{\n  "a": 1\n}')
        self.assertEqual(default_formatter("hi", ["m"]), '"hi"')

    def test_registered_formatter_gets_result_and_full_args(self) -> None:
        registry = ResultFormatterRegistry()
        seen = []

        def fmt(result, args):
            seen.append((result, list(args)))
            return "custom"

        registry.set_formatter("m", fmt)
        self.assertEqual(registry.format("m", 42, ["m", 1, 2]), "custom")
        self.assertEqual(seen, [(42, ["m", 1, 2])])
        self.assertIn("m", registry)

    def test_last_registration_wins(self) -> None:
        registry = ResultFormatterRegistry()
        registry.set_formatter("m", lambda r, a: "first")
        registry.set_formatter("m", lambda r, a: "second")
        self.assertEqual(registry.format("m", None, ["m"]), "second")

    def test_lookup_is_exact(self) -> None:
        registry = ResultFormatterRegistry()
        registry.set_formatter("get", lambda r, a: "custom")
        self.assertEqual(registry.format("get_all", [], ["get_all"]), "[]")

    def test_failing_formatter_raises_format_error(self) -> None:
        registry = ResultFormatterRegistry()
        registry.set_formatter("m", lambda r, a: 1 / 0)
        with self.assertRaises(FormatError) as ctx:
            registry.format("m", None, ["m"])
        self.assertIn("ZeroDivisionError", ctx.exception.detail)

    def test_unserializable_result_raises_format_error(self) -> None:
        registry = ResultFormatterRegistry()
        circular: list = []
        circular.append(circular)
        for result in ({(1, 2): "x"}, circular):
            with self.subTest(result=type(result).__name__):
                with self.assertRaises(FormatError) as ctx:
                    registry.format("m", result, ["m"])
                self.assertTrue(ctx.exception.detail.startswith("default formatter failed: "))

    def test_concurrent_registration_is_never_torn(self) -> None:
        registry = ResultFormatterRegistry()
        names = [f"m{i}" for i in range(200)]

        def register():
            for name in names:
                registry.set_formatter(name, lambda r, a, name=name: name)

        threads = [threading.Thread(target=register) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        for name in names:
            self.assertEqual(registry.format(name, None, [name]), name)


class HandleLineTests(unittest.TestCase):
    def test_blank_line_is_a_no_op(self) -> None:
        dispatcher = _EchoDispatcher()
        self.assertIsNone(handle_line("   ", dispatcher, ResultFormatterRegistry()))
        self.assertIsNone(handle_line("[]", dispatcher, ResultFormatterRegistry()))
        self.assertEqual(dispatcher.calls, [])

    def test_dispatches_method_and_positional_args(self) -> None:
        dispatcher = _EchoDispatcher()
        formatters = ResultFormatterRegistry()
        formatters.set_formatter("echo", lambda r, a: f"{a!r} -> {r['args']!r}")
        out = handle_line('["echo", "hi", 3]', dispatcher, formatters)
        self.assertEqual(dispatcher.calls, [(0, "echo", ["hi", 3])])
        self.assertEqual(out, "['echo', 'hi', 3] -> ['hi', 3]")

    def test_parse_errors_propagate(self) -> None:
        with self.assertRaises(ParseError):
            handle_line('["bogus', _EchoDispatcher(), ResultFormatterRegistry())

    def test_foreign_dispatcher_errors_become_dispatch_errors(self) -> None:
        with self.assertRaises(DispatchError) as ctx:
            dispatch(_EchoDispatcher(), "explode", [])
        self.assertIn("KeyError", ctx.exception.detail)


if __name__ == "__main__":
    unittest.main()
