from __future__ import annotations

import unittest

from rpc_console.errors import DispatchError
from rpc_console.interface.loader import load_methods
from rpc_console.methods import (
    REGISTRY,
    LocalDispatcher,
    Method,
    MethodRegistry,
    build_usage,
    method,
)


def _registry() -> MethodRegistry:
    registry = MethodRegistry()

    @method(name="transfer", description="Move funds.", registry=registry, aliases=["mv"])
    def transfer(source, target, amount=1):
        return {"from": source, "to": target, "amount": amount}

    @method(registry=registry)
    def explode():
        """Always fails."""
        raise RuntimeError("kaboom")

    return registry


class MethodRegistryTests(unittest.TestCase):
    def test_names_keep_registration_order_then_aliases(self) -> None:
        self.assertEqual(_registry().names(), ["transfer", "explode", "mv"])

    def test_alias_lookup(self) -> None:
        registry = _registry()
        self.assertIs(registry.get("mv"), registry.get("transfer"))
        self.assertIsNone(registry.get("Transfer"))

    def test_docstring_becomes_description(self) -> None:
        self.assertEqual(_registry().get("explode").description, "Always fails.")

    def test_duplicate_names_are_rejected(self) -> None:
        registry = _registry()
        with self.assertRaises(ValueError):
            registry.register(Method(name="mv", description="", example="", callback=print))
        with self.assertRaises(ValueError):
            registry.register(Method(name="x", description="", example="", callback=print,
                                     aliases=["transfer"]))

    def test_build_usage(self) -> None:
        def f(a, b=2, *rest, flag=False):
            pass

        self.assertEqual(build_usage("f", f), "f <a> [b] [rest...]")
        self.assertEqual(build_usage("g", lambda: None), "g")


class LocalDispatcherTests(unittest.TestCase):
    def test_invokes_with_positional_args(self) -> None:
        dispatcher = LocalDispatcher(_registry())
        self.assertEqual(dispatcher.invoke(0, "mv", ["a", "b", 5]),
                         {"from": "a", "to": "b", "amount": 5})

    def test_method_names(self) -> None:
        self.assertEqual(LocalDispatcher(_registry()).method_names(0), ["transfer", "explode", "mv"])

    def test_unknown_method_suggests_close_names(self) -> None:
        with self.assertRaises(DispatchError) as ctx:
            LocalDispatcher(_registry()).invoke(0, "transfr", [])
        self.assertIn("Unknown method: transfr", ctx.exception.detail)
        self.assertIn("Did you mean: transfer", ctx.exception.detail)

    def test_wrong_arity_reports_usage(self) -> None:
        with self.assertRaises(DispatchError) as ctx:
            LocalDispatcher(_registry()).invoke(0, "transfer", ["only-one"])
        self.assertIn("Usage: transfer <source> <target> [amount]", ctx.exception.detail)

    def test_callback_errors_are_wrapped(self) -> None:
        with self.assertRaises(DispatchError) as ctx:
            LocalDispatcher(_registry()).invoke(0, "explode", [])
        self.assertEqual(ctx.exception.detail, "RuntimeError: kaboom")


class LoaderTests(unittest.TestCase):
    def test_entrypoint_methods_load_into_given_registry(self) -> None:
        registry = MethodRegistry()
        loaded = load_methods("rpc_console.plugins", registry)
        self.assertGreaterEqual(loaded, 2)
        self.assertEqual(registry.names(), ["echo", "add", "about", "sum"])
        self.assertEqual(registry.get("echo").category, "demo")
        self.assertEqual(registry.get_category_description("demo"),
                         "Small methods for trying the console out.")

    def test_bundled_methods(self) -> None:
        load_methods()
        dispatcher = LocalDispatcher(REGISTRY)
        self.assertEqual(dispatcher.invoke(0, "echo", ["hi"]), "hi")
        self.assertEqual(dispatcher.invoke(0, "echo", ["a", 1]), ["a", 1])
        self.assertEqual(dispatcher.invoke(0, "sum", [1, 2, 3.5]), 6.5)
        with self.assertRaises(DispatchError):
            dispatcher.invoke(0, "add", [1, "two"])
        self.assertIn("help", dispatcher.invoke(0, "methods", []))
        self.assertIn("console", dispatcher.invoke(0, "about", []))

    def test_help_describes_a_method(self) -> None:
        load_methods()
        text = LocalDispatcher(REGISTRY).invoke(0, "help", ["echo"])
        self.assertIn("Name:        echo", text)
        self.assertIn("Usage:       echo [values...]", text)

    def test_help_lists_categories(self) -> None:
        load_methods()
        dispatcher = LocalDispatcher(REGISTRY)
        text = dispatcher.invoke(0, "help", [])
        self.assertIn("builtin", text)
        self.assertIn("demo", text)
        self.assertIn("| help", dispatcher.invoke(0, "help", ["builtin"]))
        self.assertEqual(dispatcher.invoke(0, "help", ["nope"]), "No such method or category: nope")


if __name__ == "__main__":
    unittest.main()
