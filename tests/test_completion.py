from __future__ import annotations

import unittest

from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document

from rpc_console.interface.cli import make_prompt_toolkit_completer
from rpc_console.interface.completion import CommandRegistry, CompletionEngine


def _engine(*names: str) -> CompletionEngine:
    return CompletionEngine(CommandRegistry(names))


class CompletionEngineTests(unittest.TestCase):
    def test_unique_prefix_returns_remaining_suffix(self) -> None:
        result = _engine("foo").complete("fo")
        self.assertTrue(result.unique)
        self.assertEqual(result.suffix, "o")

    def test_ambiguous_prefix_lists_candidates_in_registry_order(self) -> None:
        engine = _engine("foo", "fizz", "bar")
        result = engine.complete("f")
        self.assertFalse(result.unique)
        self.assertIsNone(result.suffix)
        self.assertEqual(engine.candidates("f"), ["foo", "fizz"])
        self.assertEqual(engine.count("f"), 2)

    def test_no_match_is_not_unique(self) -> None:
        engine = _engine("foo")
        self.assertFalse(engine.complete("x").unique)
        self.assertEqual(engine.candidates("x"), [])
        self.assertEqual(engine.count("x"), 0)

    def test_matching_is_case_sensitive(self) -> None:
        engine = _engine("foo", "Foo")
        self.assertEqual(engine.candidates("F"), ["Foo"])
        self.assertEqual(engine.complete("f").suffix, "oo")

    def test_exact_name_completes_with_empty_suffix(self) -> None:
        result = _engine("foo", "bar").complete("foo")
        self.assertTrue(result.unique)
        self.assertEqual(result.suffix, "")

    def test_empty_token_matches_everything(self) -> None:
        self.assertEqual(_engine("b", "a").candidates(""), ["b", "a"])

    def test_registry_replace_is_seen_by_engine(self) -> None:
        registry = CommandRegistry(["old"])
        engine = CompletionEngine(registry)
        registry.replace(["new_one", "new_two"])
        self.assertEqual(engine.candidates("new"), ["new_one", "new_two"])
        self.assertEqual(len(registry), 2)
        self.assertEqual(list(registry), ["new_one", "new_two"])


class PromptToolkitCompleterTests(unittest.TestCase):
    def _complete(self, engine: CompletionEngine, text: str):
        completer = make_prompt_toolkit_completer(engine)
        return list(completer.get_completions(Document(text), CompleteEvent(completion_requested=True)))

    def test_unique_match_appends_suffix(self) -> None:
        completions = self._complete(_engine("foo", "bar"), "fo")
        self.assertEqual(len(completions), 1)
        self.assertEqual(completions[0].text, "o")
        self.assertEqual(completions[0].start_position, 0)

    def test_several_matches_replace_the_token(self) -> None:
        completions = self._complete(_engine("foo", "fizz"), "f")
        self.assertEqual([c.text for c in completions], ["foo", "fizz"])
        self.assertEqual({c.start_position for c in completions}, {-1})

    def test_no_match_yields_nothing(self) -> None:
        self.assertEqual(self._complete(_engine("foo"), "z"), [])


try:
    import readline  # noqa: F401
    HAS_READLINE = True
except ImportError:
    HAS_READLINE = False


@unittest.skipUnless(HAS_READLINE, "readline not available")
class ReadlineCompleterTests(unittest.TestCase):
    def _editor(self, *names: str):
        from rpc_console.interface.cli import ReadlineEditor

        editor = ReadlineEditor(history_path=None)
        editor.setup(_engine(*names))
        return editor

    def test_unique_match_returns_full_line(self) -> None:
        editor = self._editor("foo", "bar")
        self.assertEqual(editor.complete("fo", 0), "foo")
        self.assertIsNone(editor.complete("fo", 1))

    def test_several_matches_are_enumerated_by_state(self) -> None:
        editor = self._editor("foo", "fizz")
        self.assertEqual(editor.complete("f", 0), "foo")
        self.assertEqual(editor.complete("f", 1), "fizz")
        self.assertIsNone(editor.complete("f", 2))


if __name__ == "__main__":
    unittest.main()
