"""
Unit tests for the parse ladder.
"""

import json
import unittest

from jsonpalpate.core.engine import is_parseable, is_strict_json, parse
from jsonpalpate.utils.config import OutputSettings, ParseConfig, PerformanceSettings


class TestStrictStage(unittest.TestCase):
    """Test input accepted by the strict JSON stage."""

    def test_strict_round_trip(self) -> None:
        """Test that strict JSON decodes exactly as the json module does."""
        cases = [
            '{"name": "John", "age": 30}',
            "[1, 2, 3]",
            '{"users": [{"name": "Alice"}, {"name": "Bob"}]}',
            '{"number": 123, "float": 45.67, "bool": false, "null": null}',
            "42",
            '"hello"',
            "true",
            "null",
            '  {"padded": [ ]}  \n',
        ]
        for text in cases:
            with self.subTest(text=text):
                outcome = parse(text)
                self.assertTrue(outcome.success)
                self.assertEqual(outcome.value, json.loads(text))
                self.assertFalse(outcome.was_relaxed)
                self.assertFalse(outcome.was_yaml)

    def test_canonical_text(self) -> None:
        """Test that canonical text is indented JSON in source key order."""
        outcome = parse('{"b": 1, "a": [true, null]}')
        self.assertEqual(
            outcome.canonical_text,
            '{\n  "b": 1,\n  "a": [\n    true,\n    null\n  ]\n}',
        )

    def test_non_ascii_is_kept(self) -> None:
        """Test that canonical text keeps non-ASCII characters by default."""
        outcome = parse('{"city": "Zürich"}')
        self.assertIn("Zürich", outcome.canonical_text)

    def test_nan_is_not_strict(self) -> None:
        """Test that NaN falls through to the permissive grammar."""
        outcome = parse('{"a": NaN}')
        self.assertTrue(outcome.success)
        self.assertTrue(outcome.was_relaxed)
        self.assertEqual(outcome.value, {"a": None})


class TestEmptyInput(unittest.TestCase):
    """Test empty and whitespace-only input."""

    def test_empty_input_succeeds_with_null(self) -> None:
        """Test that blank input is not an error."""
        for text in ["", "   \n\t  "]:
            with self.subTest(text=text):
                outcome = parse(text)
                self.assertTrue(outcome.success)
                self.assertIsNone(outcome.value)
                self.assertEqual(outcome.canonical_text, "")
                self.assertFalse(outcome.was_relaxed)
                self.assertFalse(outcome.was_yaml)


class TestLadderOrder(unittest.TestCase):
    """Test which stage accepts which input."""

    def test_permissive_stage(self) -> None:
        """Test JSON5 syntax is accepted and flagged as relaxed."""
        outcome = parse("{name: 'John', age: 30,}")
        self.assertTrue(outcome.success)
        self.assertEqual(outcome.value, {"name": "John", "age": 30})
        self.assertTrue(outcome.was_relaxed)
        self.assertFalse(outcome.was_yaml)

    def test_expression_stage(self) -> None:
        """Test that expressions are rewritten once plain JSON5 fails."""
        outcome = parse("{fn: () => 42, n: 0b11}")
        self.assertEqual(outcome.value, {"fn": "[JS: () => 42]", "n": 3})
        self.assertTrue(outcome.was_relaxed)

    def test_yaml_stage(self) -> None:
        """Test that YAML is the last resort."""
        outcome = parse("name: John\nage: 30")
        self.assertTrue(outcome.success)
        self.assertEqual(outcome.value, {"name": "John", "age": 30})
        self.assertTrue(outcome.was_yaml)
        self.assertTrue(outcome.was_relaxed)

    def test_yaml_values_are_normalized(self) -> None:
        """Test that YAML keys and dates fold into the JSON model."""
        outcome = parse("1: one\nwhen: 2024-01-02")
        self.assertEqual(outcome.value, {"1": "one", "when": "2024-01-02"})
        self.assertEqual(json.loads(outcome.canonical_text), outcome.value)

    def test_regex_does_not_hide_sentinels(self) -> None:
        """Test that quotes inside a regex literal do not stop sentinel mapping."""
        self.assertEqual(
            parse('{a: /"/, b: None}').value, {"a": '[JS: /"/]', "b": None}
        )
        self.assertEqual(
            parse("{a: /it's/, b: True}").value, {"a": "[JS: /it's/]", "b": True}
        )

    def test_key_order_is_preserved(self) -> None:
        """Test that relaxed objects keep source key order."""
        outcome = parse("{z: 1, a: 2, m: 3}")
        self.assertEqual(list(outcome.value), ["z", "a", "m"])


class TestConfiguration(unittest.TestCase):
    """Test stage switches and output settings."""

    def test_strict_config_rejects_relaxed_input(self) -> None:
        """Test that the strict preset only runs the first stage."""
        outcome = parse("{a: 1}", ParseConfig.strict())
        self.assertFalse(outcome.success)

    def test_relaxed_config_skips_yaml(self) -> None:
        """Test that the relaxed preset does not fall back to YAML."""
        self.assertTrue(parse("{a: 1}", ParseConfig.relaxed()).success)
        self.assertFalse(parse("name: John\nage: 30", ParseConfig.relaxed()).success)

    def test_output_settings(self) -> None:
        """Test compact and ASCII-only canonical text."""
        config = ParseConfig(output=OutputSettings(indent=None, ensure_ascii=True))
        outcome = parse('{"a": "é"}', config)
        self.assertEqual(outcome.canonical_text, '{"a": "\\u00e9"}')

    def test_large_input_warning(self) -> None:
        """Test that large input is logged and still parsed."""
        config = ParseConfig(performance=PerformanceSettings(large_input_threshold=10))
        with self.assertLogs("jsonpalpate.core.engine", "WARNING") as logs:
            outcome = parse('{"key": "a long enough value"}', config)
        self.assertTrue(outcome.success)
        self.assertIn("exceeds", logs.output[0])


class TestYamlAliases(unittest.TestCase):
    """Test documents whose aliases expand the output."""

    def test_alias_expansion_warning(self) -> None:
        """Test that canonical text far larger than the input is logged."""
        text = "a: &x [1, 2, 3]\nb: *x"
        config = ParseConfig(performance=PerformanceSettings(large_input_threshold=25))
        with self.assertLogs("jsonpalpate.core.engine", "WARNING") as logs:
            outcome = parse(text, config)
        self.assertEqual(outcome.value, {"a": [1, 2, 3], "b": [1, 2, 3]})
        self.assertEqual(len(logs.output), 1)
        self.assertIn("aliases expanded", logs.output[0])


class TestPredicates(unittest.TestCase):
    """Test is_strict_json and is_parseable."""

    def test_is_strict_json(self) -> None:
        """Test strict detection."""
        for text in ['{"name": "John"}', "[1, 2, 3]", "42", '"hello"', "true", "null"]:
            with self.subTest(text=text):
                self.assertTrue(is_strict_json(text))
        for text in [
            "{name: 'John'}",
            "[1, 2, 3,]",
            "{value: 0xFF}",
            "// comment\n{}",
            "{invalid",
            "",
            "NaN",
        ]:
            with self.subTest(text=text):
                self.assertFalse(is_strict_json(text))

    def test_is_parseable(self) -> None:
        """Test that any stage counts."""
        for text in [
            '{"name": "John"}',
            "{name: 'John'}",
            "{value: 0xFF}",
            "{active: True}",
            "name: John\nage: 30",
        ]:
            with self.subTest(text=text):
                self.assertTrue(is_parseable(text))
        self.assertFalse(is_parseable("{invalid"))


if __name__ == "__main__":
    unittest.main()
