"""
Unit tests for result types.
"""

import dataclasses
import unittest

from jsonpalpate.core.results import ParseError, ParseOutcome, TextRange


class TestParseOutcome(unittest.TestCase):
    """Test that success and failure shapes are exclusive."""

    def test_succeeded(self) -> None:
        """Test building a successful outcome."""
        outcome = ParseOutcome.succeeded({"a": 1}, '{"a": 1}')
        self.assertTrue(outcome.success)
        self.assertIsNone(outcome.error)
        self.assertFalse(outcome.was_relaxed)
        self.assertFalse(outcome.was_yaml)

    def test_yaml_implies_relaxed(self) -> None:
        """Test that a YAML success is always a relaxed success."""
        outcome = ParseOutcome.succeeded({"a": 1}, '{"a": 1}', was_yaml=True)
        self.assertTrue(outcome.was_relaxed)
        self.assertTrue(outcome.was_yaml)

    def test_failed(self) -> None:
        """Test building a failed outcome."""
        error = ParseError("Unexpected end of input", 1, 9, 8)
        outcome = ParseOutcome.failed(error)
        self.assertFalse(outcome.success)
        self.assertIs(outcome.error, error)
        self.assertIsNone(outcome.value)
        self.assertIsNone(outcome.canonical_text)

    def test_mixed_shapes_are_rejected(self) -> None:
        """Test that no partial or combined state can be built."""
        error = ParseError("bad", 1, 1, 0)
        with self.assertRaises(ValueError):
            ParseOutcome(success=True, value=1, canonical_text="1", error=error)
        with self.assertRaises(ValueError):
            ParseOutcome(success=True, value=1)
        with self.assertRaises(ValueError):
            ParseOutcome(success=False)
        with self.assertRaises(ValueError):
            ParseOutcome(success=False, error=error, value=1)
        with self.assertRaises(ValueError):
            ParseOutcome(success=False, error=error, was_relaxed=True)

    def test_to_dict_uses_camel_case(self) -> None:
        """Test the editor-facing dictionary shape."""
        error = ParseError("bad", 1, 2, 1, json_path="$.a")
        self.assertEqual(
            ParseOutcome.failed(error).to_dict(),
            {
                "success": False,
                "value": None,
                "canonicalText": None,
                "error": {
                    "message": "bad",
                    "line": 1,
                    "column": 2,
                    "offset": 1,
                    "jsonPath": "$.a",
                },
                "wasRelaxed": False,
                "wasYaml": False,
            },
        )

    def test_outcomes_are_frozen(self) -> None:
        """Test that results cannot be mutated after construction."""
        outcome = ParseOutcome.succeeded(None, "")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            outcome.success = False  # type: ignore[misc]


class TestParseError(unittest.TestCase):
    """Test ParseError helpers."""

    def test_with_json_path_returns_a_copy(self) -> None:
        """Test that attaching a path leaves the original untouched."""
        error = ParseError("bad", 1, 1, 0)
        located = error.with_json_path("$.b")
        self.assertIsNone(error.json_path)
        self.assertEqual(located.json_path, "$.b")
        self.assertEqual(located.message, "bad")

    def test_text_range_fields(self) -> None:
        """Test that text ranges carry both positions and offsets."""
        text_range = TextRange(line=2, column=4, start_offset=20, end_offset=27)
        self.assertEqual(
            (text_range.line, text_range.column), (2, 4)
        )
        self.assertEqual(text_range.end_offset - text_range.start_offset, 7)


if __name__ == "__main__":
    unittest.main()
