"""
Unit tests for relaxed-feature detection.
"""

import unittest

from jsonpalpate.diagnostics.features import YAML_FORMAT, detect_features, is_likely_yaml


class TestDetectFeatures(unittest.TestCase):
    """Test the labels reported for relaxed syntax."""

    def test_single_feature_labels(self) -> None:
        """Test each label against a document that uses the feature."""
        cases = [
            ("{'name': 'John'}", "single quotes"),
            ('{"a": 1,}', "trailing commas"),
            ("{ // comment\n}", "comments"),
            ("{ /* block */ }", "comments"),
            ("{name: 'John'}", "unquoted keys"),
            ("{value: undefined}", "undefined values"),
            ("{value: NaN}", "special numbers"),
            ("{value: -Infinity}", "special numbers"),
            ("{value: 0xFF}", "hex numbers"),
            ("{value: 0b1010}", "binary numbers"),
            ("{value: 0o755}", "octal numbers"),
            ("{value: 123n}", "BigInt"),
            ("{message: `hello`}", "template literals"),
            ("{value: None}", "Python None"),
            ("{active: True}", "Python booleans"),
            ("{fn: () => {}}", "arrow functions"),
            ("{fn: function() {}}", "functions"),
            ("{pattern: /test/gi}", "regex literals"),
            ("{date: new Date()}", "new expressions"),
            ("{value: config.timeout}", "variable references"),
            ("name: John\nage: 30", YAML_FORMAT),
        ]
        for text, label in cases:
            with self.subTest(text=text):
                self.assertIn(label, detect_features(text))

    def test_strict_json_has_no_features(self) -> None:
        """Test that strict JSON and blank text report nothing."""
        for text in ['{"name": "John"}', "[1, 2, 3]", '"it\'s"', "", "  "]:
            with self.subTest(text=text):
                self.assertEqual(detect_features(text), [])

    def test_label_order(self) -> None:
        """Test that labels come back in detection order."""
        self.assertEqual(
            detect_features("{a: 'x', b: 0xFF,}"),
            ["single quotes", "trailing commas", "unquoted keys", "hex numbers"],
        )

    def test_yaml_label_is_last(self) -> None:
        """Test that the YAML label follows the syntax labels."""
        features = detect_features("---\nname: 'John'")
        self.assertEqual(features[-1], YAML_FORMAT)
        self.assertIn("single quotes", features)

    def test_detection_does_not_need_a_parse(self) -> None:
        """Test that broken documents still report what they use."""
        self.assertIn("unquoted keys", detect_features("{a: 1, b: @}"))


class TestIsLikelyYaml(unittest.TestCase):
    """Test the YAML heuristic."""

    def test_yaml_documents(self) -> None:
        """Test document markers, mappings, lists and block scalars."""
        for text in [
            "---\nname: John",
            "name: John\nage: 30",
            "- item1\n- item2",
            "content: |\n  line1\n  line2",
        ]:
            with self.subTest(text=text):
                self.assertTrue(is_likely_yaml(text))

    def test_json_documents(self) -> None:
        """Test that text opening with a bracket is treated as JSON."""
        for text in ['{"name": "John"}', "[1, 2, 3]", "{name: 'John'}", "  [\n- a\n]", ""]:
            with self.subTest(text=text):
                self.assertFalse(is_likely_yaml(text))

    def test_plain_scalar(self) -> None:
        """Test that a lone word is not YAML."""
        self.assertFalse(is_likely_yaml("hello"))


if __name__ == "__main__":
    unittest.main()
