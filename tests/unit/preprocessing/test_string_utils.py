"""
Unit tests for the shared scanning helpers.
"""

import unittest

from jsonpalpate.preprocessing.string_utils import (
    is_comment_start,
    make_placeholder,
    read_identifier_end,
    skip_balanced,
    skip_comment,
    skip_nested,
    skip_regex,
    skip_string,
    skip_template,
)


class TestSkipHelpers(unittest.TestCase):
    """Test skipping over strings, templates, comments and brackets."""

    def test_skip_string_honors_escapes(self) -> None:
        """Test that an escaped quote does not end the string."""
        self.assertEqual(skip_string('"a\\"b" rest', 0), 6)
        self.assertEqual(skip_string("'it\\'s' x", 0), 7)

    def test_skip_unterminated_string(self) -> None:
        """Test that an unterminated string runs to the end."""
        self.assertEqual(skip_string('"open', 0), 5)

    def test_skip_template_with_substitution(self) -> None:
        """Test that ${...} inside a template is skipped as a unit."""
        self.assertEqual(skip_template("`x ${y}`z", 0), 8)
        text = "`a ${ {b: `c`} } d` tail"
        self.assertEqual(skip_template(text, 0), text.index(" tail"))

    def test_skip_comments(self) -> None:
        """Test line and block comments."""
        self.assertEqual(skip_comment("// c\nx", 0), 4)
        self.assertEqual(skip_comment("/* c */x", 0), 7)
        self.assertEqual(skip_comment("/* open", 0), 7)

    def test_is_comment_start(self) -> None:
        """Test comment detection against division and regex slashes."""
        self.assertTrue(is_comment_start("//", 0))
        self.assertTrue(is_comment_start("/*", 0))
        self.assertFalse(is_comment_start("/a/", 0))
        self.assertFalse(is_comment_start("/", 0))

    def test_skip_balanced_ignores_quoted_delimiters(self) -> None:
        """Test that delimiters inside strings are not counted."""
        text = "(a, (b), ')') x"
        self.assertEqual(skip_balanced(text, 0, "(", ")"), 13)

    def test_skip_nested(self) -> None:
        """Test skipping a structure by its opening bracket."""
        text = '[{"a": "]"}, 2] tail'
        self.assertEqual(skip_nested(text, 0), text.index(" tail"))

    def test_skip_regex(self) -> None:
        """Test regex literals with flags, escapes and slashes in classes."""
        cases = [
            ("/test/gi, x", 8),
            ("/[/]/ x", 5),
            ("/a\\/b/ x", 6),
            ('/"/ x', 3),
        ]
        for text, end in cases:
            with self.subTest(text=text):
                self.assertEqual(skip_regex(text, 0), end)
        self.assertIsNone(skip_regex("/open\n/", 0))
        self.assertIsNone(skip_regex("/open", 0))

    def test_read_identifier_end(self) -> None:
        """Test identifier scanning with $ and _."""
        self.assertEqual(read_identifier_end("$foo_1.bar", 0), 6)


class TestPlaceholders(unittest.TestCase):
    """Test placeholder string construction."""

    def test_placeholder_is_a_json_string(self) -> None:
        """Test that the construct source is escaped inside the placeholder."""
        self.assertEqual(make_placeholder("() => 42"), '"[JS: () => 42]"')
        self.assertEqual(make_placeholder('a"b'), '"[JS: a\\"b]"')
        self.assertEqual(make_placeholder("a\nb\tc"), '"[JS: a\\nb\\tc]"')


if __name__ == "__main__":
    unittest.main()
