"""
Scanning helpers shared by the rewrite steps and the path resolver.

Every helper takes the full text and a start index and returns the index
just past the construct it skipped. Unterminated constructs run to the end
of the text instead of failing.
"""

import json
from typing import Optional

from ..core.constants import (
    BRACKET_PAIRS,
    PLACEHOLDER_PREFIX,
    PLACEHOLDER_SUFFIX,
    QUOTE_CHARS,
)


def is_identifier_start(char: str) -> bool:
    """Whether char can start a JavaScript identifier."""
    return char.isalpha() or char in "_$"


def is_identifier_char(char: str) -> bool:
    """Whether char can continue a JavaScript identifier."""
    return char.isalnum() or char in "_$"


def read_identifier_end(text: str, start: int) -> int:
    """Return the index just past the identifier starting at start."""
    i = start
    while i < len(text) and is_identifier_char(text[i]):
        i += 1
    return i


def skip_whitespace(text: str, start: int) -> int:
    """Skip whitespace characters."""
    i = start
    while i < len(text) and text[i].isspace():
        i += 1
    return i


def is_comment_start(text: str, pos: int) -> bool:
    """Check if position starts a // or /* comment."""
    return text[pos] == "/" and pos + 1 < len(text) and text[pos + 1] in "/*"


def skip_comment(text: str, start: int) -> int:
    """
    Skip a comment starting at start.

    Line comments stop before the newline so that the newline is still seen
    by the caller.
    """
    if text[start + 1] == "/":
        end = text.find("\n", start)
        return len(text) if end == -1 else end

    end = text.find("*/", start + 2)
    return len(text) if end == -1 else end + 2


def skip_string(text: str, start: int) -> int:
    """Skip a single- or double-quoted string, honoring backslash escapes."""
    quote_char = text[start]
    i = start + 1
    while i < len(text):
        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == quote_char:
            return i + 1
        i += 1
    return len(text)


def skip_template(text: str, start: int) -> int:
    """Skip a backtick template literal, including nested ${...} substitutions."""
    i = start + 1
    while i < len(text):
        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == "`":
            return i + 1
        if char == "$" and i + 1 < len(text) and text[i + 1] == "{":
            i = skip_balanced(text, i + 1, "{", "}")
            continue
        i += 1
    return len(text)


def skip_regex(text: str, start: int) -> Optional[int]:
    """
    Skip a /pattern/flags regex literal starting at start.

    A slash inside a [...] class does not end the pattern. Returns None when
    the line ends before the closing slash.
    """
    i = start + 1
    in_class = False
    while i < len(text):
        char = text[i]
        if char == "\n":
            return None
        if char == "\\":
            i += 2
            continue
        if in_class:
            if char == "]":
                in_class = False
        elif char == "[":
            in_class = True
        elif char == "/":
            i += 1
            while i < len(text) and text[i].isalpha():
                i += 1
            return i
        i += 1
    return None


def skip_balanced(text: str, start: int, open_char: str, close_char: str) -> int:
    """
    Skip balanced delimiters starting at the open_char at start.

    Strings, template literals and comments inside are skipped whole, so
    delimiters within them are not counted.
    """
    depth = 0
    i = start
    while i < len(text):
        char = text[i]
        if char in QUOTE_CHARS:
            i = skip_string(text, i)
            continue
        if char == "`":
            i = skip_template(text, i)
            continue
        if is_comment_start(text, i):
            i = skip_comment(text, i)
            continue
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return len(text)


def skip_nested(text: str, start: int) -> int:
    """Skip the bracketed structure opened by the character at start."""
    open_char = text[start]
    return skip_balanced(text, start, open_char, BRACKET_PAIRS[open_char])


def make_placeholder(source: str) -> str:
    """Quote source as a placeholder string literal: "[JS: <source>]"."""
    return json.dumps(
        f"{PLACEHOLDER_PREFIX}{source}{PLACEHOLDER_SUFFIX}", ensure_ascii=False
    )
