"""
Common constants used across the jsonpalpate library.
"""

PLACEHOLDER_PREFIX = "[JS: "
PLACEHOLDER_SUFFIX = "]"

QUOTE_CHARS = ('"', "'")

# Python/JavaScript sentinels rewritten by the literal normalizer
LITERAL_REPLACEMENTS = {
    "undefined": "null",
    "None": "null",
    "True": "true",
    "False": "false",
}

# Characters that may precede / follow a sentinel in value position,
# in addition to whitespace and the text boundaries
LEFT_VALUE_BOUNDARY = frozenset(":,[")
RIGHT_VALUE_BOUNDARY = frozenset(",]}")

# Bare words the permissive grammar already understands as values
JSON5_LITERALS = frozenset({"true", "false", "null", "Infinity", "NaN"})

BRACKET_PAIRS = {"{": "}", "[": "]", "(": ")"}
CLOSING_BRACKETS = {close: open_ for open_, close in BRACKET_PAIRS.items()}

RADIX_PREFIXES = {"x": 16, "b": 2, "o": 8}
RADIX_DIGITS = {
    16: frozenset("0123456789abcdefABCDEF"),
    2: frozenset("01"),
    8: frozenset("01234567"),
}
