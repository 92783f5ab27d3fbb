"""
Relaxed-feature detection.

A heuristic regex scan over raw text that names the non-standard syntax a
document uses, for messages like "Converted: single quotes, comments". It
runs independently of parsing and may over- or under-report.
"""

import logging

import regex  # type: ignore[import-untyped]

from ..core.regex_utils import DEFAULT_TIMEOUT, safe_regex_search
from ..core.strict import is_strict_json

logger = logging.getLogger(__name__)

# Checked in order; the result lists labels in this order
FEATURE_PATTERNS: tuple[tuple[str, str, int], ...] = (
    ("single quotes", r"'[^'\n]*'", 0),
    ("trailing commas", r",\s*[\]}]", 0),
    ("comments", r"//.*$|/\*[\s\S]*?\*/", regex.MULTILINE),
    ("unquoted keys", r"[{,]\s*[A-Za-z_$][A-Za-z0-9_$]*\s*:", 0),
    ("undefined values", r"(?<![\w$])undefined(?![\w$])", 0),
    ("special numbers", r"(?<![\w$])(?:NaN|Infinity)(?![\w$])", 0),
    ("hex numbers", r"\b0[xX][0-9a-fA-F]+", 0),
    ("binary numbers", r"\b0[bB][01]+", 0),
    ("octal numbers", r"\b0[oO][0-7]+", 0),
    ("BigInt", r"\b(?:0[xX][0-9a-fA-F]+|0[bB][01]+|0[oO][0-7]+|\d+)n\b", 0),
    ("template literals", r"`[^`]*`", 0),
    ("Python None", r"(?<![\w$])None(?![\w$])", 0),
    ("Python booleans", r"(?<![\w$])(?:True|False)(?![\w$])", 0),
    ("arrow functions", r"=>", 0),
    ("functions", r"(?<![\w$])function(?![\w$])\s*[\w$]*\s*\(", 0),
    (
        "regex literals",
        r"[:,\[]\s*/(?![/*])(?:\\.|\[(?:\\.|[^\]\\\n])*\]|[^/\\\n\[])+/[a-z]*",
        0,
    ),
    ("new expressions", r"(?<![\w$])new\s+[A-Za-z_$][\w$.]*", 0),
    ("variable references", r"[:,\[]\s*[A-Za-z_$][A-Za-z0-9_$]*\s*\.", 0),
)

YAML_FORMAT = "YAML format"

YAML_PATTERNS = (
    r"^---[ \t]*$",
    r"^[ \t]*[\"']?[A-Za-z0-9_][\w .\"'-]*:(?:[ \t]|$)",
    r"^[ \t]*- \S",
    r":[ \t]*[|>][-+]?[ \t]*$",
)


def is_likely_yaml(text: str, timeout: float = DEFAULT_TIMEOUT) -> bool:
    """
    Guess whether text is YAML rather than broken JSON.

    Text starting with { or [ is treated as JSON. Otherwise a document
    marker, key: value lines, "- item" lists or block scalars count as YAML.
    """
    stripped = text.strip()
    if not stripped or stripped[0] in "{[":
        return False
    return any(
        safe_regex_search(pattern, stripped, regex.MULTILINE, timeout=timeout)
        for pattern in YAML_PATTERNS
    )


def detect_features(text: str, timeout: float = DEFAULT_TIMEOUT) -> list[str]:
    """
    Return labels for the relaxed syntax found in text.

    Strict JSON yields an empty list.
    """
    if not text.strip() or is_strict_json(text):
        return []

    features = [
        label
        for label, pattern, flags in FEATURE_PATTERNS
        if safe_regex_search(pattern, text, flags, timeout=timeout)
    ]
    if is_likely_yaml(text, timeout=timeout):
        features.append(YAML_FORMAT)

    logger.debug("Detected relaxed features: %s", features)
    return features
