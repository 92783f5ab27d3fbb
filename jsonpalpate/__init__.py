"""
jsonpalpate - feels its way through text that looks like JSON.

Developers paste strict JSON, JSON5, Python literals, JavaScript object
literals and YAML into the same box. jsonpalpate parses all of them into
one canonical JSON value, and when nothing fits it reports where the text
broke: line, column, offset and the JSONPath of the failing value.

Quick Start:
    import jsonpalpate

    outcome = jsonpalpate.parse("{fn: () => 42, hex: 0xFF}")
    outcome.value          # {'fn': '[JS: () => 42]', 'hex': 255}
    outcome.was_relaxed    # True

    outcome = jsonpalpate.parse('{"a": 1, "b": }')
    outcome.error.line, outcome.error.column, outcome.error.json_path

    # Drop-in replacement for json.loads
    data = jsonpalpate.loads("{unquoted: 'keys'}")

    # Diagnostics
    jsonpalpate.detect_features("{a: 1,}")   # ['trailing commas', 'unquoted keys']
    jsonpalpate.json_path_at_offset('{"a":1,"b":2}', 11)   # '$.b'
"""

from .core.engine import is_parseable, is_strict_json, load, loads, parse
from .core.exceptions import JSONDecodeError, JsonPalpateError, PositionError
from .core.path_resolver import (
    format_json_path,
    json_path_at_offset,
    parse_json_path,
    path_to_text_range,
)
from .core.results import ParseError, ParseOutcome, TextRange
from .diagnostics.features import detect_features, is_likely_yaml
from .diagnostics.linter import (
    Diagnostic,
    ValidationResult,
    ValidationStatus,
    error_summary,
    lint,
    validate_json,
    validation_status,
)
from .preprocessing.handlers import rewrite_expressions
from .preprocessing.normalizers import normalize_literals
from .utils.config import ParseConfig

__version__ = "0.1.0"
__author__ = "jsonpalpate contributors"

# Aliases matching the names editor integrations call
detectFeatures = detect_features
jsonPathAtOffset = json_path_at_offset
pathToTextRange = path_to_text_range

__all__ = [
    # Parsing
    "parse", "loads", "load", "is_strict_json", "is_parseable",
    # Rewriting
    "normalize_literals", "rewrite_expressions",
    # Positions and paths
    "json_path_at_offset", "path_to_text_range", "parse_json_path", "format_json_path",
    # Diagnostics
    "detect_features", "is_likely_yaml",
    "validate_json", "lint", "error_summary", "validation_status",
    # Result types
    "ParseOutcome", "ParseError", "TextRange",
    "ValidationResult", "ValidationStatus", "Diagnostic",
    # Configuration
    "ParseConfig",
    # Exceptions
    "JsonPalpateError", "PositionError", "JSONDecodeError",
    # Aliases
    "detectFeatures", "jsonPathAtOffset", "pathToTextRange",
]
