"""
jsonpalpate core parsing engine.

This module provides the parse ladder and the position utilities around it.
"""

from .engine import is_parseable, is_strict_json, load, loads, parse
from .path_resolver import (
    format_json_path,
    json_path_at_offset,
    parse_json_path,
    path_to_text_range,
)
from .results import ParseError, ParseOutcome, TextRange

__all__ = [
    "parse", "loads", "load", "is_strict_json", "is_parseable",
    "json_path_at_offset", "path_to_text_range",
    "parse_json_path", "format_json_path",
    "ParseError", "ParseOutcome", "TextRange",
]
