"""
Error normalization for the parse ladder.

Each engine reports failures in its own format: the stdlib json module gives
a character offset, json5 gives a line and column against the rewritten text,
PyYAML gives a 0-based mark. This module turns each of them into a candidate
offset against the raw input, picks the most plausible candidate and builds
the final ParseError from one shared offset/line/column conversion.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import yaml
from yaml.reader import ReaderError

from ..preprocessing.base import OffsetMap
from .exceptions import NonStandardConstantError, PositionError
from .regex_utils import safe_regex_search, safe_regex_sub
from .results import ParseError

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Invalid input"

# json5: '<string>:3 Unexpected "}" at column 7'
JSON5_POSITION_PATTERN = r":(\d+) Unexpected .* at column (\d+)"
LINE_COLUMN_PATTERNS = (
    r"\bat (\d+):(\d+)",
    r"\bline (\d+),? column (\d+)",
)
OFFSET_PATTERN = r"\bat position (\d+)"

MESSAGE_PREFIXES = (r"^JSON5:\s*", r"^SyntaxError:\s*", r"^<[^>]*>:\d+\s+")
MESSAGE_SUFFIXES = (
    r":\s*line \d+ column \d+ \(char \d+\)$",
    r"\s+at column \d+$",
    r"\s+at \d+:\d+$",
    r"\s+at position \d+$",
)


def offset_to_line_column(text: str, offset: int) -> tuple[int, int]:
    """
    Convert a 0-based offset to a 1-based (line, column) pair.

    Lines are split on "\\n" only, and columns count characters, matching
    line_column_to_offset.
    """
    if offset < 0 or offset > len(text):
        raise PositionError("Offset outside the text", offset, len(text))
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def line_column_to_offset(text: str, line: int, column: int) -> int:
    """Convert a 1-based (line, column) pair to an offset, clamped to the line."""
    line_start = 0
    for _ in range(max(line, 1) - 1):
        newline = text.find("\n", line_start)
        if newline == -1:
            return len(text)
        line_start = newline + 1
    line_end = text.find("\n", line_start)
    if line_end == -1:
        line_end = len(text)
    return min(line_start + max(column, 1) - 1, line_end)


@dataclass
class ErrorContext:
    """Context information for parsing errors."""

    position: int
    line: int
    column: int
    context_text: str


class ErrorContextBuilder:
    """Builds error context information from a position in the raw text."""

    @staticmethod
    def build_context(
        position: int, original_text: str, context_length: int = 50
    ) -> ErrorContext:
        """Build error context from position and original text."""
        line, column = offset_to_line_column(original_text, position)
        start = max(0, position - context_length // 2)
        end = min(len(original_text), position + context_length // 2)
        return ErrorContext(
            position=position,
            line=line,
            column=column,
            context_text=original_text[start:end],
        )


@dataclass(frozen=True)
class ErrorCandidate:
    """An engine error located in the raw input."""

    message: str
    offset: int
    source: str


def clean_error_message(message: str) -> str:
    """Strip engine-specific prefixes and position suffixes from a message."""
    cleaned = message.strip()
    for pattern in MESSAGE_PREFIXES:
        cleaned = safe_regex_sub(pattern, "", cleaned)
    for pattern in MESSAGE_SUFFIXES:
        cleaned = safe_regex_sub(pattern, "", cleaned)
    cleaned = cleaned.strip()
    return cleaned or FALLBACK_MESSAGE


def _clamp(offset: int, text: str) -> int:
    return max(0, min(offset, len(text)))


def candidate_from_json_error(exc: Exception, raw_text: str) -> ErrorCandidate:
    """Locate a stdlib json error. Strict parsing always runs on the raw text."""
    if isinstance(exc, json.JSONDecodeError):
        return ErrorCandidate(
            clean_error_message(exc.msg), _clamp(exc.pos, raw_text), "json"
        )
    if isinstance(exc, NonStandardConstantError):
        return ErrorCandidate(
            str(exc), max(raw_text.find(exc.constant), 0), "json"
        )
    return ErrorCandidate(clean_error_message(str(exc)), 0, "json")


def _position_in_message(message: str, text: str) -> Optional[int]:
    """Find an engine position in message and convert it to an offset in text."""
    match = safe_regex_search(JSON5_POSITION_PATTERN, message)
    if match:
        return line_column_to_offset(text, int(match.group(1)), int(match.group(2)))
    for pattern in LINE_COLUMN_PATTERNS:
        match = safe_regex_search(pattern, message)
        if match:
            return line_column_to_offset(
                text, int(match.group(1)), int(match.group(2))
            )
    match = safe_regex_search(OFFSET_PATTERN, message)
    if match:
        return int(match.group(1))
    return None


def candidate_from_json5_error(
    exc: Exception, rewritten_text: str, offset_map: OffsetMap, raw_text: str
) -> ErrorCandidate:
    """
    Locate a permissive-grammar error.

    json5 reports positions against the rewritten text; the offset map
    carries them back to the raw input.
    """
    message = str(exc)
    offset = _position_in_message(message, rewritten_text)
    if offset is None:
        return ErrorCandidate(clean_error_message(message), 0, "json5")
    raw_offset = offset_map.to_source(_clamp(offset, rewritten_text))
    return ErrorCandidate(
        clean_error_message(message), _clamp(raw_offset, raw_text), "json5"
    )


def _yaml_mark_offset(mark: Any) -> Optional[int]:
    if mark is None:
        return None
    index = getattr(mark, "index", None)
    if isinstance(index, int):
        return index
    return None


def candidate_from_yaml_error(exc: Exception, raw_text: str) -> ErrorCandidate:
    """Locate a PyYAML error from its problem mark, or its context mark."""
    if isinstance(exc, yaml.MarkedYAMLError):
        problem = exc.problem or FALLBACK_MESSAGE
        message = f"{exc.context}: {problem}" if exc.context else problem
        offset = _yaml_mark_offset(exc.problem_mark)
        if offset is None:
            offset = _yaml_mark_offset(exc.context_mark)
        return ErrorCandidate(
            clean_error_message(message), _clamp(offset or 0, raw_text), "yaml"
        )
    if isinstance(exc, ReaderError):
        return ErrorCandidate(
            clean_error_message(exc.reason), _clamp(exc.position, raw_text), "yaml"
        )

    message = str(exc)
    offset = _position_in_message(message, raw_text)
    return ErrorCandidate(
        clean_error_message(message), _clamp(offset or 0, raw_text), "yaml"
    )


class ErrorNormalizer:
    """Chooses between candidate errors and builds the final ParseError."""

    def __init__(self, text: str, logger_: Optional[logging.Logger] = None):
        self.text = text
        self.logger = logger_ or logger

    def choose(
        self, strict: Optional[ErrorCandidate], last: Optional[ErrorCandidate]
    ) -> ErrorCandidate:
        """
        Prefer the candidate with the larger offset.

        Deeper scanning progress is a proxy for the true failure point. Ties
        go to the later stage.
        """
        if strict is None and last is None:
            return ErrorCandidate(FALLBACK_MESSAGE, 0, "none")
        if last is None:
            assert strict is not None
            return strict
        if strict is None or last.offset >= strict.offset:
            return last
        return strict

    def build(self, candidate: ErrorCandidate) -> ParseError:
        """Turn a candidate into a ParseError with a consistent position."""
        line, column = offset_to_line_column(self.text, candidate.offset)
        if line_column_to_offset(self.text, line, column) != candidate.offset:
            raise PositionError(
                f"Line {line}, column {column} does not map back to the offset",
                candidate.offset,
                len(self.text),
            )
        return ParseError(
            message=candidate.message,
            line=line,
            column=column,
            offset=candidate.offset,
        )

    def normalize(
        self, strict: Optional[ErrorCandidate], last: Optional[ErrorCandidate]
    ) -> ParseError:
        chosen = self.choose(strict, last)
        error = self.build(chosen)
        if self.logger.isEnabledFor(logging.DEBUG):
            context = ErrorContextBuilder.build_context(error.offset, self.text)
            self.logger.debug(
                "Reporting %s error at line %d, column %d: %s (near %r)",
                chosen.source,
                error.line,
                error.column,
                error.message,
                context.context_text,
            )
        return error
