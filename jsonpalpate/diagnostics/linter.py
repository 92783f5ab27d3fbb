"""
Editor-facing validation built on the parse ladder.

validate_json() classifies text as strict, relaxed or invalid; lint() turns a
failure into a highlighted range; error_summary() and validation_status()
produce the status bar text.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.engine import parse
from ..core.regex_utils import safe_regex_match, safe_regex_search
from ..core.results import ParseError
from ..core.strict import is_strict_json
from ..utils.config import ParseConfig
from .features import detect_features

# How far around the error position to look for the offending token
TOKEN_WINDOW = 20

INVALID_MESSAGE = "Invalid JSON"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating editor text."""

    valid: bool
    strict: bool
    relaxed: bool
    error: Optional[ParseError] = None
    relaxed_features: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "strict": self.strict,
            "relaxed": self.relaxed,
            "error": self.error.to_dict() if self.error else None,
            "relaxedFeatures": list(self.relaxed_features),
        }


@dataclass(frozen=True)
class Diagnostic:
    """A highlighted range in the text. Offsets are 0-based, end exclusive."""

    start: int
    end: int
    severity: str
    message: str
    source: str = "json"
    json_path: Optional[str] = None


@dataclass(frozen=True)
class ValidationStatus:
    """Status bar state: idle, valid, relaxed or invalid."""

    status: str
    message: Optional[str] = None
    features: list[str] = field(default_factory=list)


def validate_json(text: str, config: Optional[ParseConfig] = None) -> ValidationResult:
    """Validate text, accepting both strict and relaxed syntax."""
    if not text.strip() or is_strict_json(text):
        return ValidationResult(valid=True, strict=True, relaxed=False)

    if config is None:
        config = ParseConfig()
    outcome = parse(text, config)
    if outcome.success:
        return ValidationResult(
            valid=True,
            strict=False,
            relaxed=True,
            relaxed_features=detect_features(text, timeout=config.regex_timeout),
        )
    return ValidationResult(
        valid=False, strict=False, relaxed=False, error=outcome.error
    )


def _token_range(text: str, pos: int) -> tuple[int, int]:
    """Widen pos to the token around it, delimited by whitespace and punctuation."""
    start, end = pos, pos + 1
    if pos < len(text):
        before = text[max(0, pos - TOKEN_WINDOW) : pos]
        after = text[pos : pos + TOKEN_WINDOW]
        start_match = safe_regex_search(r"([^\s,:\[\]{}]*)$", before)
        if start_match:
            start = pos - len(start_match.group(1))
        end_match = safe_regex_match(r"[^\s,:\[\]{}]*", after)
        if end_match:
            end = pos + len(end_match.group(0))

    if start == end:
        end = start + 1
    start = max(0, start)
    end = min(len(text), end)
    if start == end and start > 0:
        start -= 1
    return start, end


def lint(text: str, config: Optional[ParseConfig] = None) -> list[Diagnostic]:
    """
    Return diagnostics for text; empty when it parses.

    The error position is widened to cover the offending token and the range
    is clamped to the text.
    """
    validation = validate_json(text, config)
    if validation.valid or validation.error is None:
        return []

    error = validation.error
    start, end = _token_range(text, min(error.offset, len(text)))
    return [
        Diagnostic(
            start=start,
            end=end,
            severity="error",
            message=error.message,
            json_path=error.json_path,
        )
    ]


def _summarize(error: Optional[ParseError]) -> str:
    if error is None:
        return INVALID_MESSAGE
    return f"Line {error.line}, Col {error.column}: {error.message}"


def error_summary(text: str, config: Optional[ParseConfig] = None) -> Optional[str]:
    """Human-friendly error summary for the status bar, or None if valid."""
    validation = validate_json(text, config)
    if validation.valid:
        return None
    return _summarize(validation.error)


def validation_status(
    text: str, config: Optional[ParseConfig] = None
) -> ValidationStatus:
    if not text.strip():
        return ValidationStatus("idle")

    validation = validate_json(text, config)
    if validation.strict:
        return ValidationStatus("valid")
    if validation.relaxed:
        return ValidationStatus("relaxed", features=list(validation.relaxed_features))
    return ValidationStatus("invalid", message=_summarize(validation.error))
