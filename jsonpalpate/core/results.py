"""
Result types produced by the parsing pipeline.

All of these are created fresh for every call and never mutated afterwards.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional, Union

JSONValue = Union[
    None, bool, int, float, str, list["JSONValue"], dict[str, "JSONValue"]
]


@dataclass(frozen=True)
class ParseError:
    """A located parse failure. Line and column are 1-indexed, offset 0-indexed."""

    message: str
    line: int
    column: int
    offset: int
    json_path: Optional[str] = None

    def with_json_path(self, json_path: Optional[str]) -> "ParseError":
        return replace(self, json_path=json_path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "offset": self.offset,
            "jsonPath": self.json_path,
        }


@dataclass(frozen=True)
class ParseOutcome:
    """
    Either a parsed value with its canonical JSON text, or a ParseError.

    Use ParseOutcome.succeeded() / ParseOutcome.failed() to build one; the
    two shapes are mutually exclusive.
    """

    success: bool
    value: JSONValue = None
    canonical_text: Optional[str] = None
    error: Optional[ParseError] = None
    was_relaxed: bool = False
    was_yaml: bool = False

    def __post_init__(self) -> None:
        if self.success:
            if self.error is not None:
                raise ValueError("A successful outcome cannot carry an error")
            if self.canonical_text is None:
                raise ValueError("A successful outcome needs canonical text")
        else:
            if self.error is None:
                raise ValueError("A failed outcome needs an error")
            if (
                self.value is not None
                or self.canonical_text is not None
                or self.was_relaxed
                or self.was_yaml
            ):
                raise ValueError("A failed outcome cannot carry a value")

    @classmethod
    def succeeded(
        cls,
        value: JSONValue,
        canonical_text: str,
        *,
        was_relaxed: bool = False,
        was_yaml: bool = False,
    ) -> "ParseOutcome":
        return cls(
            success=True,
            value=value,
            canonical_text=canonical_text,
            was_relaxed=was_relaxed or was_yaml,
            was_yaml=was_yaml,
        )

    @classmethod
    def failed(cls, error: ParseError) -> "ParseOutcome":
        return cls(success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        """Return the outcome in the camelCase shape editor integrations expect."""
        return {
            "success": self.success,
            "value": self.value,
            "canonicalText": self.canonical_text,
            "error": self.error.to_dict() if self.error else None,
            "wasRelaxed": self.was_relaxed,
            "wasYaml": self.was_yaml,
        }


@dataclass(frozen=True)
class TextRange:
    """Location of a path's token. Line and column are 0-indexed."""

    line: int
    column: int
    start_offset: int
    end_offset: int
