"""
Exception classes for jsonpalpate.

Malformed input never raises from parse(); it produces a failed ParseOutcome.
The exceptions here cover the drop-in loads() API and internal invariant
violations.
"""

import json
from typing import Optional


class JsonPalpateError(Exception):
    """Base class for all jsonpalpate errors."""


class PositionError(JsonPalpateError, ValueError):
    """Raised when a reported position breaks the offset/line/column contract."""

    def __init__(
        self,
        message: str,
        offset: Optional[int] = None,
        text_length: Optional[int] = None,
    ):
        self.offset = offset
        self.text_length = text_length
        if offset is not None and text_length is not None:
            message = f"{message} (offset {offset}, text length {text_length})"
        super().__init__(message)


class JSONDecodeError(json.JSONDecodeError):
    """
    Raised by loads() when no parsing stage accepts the input.

    Subclasses json.JSONDecodeError so callers catching the standard
    exception keep working, and carries the JSONPath of the failure.
    """

    def __init__(
        self, msg: str, doc: str, pos: int, json_path: Optional[str] = None
    ):
        super().__init__(msg, doc, pos)
        self.json_path = json_path

    def __reduce__(self):  # type: ignore[no-untyped-def]
        return self.__class__, (self.msg, self.doc, self.pos, self.json_path)


class NonStandardConstantError(JsonPalpateError, ValueError):
    """Raised during strict parsing when NaN, Infinity or -Infinity appears."""

    def __init__(self, constant: str):
        self.constant = constant
        super().__init__(f"{constant} is not valid JSON")
