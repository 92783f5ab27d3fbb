"""
Strict JSON decoding.

The stdlib json module accepts NaN, Infinity and -Infinity by default; strict
JSON does not, so they are rejected here.
"""

import json
from typing import Any, NoReturn

from .exceptions import NonStandardConstantError


def _reject_constant(constant: str) -> NoReturn:
    raise NonStandardConstantError(constant)


def strict_loads(text: str) -> Any:
    """Decode text as strict JSON, raising ValueError on anything else."""
    return json.loads(text, parse_constant=_reject_constant)


def is_strict_json(text: str) -> bool:
    """Check if text is valid strict JSON."""
    try:
        strict_loads(text)
    except (ValueError, RecursionError):
        return False
    return True
