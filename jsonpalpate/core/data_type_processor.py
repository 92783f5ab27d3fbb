"""
Value normalization for parsed documents.

Every parser stage hands its result through here so that callers always get
the same closed value model: None, bool, int, float, str, list and dict with
string keys. Values JSON cannot represent are folded into it.
"""

import base64
import datetime
import math
from typing import Any

from .results import JSONValue


class DataTypeProcessor:
    """Handles data type normalization of parsed values."""

    @staticmethod
    def normalize_key(key: Any) -> str:
        """
        Stringify a mapping key the way JSON would spell it.

        YAML allows non-string keys: `1: a` has an int key, `yes: b` a bool.
        """
        if isinstance(key, str):
            return key
        if isinstance(key, bool):
            return "true" if key else "false"
        if key is None:
            return "null"
        if isinstance(key, (datetime.date, datetime.datetime)):
            return key.isoformat()
        return str(key)

    @staticmethod
    def normalize_value(value: Any) -> JSONValue:
        """
        Recursively normalize a parsed value, bottom-up.

        Converts:
        - NaN, Infinity, -Infinity -> None
        - tuples and sets -> lists
        - dates and datetimes -> ISO 8601 strings
        - bytes -> base64 text
        - non-string mapping keys -> strings
        """
        if value is None or isinstance(value, (bool, str)):
            return value
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return value if math.isfinite(value) else None
        if isinstance(value, dict):
            return {
                DataTypeProcessor.normalize_key(key): DataTypeProcessor.normalize_value(item)
                for key, item in value.items()
            }
        if isinstance(value, (list, tuple)):
            return [DataTypeProcessor.normalize_value(item) for item in value]
        if isinstance(value, (set, frozenset)):
            items = [DataTypeProcessor.normalize_value(item) for item in value]
            return sorted(items, key=repr)
        if isinstance(value, (datetime.date, datetime.datetime)):
            return value.isoformat()
        if isinstance(value, (bytes, bytearray)):
            return base64.b64encode(bytes(value)).decode("ascii")
        return str(value)


normalize_value = DataTypeProcessor.normalize_value
