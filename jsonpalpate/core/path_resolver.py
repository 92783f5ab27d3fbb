"""
Mapping between positions in the text and JSONPath expressions.

json_path_at_offset() answers "which value does this character belong to"
for the linter. path_to_text_range() goes the other way for the diff viewer,
finding the key or array element a path names. Both scan raw text, so they
work on relaxed input that never parsed.
"""

import json
from dataclasses import dataclass
from typing import Optional, Union

import regex  # type: ignore[import-untyped]

from ..preprocessing.string_utils import (
    is_comment_start,
    is_identifier_start,
    read_identifier_end,
    skip_comment,
    skip_nested,
    skip_string,
    skip_whitespace,
)
from .constants import QUOTE_CHARS
from .regex_utils import safe_regex_match, safe_regex_search
from .results import TextRange

PathSegment = Union[str, int]

IDENTIFIER_KEY_PATTERN = r"[A-Za-z_$][A-Za-z0-9_$]*"


@dataclass
class _Frame:
    """One open container while replaying text."""

    kind: str
    key: Optional[str] = None
    in_value: bool = False
    index: int = 0
    started: bool = False

    def mark_value(self) -> None:
        if self.kind == "array":
            self.started = True


def _decode_key(raw: str) -> str:
    if raw.startswith('"'):
        try:
            decoded = json.loads(raw)
        except ValueError:
            return raw[1:-1] if len(raw) > 1 and raw.endswith('"') else raw[1:]
        return decoded if isinstance(decoded, str) else raw[1:-1]
    inner = raw[1:-1] if len(raw) > 1 and raw.endswith("'") else raw[1:]
    return inner.replace("\\'", "'")


def format_json_path(segments: list[PathSegment]) -> str:
    """
    Render path segments as a JSONPath string.

    Identifier-like keys use dot notation, any other key uses bracket
    notation with a double-quoted, escaped key.
    """
    parts = ["$"]
    for segment in segments:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        elif safe_regex_match(IDENTIFIER_KEY_PATTERN + r"\Z", segment):
            parts.append(f".{segment}")
        else:
            parts.append(f"[{json.dumps(segment, ensure_ascii=False)}]")
    return "".join(parts)


def parse_json_path(path: str) -> list[PathSegment]:
    """
    Split a JSONPath like $.users[0]["first name"] into segments.

    Parsing stops at the first piece it does not understand.
    """
    segments: list[PathSegment] = []
    remaining = path[1:] if path.startswith("$") else path

    while remaining:
        if remaining.startswith("["):
            index_match = safe_regex_match(r"\[(\d+)\]", remaining)
            if index_match:
                segments.append(int(index_match.group(1)))
                remaining = remaining[index_match.end() :]
                continue
            quoted_match = safe_regex_match(
                r"""\[\s*("(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')\s*\]""", remaining
            )
            if not quoted_match:
                break
            segments.append(_decode_key(quoted_match.group(1)))
            remaining = remaining[quoted_match.end() :]
            continue

        if remaining.startswith("."):
            remaining = remaining[1:]
        key_match = safe_regex_match(r"[^.\[]+", remaining)
        if not key_match:
            break
        segments.append(key_match.group(0))
        remaining = remaining[key_match.end() :]

    return segments


def json_path_at_offset(text: str, offset: int) -> str:
    """
    Return the JSONPath of the value or key that contains offset.

    The text is replayed from the start up to offset while tracking open
    containers. A string that begins before offset is read whole, so an
    offset inside a key resolves to that key. Returns "$" for the root.
    """
    offset = max(0, min(offset, len(text)))
    stack: list[_Frame] = []
    i = 0

    while i < offset:
        char = text[i]
        top = stack[-1] if stack else None

        if char.isspace():
            i += 1
            continue
        if is_comment_start(text, i):
            i = skip_comment(text, i)
            continue

        if char in QUOTE_CHARS:
            end = skip_string(text, i)
            if top is not None:
                if top.kind == "object" and not top.in_value:
                    top.key = _decode_key(text[i:end])
                else:
                    top.mark_value()
            i = end
            continue

        if char in "{[":
            if top is not None:
                top.mark_value()
            stack.append(_Frame("object" if char == "{" else "array"))
        elif char in "}]":
            if stack:
                stack.pop()
        elif char == ":":
            if top is not None and top.kind == "object":
                top.in_value = True
        elif char == ",":
            if top is not None:
                if top.kind == "object":
                    top.key = None
                    top.in_value = False
                else:
                    top.index += 1
                    top.started = False
        elif (
            top is not None
            and top.kind == "object"
            and not top.in_value
            and is_identifier_start(char)
        ):
            end = read_identifier_end(text, i)
            top.key = text[i:end]
            i = end
            continue
        elif top is not None:
            top.mark_value()
        i += 1

    # The character at offset itself may start an element or a key, unless
    # the replay already read past it inside a longer token
    if i == offset and offset < len(text) and stack:
        top = stack[-1]
        char = text[offset]
        if top.kind == "array":
            if not char.isspace() and char not in ",]":
                top.started = True
        elif not top.in_value:
            if char in QUOTE_CHARS:
                top.key = _decode_key(text[offset : skip_string(text, offset)])
            elif is_identifier_start(char):
                top.key = text[offset : read_identifier_end(text, offset)]

    segments: list[PathSegment] = []
    for frame in stack:
        if frame.kind == "object":
            if frame.key is None:
                break
            segments.append(frame.key)
        else:
            if not frame.started:
                break
            segments.append(frame.index)
    return format_json_path(segments)


def _offset_to_zero_based(text: str, offset: int) -> tuple[int, int]:
    line = text.count("\n", 0, offset)
    return line, offset - (text.rfind("\n", 0, offset) + 1)


def _key_pattern(key: str) -> str:
    double_quoted = json.dumps(key, ensure_ascii=False)
    alternatives = [
        regex.escape(double_quoted),
        regex.escape("'" + key.replace("'", "\\'") + "'"),
    ]
    if safe_regex_match(IDENTIFIER_KEY_PATTERN + r"\Z", key):
        alternatives.append(r"(?<![\w$])" + regex.escape(key))
    return r"(?:" + "|".join(alternatives) + r")\s*:"


def _find_array_element(text: str, pos: int, index: int) -> Optional[int]:
    """Start offset of element index of the first array at or after pos."""
    while pos < len(text):
        char = text[pos]
        if char in QUOTE_CHARS:
            pos = skip_string(text, pos)
            continue
        if is_comment_start(text, pos):
            pos = skip_comment(text, pos)
            continue
        if char == "[":
            break
        pos += 1
    else:
        return None

    pos = skip_whitespace(text, pos + 1)
    element_start = pos
    element_index = 0
    while pos < len(text) and element_index < index:
        char = text[pos]
        if char in "{[":
            pos = skip_nested(text, pos)
        elif char in QUOTE_CHARS:
            pos = skip_string(text, pos)
        elif is_comment_start(text, pos):
            pos = skip_comment(text, pos)
        elif char in "]}":
            return None
        elif char == ",":
            element_index += 1
            pos = skip_whitespace(text, pos + 1)
            element_start = pos
        else:
            pos += 1

    if element_index != index or element_start >= len(text):
        return None
    if text[element_start] in "]}":
        return None
    return element_start


def _element_end(text: str, start: int) -> int:
    char = text[start]
    if char in "{[":
        return skip_nested(text, start)
    if char in QUOTE_CHARS:
        return skip_string(text, start)
    end = start
    while end < len(text) and text[end] not in ",]}":
        end += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    return end


def path_to_text_range(text: str, path: str) -> Optional[TextRange]:
    """
    Find the key (for object members) or element (for array items) that
    path names. Line and column are 0-based.

    Returns None when a segment cannot be found, which happens when the text
    and the path have drifted apart.
    """
    segments = parse_json_path(path)
    if not segments:
        return TextRange(line=0, column=0, start_offset=0, end_offset=0)

    pos = 0
    for position, segment in enumerate(segments):
        is_last = position == len(segments) - 1

        if isinstance(segment, str):
            match = safe_regex_search(_key_pattern(segment), text, pos=pos)
            if not match:
                return None
            if is_last:
                line, column = _offset_to_zero_based(text, match.start())
                return TextRange(line, column, match.start(), match.end())
            pos = match.end()
            continue

        element_start = _find_array_element(text, pos, segment)
        if element_start is None:
            return None
        if is_last:
            line, column = _offset_to_zero_based(text, element_start)
            return TextRange(
                line, column, element_start, _element_end(text, element_start)
            )
        pos = element_start

    return None
