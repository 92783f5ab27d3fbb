"""
Base classes for rewrite steps.

A rewrite step turns text into text and records every replacement it makes,
so that positions reported against the rewritten text can be mapped back to
the text the user actually typed.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..utils.config import ParseConfig


@dataclass(frozen=True)
class Replacement:
    """One replaced span: text[source_start:source_end] became output[output_start:output_end]."""

    source_start: int
    source_end: int
    output_start: int
    output_end: int


class OffsetMap:
    """Maps offsets in rewritten text back to offsets in the source text."""

    def __init__(
        self,
        replacements: tuple[Replacement, ...] = (),
        inner: Optional["OffsetMap"] = None,
    ):
        self.replacements = replacements
        self.inner = inner

    def to_source(self, offset: int) -> int:
        """
        Translate an output offset to a source offset.

        Offsets inside a replaced span map to the start of the construct that
        was replaced; offsets after it shift by the accumulated length change.
        """
        delta = 0
        mapped: Optional[int] = None
        for item in self.replacements:
            if offset < item.output_start:
                break
            if offset < item.output_end:
                mapped = item.source_start
                break
            delta = item.source_end - item.output_end
        if mapped is None:
            mapped = offset + delta
        if self.inner is not None:
            return self.inner.to_source(mapped)
        return mapped

    def compose(self, inner: "OffsetMap") -> "OffsetMap":
        """Return a map that applies this map, then inner."""
        if self.inner is None:
            return OffsetMap(self.replacements, inner)
        return OffsetMap(self.replacements, self.inner.compose(inner))

    @property
    def is_identity(self) -> bool:
        return not self.replacements and (
            self.inner is None or self.inner.is_identity
        )


@dataclass(frozen=True)
class RewriteResult:
    """Rewritten text plus the map back to the text it came from."""

    text: str
    offset_map: OffsetMap = field(default_factory=OffsetMap)

    @property
    def changed(self) -> bool:
        return not self.offset_map.is_identity


class RewriteBuffer:
    """
    Builds rewritten text lazily.

    Scanners advance over source text freely and only call replace() for the
    spans they rewrite; untouched text between replacements is copied on
    demand.
    """

    def __init__(self, text: str):
        self.text = text
        self._parts: list[str] = []
        self._cursor = 0
        self._length = 0
        self._replacements: list[Replacement] = []

    def _emit(self, chunk: str) -> None:
        self._parts.append(chunk)
        self._length += len(chunk)

    def replace(self, start: int, end: int, new_text: str) -> None:
        """Replace text[start:end] with new_text. Spans must arrive in order."""
        if self.text[start:end] == new_text:
            return
        self._emit(self.text[self._cursor : start])
        output_start = self._length
        self._emit(new_text)
        self._replacements.append(
            Replacement(start, end, output_start, self._length)
        )
        self._cursor = end

    def result(self) -> RewriteResult:
        self._emit(self.text[self._cursor :])
        self._cursor = len(self.text)
        return RewriteResult(
            "".join(self._parts), OffsetMap(tuple(self._replacements))
        )


class PreprocessingStepBase:
    """Base class for rewrite steps with common functionality."""

    name = "step"

    def should_apply(self, _config: ParseConfig) -> bool:
        """Default implementation - always apply. Override in subclasses."""
        return True

    def rewrite(self, text: str) -> RewriteResult:
        """Rewrite the text. Must be implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement rewrite()")

    def process(self, text: str, _config: Optional[ParseConfig] = None) -> str:
        """Rewrite the text and drop the offset map."""
        return self.rewrite(text).text
