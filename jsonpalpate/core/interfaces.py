"""
Core interfaces and protocols for the parsing system.

This module defines the contracts that rewrite steps must implement so that
pipelines can compose them and carry their offset maps along.
"""

from typing import Optional, Protocol

from ..preprocessing.base import RewriteResult
from ..utils.config import ParseConfig


class PreprocessingStep(Protocol):
    """Protocol for text rewrite steps."""

    name: str

    def should_apply(self, config: ParseConfig) -> bool:
        """Check if this step should be applied given the configuration."""
        ...

    def rewrite(self, text: str) -> RewriteResult:
        """Rewrite the text and record where each replacement came from."""
        ...

    def process(self, text: str, config: Optional[ParseConfig] = None) -> str:
        """Rewrite the text and return only the rewritten text."""
        ...
