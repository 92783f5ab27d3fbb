"""
Rewrite pipeline for composable preprocessing steps.

This module implements the pipeline pattern so that the parse ladder can run
the literal normalizer alone or followed by the expression rewriter, while
keeping one offset map from the final text back to the raw input.
"""

from typing import Optional

from ..core.interfaces import PreprocessingStep
from ..utils.config import ParseConfig
from .base import OffsetMap, RewriteResult
from .handlers import ExpressionRewriter
from .normalizers import LiteralNormalizer


class PreprocessingPipeline:
    """Manages a sequence of rewrite steps applied to text."""

    def __init__(self, steps: Optional[list[PreprocessingStep]] = None):
        self.steps = steps or []

    def add_step(self, step: PreprocessingStep) -> None:
        """Add a rewrite step to the pipeline."""
        self.steps.append(step)

    def rewrite(self, text: str, config: Optional[ParseConfig] = None) -> RewriteResult:
        """Apply all applicable steps and compose their offset maps."""
        if config is None:
            config = ParseConfig()

        result = text
        offset_map = OffsetMap()
        for step in self.steps:
            if not step.should_apply(config):
                continue
            step_result = step.rewrite(result)
            result = step_result.text
            # Offsets in the newest text go through the newest map first
            offset_map = step_result.offset_map.compose(offset_map)
        return RewriteResult(result, offset_map)

    def process(self, text: str, config: Optional[ParseConfig] = None) -> str:
        """Apply all applicable steps to the text."""
        return self.rewrite(text, config).text

    @classmethod
    def create_literal_pipeline(cls) -> "PreprocessingPipeline":
        """Light preprocessing: sentinel literals only."""
        return cls([LiteralNormalizer()])

    @classmethod
    def create_expression_pipeline(cls) -> "PreprocessingPipeline":
        """Sentinel literals followed by full expression rewriting."""
        return cls([LiteralNormalizer(), ExpressionRewriter()])
