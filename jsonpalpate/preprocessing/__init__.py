"""
Rewrite steps that turn relaxed input into text the permissive grammar accepts.
"""

from .base import OffsetMap, PreprocessingStepBase, Replacement, RewriteResult
from .handlers import ExpressionRewriter, rewrite_expressions
from .normalizers import LiteralNormalizer, normalize_literals
from .pipeline import PreprocessingPipeline

__all__ = [
    "ExpressionRewriter",
    "LiteralNormalizer",
    "OffsetMap",
    "PreprocessingPipeline",
    "PreprocessingStepBase",
    "Replacement",
    "RewriteResult",
    "normalize_literals",
    "rewrite_expressions",
]
