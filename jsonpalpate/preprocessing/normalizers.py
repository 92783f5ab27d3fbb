"""
Literal normalization rewrite step.

Rewrites bare Python/JavaScript sentinels (undefined, None, True, False) into
their JSON spellings. The scan is a single pass that copies strings, template
literals, comments and regex literals in value position verbatim, so
sentinel words inside them are never touched.
"""

from ..core.constants import (
    LEFT_VALUE_BOUNDARY,
    LITERAL_REPLACEMENTS,
    QUOTE_CHARS,
    RIGHT_VALUE_BOUNDARY,
)
from ..utils.config import ParseConfig
from .base import PreprocessingStepBase, RewriteBuffer, RewriteResult
from .string_utils import (
    is_comment_start,
    is_identifier_start,
    read_identifier_end,
    skip_comment,
    skip_regex,
    skip_string,
    skip_template,
)


def _left_boundary(text: str, start: int) -> bool:
    if start == 0:
        return True
    prev_char = text[start - 1]
    return prev_char.isspace() or prev_char in LEFT_VALUE_BOUNDARY


def _right_boundary(text: str, end: int) -> bool:
    if end == len(text):
        return True
    next_char = text[end]
    return next_char.isspace() or next_char in RIGHT_VALUE_BOUNDARY


class LiteralNormalizer(PreprocessingStepBase):
    """Maps undefined/None to null and True/False to true/false in value position."""

    name = "literals"

    def should_apply(self, config: ParseConfig) -> bool:
        """Apply whenever the permissive grammar is allowed."""
        return config.allow_relaxed

    def rewrite(self, text: str) -> RewriteResult:
        buffer = RewriteBuffer(text)
        i = 0
        # Last significant character, to tell a regex literal from division
        prev_char = ""
        while i < len(text):
            char = text[i]

            if char in QUOTE_CHARS:
                i = skip_string(text, i)
                prev_char = char
                continue
            if char == "`":
                i = skip_template(text, i)
                prev_char = char
                continue
            if is_comment_start(text, i):
                i = skip_comment(text, i)
                continue
            if char == "/" and (not prev_char or prev_char in LEFT_VALUE_BOUNDARY):
                end = skip_regex(text, i)
                if end is not None:
                    i = end
                    prev_char = char
                    continue
            if not char.isspace():
                prev_char = char

            if is_identifier_start(char):
                end = read_identifier_end(text, i)
                word = text[i:end]
                replacement = LITERAL_REPLACEMENTS.get(word)
                if (
                    replacement is not None
                    and _left_boundary(text, i)
                    and _right_boundary(text, end)
                ):
                    buffer.replace(i, end, replacement)
                i = end
                continue

            i += 1

        return buffer.result()


def normalize_literals(text: str) -> str:
    """Rewrite sentinel tokens outside strings and comments."""
    return LiteralNormalizer().process(text)
