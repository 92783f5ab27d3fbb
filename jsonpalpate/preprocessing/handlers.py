"""
Expression rewrite step.

This module contains the scanner that turns JavaScript constructs which have
no JSON spelling into JSON-legal tokens. Functions, regex literals, template
literals, `new` expressions and bare identifier chains become placeholder
strings of the form "[JS: <source>]"; radix, BigInt and dotted number
variants become decimal numbers.
"""

from typing import Optional

from ..core.constants import (
    JSON5_LITERALS,
    QUOTE_CHARS,
    RADIX_DIGITS,
    RADIX_PREFIXES,
)
from ..utils.config import ParseConfig
from .base import PreprocessingStepBase, RewriteBuffer, RewriteResult
from .string_utils import (
    is_comment_start,
    is_identifier_char,
    is_identifier_start,
    make_placeholder,
    read_identifier_end,
    skip_balanced,
    skip_comment,
    skip_regex,
    skip_string,
    skip_template,
    skip_whitespace,
)


class _ExpressionScanner:
    """
    Single left-to-right pass over the text.

    The scanner keeps a stack of open containers and an expect_value flag.
    A comma inside an array (or at the top level) is followed by a value,
    a comma inside an object by a key, so constructs are only rewritten where
    a value can start.
    """

    def __init__(self, text: str):
        self.text = text
        self.length = len(text)
        self.buffer = RewriteBuffer(text)
        self.pos = 0
        self.stack: list[str] = []
        self.expect_value = True

    def run(self) -> RewriteResult:
        text = self.text
        while self.pos < self.length:
            char = text[self.pos]

            if char in QUOTE_CHARS:
                self.pos = skip_string(text, self.pos)
                self.expect_value = False
                continue
            if is_comment_start(text, self.pos):
                self.pos = skip_comment(text, self.pos)
                continue
            if char.isspace():
                self.pos += 1
                continue

            if char in "{[":
                self.stack.append(char)
                self.expect_value = char == "["
                self.pos += 1
                continue
            if char in "}]":
                if self.stack:
                    self.stack.pop()
                self.expect_value = False
                self.pos += 1
                continue
            if char == ":":
                self.expect_value = True
                self.pos += 1
                continue
            if char == ",":
                self.expect_value = not self.stack or self.stack[-1] == "["
                self.pos += 1
                continue

            if self.expect_value:
                if not self._scan_value(char):
                    self.pos += 1
                    self.expect_value = False
                continue

            # Key position: keep keys and stray templates whole
            if char == "`":
                self.pos = skip_template(text, self.pos)
            elif is_identifier_start(char):
                self.pos = read_identifier_end(text, self.pos)
            else:
                self.pos += 1

        return self.buffer.result()

    def _scan_value(self, char: str) -> bool:
        """Handle the construct starting at pos. Returns False if none matched."""
        text = self.text
        start = self.pos

        if char == "`":
            self._emit_placeholder(start, skip_template(text, start))
            return True

        if char == "/":
            end = skip_regex(text, start)
            if end is None:
                return False
            self._emit_placeholder(start, end)
            return True

        if char == "(":
            end = self._arrow_end(start)
            if end is None:
                # Grouping paren; the value still follows
                self.pos += 1
                return True
            self._emit_placeholder(start, end)
            return True

        if char.isdigit() or (char == "." and self._digit_at(start + 1)):
            self._rewrite_number(start)
            return True

        if char in "+-":
            if self._digit_at(start + 1) or (
                text.startswith(".", start + 1) and self._digit_at(start + 2)
            ):
                self._rewrite_number(start + 1)
            else:
                self.pos += 1
            return True

        if is_identifier_start(char):
            self._rewrite_identifier(start)
            return True

        return False

    def _digit_at(self, index: int) -> bool:
        return index < self.length and self.text[index].isdigit()

    def _emit_placeholder(self, start: int, end: int) -> None:
        self.buffer.replace(start, end, make_placeholder(self.text[start:end]))
        self.pos = end
        self.expect_value = False

    def _is_bigint_suffix(self, index: int) -> bool:
        return (
            index < self.length
            and self.text[index] == "n"
            and not (index + 1 < self.length and is_identifier_char(self.text[index + 1]))
        )

    def _rewrite_number(self, start: int) -> None:
        text = self.text
        self.expect_value = False

        if (
            text[start] == "0"
            and start + 1 < self.length
            and text[start + 1].lower() in RADIX_PREFIXES
        ):
            base = RADIX_PREFIXES[text[start + 1].lower()]
            digits_start = start + 2
            j = digits_start
            while j < self.length and text[j] in RADIX_DIGITS[base]:
                j += 1
            if j == digits_start:
                self.pos = j
                return
            bigint = self._is_bigint_suffix(j)
            end = j + 1 if bigint else j
            if base != 16 or bigint:
                self.buffer.replace(start, end, str(int(text[digits_start:j], base)))
            self.pos = end
            return

        j = start
        while self._digit_at(j):
            j += 1
        integer = text[start:j] or "0"
        fraction = None
        if j < self.length and text[j] == ".":
            k = j + 1
            while self._digit_at(k):
                k += 1
            fraction = text[j + 1 : k] or "0"
            j = k
        exponent = ""
        if j < self.length and text[j] in "eE":
            k = j + 1
            if k < self.length and text[k] in "+-":
                k += 1
            if self._digit_at(k):
                while self._digit_at(k):
                    k += 1
                exponent = text[j:k]
                j = k

        end = j
        if fraction is None and not exponent and self._is_bigint_suffix(j):
            end = j + 1

        normalized = integer
        if fraction is not None:
            normalized += "." + fraction
        normalized += exponent
        self.buffer.replace(start, end, normalized)
        self.pos = end

    def _rewrite_identifier(self, start: int) -> None:
        text = self.text
        end = read_identifier_end(text, start)
        word = text[start:end]
        span_end: Optional[int] = None

        if word == "function":
            span_end = self._function_end(end)
        elif word == "new":
            span_end = self._new_end(end)
        elif word == "async":
            j = skip_whitespace(text, end)
            if text.startswith("function", j):
                span_end = self._function_end(j + len("function"))
            else:
                span_end = self._arrow_end(j)

        if span_end is None:
            if word in JSON5_LITERALS:
                self.pos = end
                self.expect_value = False
                return
            span_end = self._arrow_end(start)
        if span_end is None:
            span_end = self._chain_end(end)

        self._emit_placeholder(start, span_end)

    def _function_end(self, j: int) -> Optional[int]:
        """End of `function name?(...) {...}` given the index after the keyword."""
        text = self.text
        j = skip_whitespace(text, j)
        if j < self.length and is_identifier_start(text[j]):
            j = skip_whitespace(text, read_identifier_end(text, j))
        if j >= self.length or text[j] != "(":
            return None
        j = skip_whitespace(text, skip_balanced(text, j, "(", ")"))
        if j >= self.length or text[j] != "{":
            return None
        return skip_balanced(text, j, "{", "}")

    def _new_end(self, j: int) -> Optional[int]:
        """End of `new Ctor.path(args?)` given the index after the keyword."""
        text = self.text
        if j >= self.length or not text[j].isspace():
            return None
        j = skip_whitespace(text, j)
        if j >= self.length or not is_identifier_start(text[j]):
            return None
        j = read_identifier_end(text, j)
        while (
            j + 1 < self.length
            and text[j] == "."
            and is_identifier_start(text[j + 1])
        ):
            j = read_identifier_end(text, j + 1)
        k = skip_whitespace(text, j)
        if k < self.length and text[k] == "(":
            return skip_balanced(text, k, "(", ")")
        return j

    def _arrow_end(self, j: int) -> Optional[int]:
        """End of an arrow function whose parameters start at j, if there is one."""
        text = self.text
        if j < self.length and text[j] == "(":
            k = skip_balanced(text, j, "(", ")")
        elif j < self.length and is_identifier_start(text[j]):
            k = read_identifier_end(text, j)
        else:
            return None
        k = skip_whitespace(text, k)
        if not text.startswith("=>", k):
            return None
        return self._arrow_body_end(k + 2)

    def _arrow_body_end(self, j: int) -> int:
        """A braced block, or an expression up to the next top-level , } ] or )."""
        text = self.text
        j = skip_whitespace(text, j)
        if j < self.length and text[j] == "{":
            return skip_balanced(text, j, "{", "}")

        depth = 0
        i = j
        end = j
        while i < self.length:
            char = text[i]
            if char in QUOTE_CHARS:
                i = end = skip_string(text, i)
                continue
            if char == "`":
                i = end = skip_template(text, i)
                continue
            if is_comment_start(text, i):
                break
            if char in "([{":
                depth += 1
            elif char in ")]}":
                if depth == 0:
                    break
                depth -= 1
            elif char == "," and depth == 0:
                break
            i += 1
            if not char.isspace():
                end = i
        return end

    def _chain_end(self, j: int) -> int:
        """Extend an identifier across .name, ?.name, [...] and (...)."""
        text = self.text
        while True:
            k = skip_whitespace(text, j)
            if k >= self.length:
                return j
            char = text[k]
            if char == "." and k + 1 < self.length and is_identifier_start(text[k + 1]):
                j = read_identifier_end(text, k + 1)
            elif (
                text.startswith("?.", k)
                and k + 2 < self.length
                and is_identifier_start(text[k + 2])
            ):
                j = read_identifier_end(text, k + 2)
            elif char == "[":
                j = skip_balanced(text, k, "[", "]")
            elif char == "(":
                j = skip_balanced(text, k, "(", ")")
            else:
                return j


class ExpressionRewriter(PreprocessingStepBase):
    """Rewrites JavaScript value expressions into placeholders and decimal numbers."""

    name = "expressions"

    def should_apply(self, config: ParseConfig) -> bool:
        """Apply if JavaScript expression rewriting is enabled."""
        return config.allow_expressions

    def rewrite(self, text: str) -> RewriteResult:
        return _ExpressionScanner(text).run()


def rewrite_expressions(text: str) -> str:
    """Rewrite JavaScript constructs in value position."""
    return ExpressionRewriter().process(text)
