"""
The parse ladder.

parse() tries strict JSON, then the permissive json5 grammar after literal
normalization, then json5 again after expression rewriting, then YAML. The
first stage that accepts the input wins. When every stage fails, the error
normalizer picks the most plausible failure point and the path resolver
names the JSONPath at that point. Errors reported by the YAML stage on
YAML-looking input carry no JSONPath.
"""

import json
from typing import Any, Optional, TextIO, Union

import json5
import yaml

from ..diagnostics.features import is_likely_yaml
from ..preprocessing.pipeline import PreprocessingPipeline
from ..utils.config import ParseConfig
from .data_type_processor import normalize_value
from .error_handling import (
    ErrorCandidate,
    ErrorNormalizer,
    candidate_from_json5_error,
    candidate_from_json_error,
    candidate_from_yaml_error,
)
from .exceptions import JSONDecodeError
from .path_resolver import json_path_at_offset
from .results import JSONValue, ParseOutcome
from .strict import is_strict_json, strict_loads

__all__ = ["is_parseable", "is_strict_json", "load", "loads", "parse"]

_LITERAL_PIPELINE = PreprocessingPipeline.create_literal_pipeline()
_EXPRESSION_PIPELINE = PreprocessingPipeline.create_expression_pipeline()

RECURSIVE_YAML_MESSAGE = "YAML document contains a recursive alias"


class _Ladder:
    """State for one parse() call."""

    def __init__(self, text: str, config: ParseConfig):
        self.text = text
        self.config = config
        self.logger = config.get_logger(__name__)
        self.strict_error: Optional[ErrorCandidate] = None
        self.relaxed_error: Optional[ErrorCandidate] = None
        self.yaml_error: Optional[ErrorCandidate] = None

    def run(self) -> ParseOutcome:
        if len(self.text) > self.config.large_input_threshold:
            self.logger.warning(
                "Input of %d characters exceeds %d; parsing may be slow",
                len(self.text),
                self.config.large_input_threshold,
            )

        if not self.text.strip():
            return ParseOutcome.succeeded(None, "")

        try:
            value = strict_loads(self.text)
        except (ValueError, RecursionError) as e:
            self.strict_error = candidate_from_json_error(e, self.text)
            self.logger.debug("Strict JSON failed: %s", self.strict_error.message)
        else:
            return self._success(value)

        if self.config.allow_relaxed:
            outcome = self._try_permissive(_LITERAL_PIPELINE, "literal")
            if outcome is not None:
                return outcome
            if self.config.allow_expressions:
                outcome = self._try_permissive(_EXPRESSION_PIPELINE, "expression")
                if outcome is not None:
                    return outcome

        if self.config.allow_yaml:
            outcome = self._try_yaml()
            if outcome is not None:
                return outcome

        return self._failure()

    def _try_permissive(
        self, pipeline: PreprocessingPipeline, stage: str
    ) -> Optional[ParseOutcome]:
        rewritten = pipeline.rewrite(self.text, self.config)
        try:
            value = json5.loads(rewritten.text)
        except (ValueError, RecursionError) as e:
            self.relaxed_error = candidate_from_json5_error(
                e, rewritten.text, rewritten.offset_map, self.text
            )
            self.logger.debug(
                "Permissive parse after %s rewriting failed: %s",
                stage,
                self.relaxed_error.message,
            )
            return None
        self.logger.debug("Permissive parse after %s rewriting succeeded", stage)
        return self._success(value, was_relaxed=True)

    def _try_yaml(self) -> Optional[ParseOutcome]:
        try:
            value = yaml.safe_load(self.text)
        except (yaml.YAMLError, ValueError, RecursionError) as e:
            self.yaml_error = candidate_from_yaml_error(e, self.text)
            self.logger.debug("YAML parse failed: %s", self.yaml_error.message)
            return None
        if value is None:
            self.logger.debug("YAML parse produced an empty document")
            return None
        try:
            outcome = self._success(value, was_yaml=True)
        except (RecursionError, ValueError):
            # Anchors let a YAML node contain itself
            self.yaml_error = ErrorCandidate(RECURSIVE_YAML_MESSAGE, 0, "yaml")
            self.logger.debug("YAML parse produced a recursive structure")
            return None
        self.logger.debug("YAML parse succeeded")
        return outcome

    def _success(
        self, value: Any, was_relaxed: bool = False, was_yaml: bool = False
    ) -> ParseOutcome:
        normalized = normalize_value(value)
        canonical_text = json.dumps(
            normalized,
            indent=self.config.indent,
            ensure_ascii=self.config.ensure_ascii,
        )
        threshold = self.config.large_input_threshold
        if was_yaml and len(canonical_text) > threshold >= len(self.text):
            self.logger.warning(
                "YAML aliases expanded %d characters of input to %d characters of JSON",
                len(self.text),
                len(canonical_text),
            )
        return ParseOutcome.succeeded(
            normalized, canonical_text, was_relaxed=was_relaxed, was_yaml=was_yaml
        )

    def _failure(self) -> ParseOutcome:
        looks_like_yaml = is_likely_yaml(self.text, timeout=self.config.regex_timeout)
        if self.yaml_error is not None and (
            self.relaxed_error is None or looks_like_yaml
        ):
            last = self.yaml_error
        else:
            last = self.relaxed_error
        normalizer = ErrorNormalizer(self.text, self.logger)
        error = normalizer.normalize(self.strict_error, last)

        # JSONPath replay only understands bracketed JSON-like text
        chosen = normalizer.choose(self.strict_error, last)
        if looks_like_yaml and chosen.source == "yaml":
            return ParseOutcome.failed(error)
        return ParseOutcome.failed(
            error.with_json_path(json_path_at_offset(self.text, error.offset))
        )


def parse(text: str, config: Optional[ParseConfig] = None) -> ParseOutcome:
    """
    Parse JSON, relaxed JSON, JavaScript object literals or YAML.

    Never raises on malformed input: failures come back as a ParseOutcome
    whose error carries the line, column, offset and JSONPath of the most
    likely failure point. The JSONPath is None when the failure came
    from the YAML stage on YAML-looking text.

    Args:
        text: The text to parse
        config: Optional ParseConfig choosing stages and output formatting

    Returns:
        ParseOutcome with either the value and its canonical JSON text,
        or a ParseError
    """
    if config is None:
        config = ParseConfig()
    return _Ladder(text, config).run()


def is_parseable(text: str, config: Optional[ParseConfig] = None) -> bool:
    """Check if any stage of the ladder accepts text."""
    return parse(text, config).success


def loads(
    s: Union[str, bytes, bytearray],
    *,
    strict: bool = False,
    config: Optional[ParseConfig] = None,
) -> JSONValue:
    """
    Deserialize text to a Python object (drop-in replacement for json.loads).

    Args:
        s: Text to parse (str, bytes, or bytearray)
        strict: If True, only accept strict JSON
        config: ParseConfig object for advanced control; overrides strict

    Returns:
        Parsed Python data structure

    Raises:
        JSONDecodeError: If no stage accepts the input
    """
    if isinstance(s, (bytes, bytearray)):
        s = s.decode("utf-8")

    if config is None:
        config = ParseConfig.strict() if strict else ParseConfig()

    outcome = parse(s, config)
    if not outcome.success:
        assert outcome.error is not None
        raise JSONDecodeError(
            outcome.error.message, s, outcome.error.offset, outcome.error.json_path
        )
    return outcome.value


def load(
    fp: TextIO,
    *,
    strict: bool = False,
    config: Optional[ParseConfig] = None,
) -> JSONValue:
    """
    Deserialize a file to a Python object (drop-in replacement for json.load).

    Same as loads() but reads from a file-like object.
    """
    return loads(fp.read(), strict=strict, config=config)
