"""
Configuration for jsonpalpate parsing.

This module defines which stages of the parse ladder run, how canonical
text is rendered, and the performance thresholds used for logging.
"""

import logging
from dataclasses import dataclass
from typing import Optional


@dataclass
class StageSettings:
    """Which parse stages may run after strict JSON fails."""
    relaxed: bool = True
    expressions: bool = True
    yaml: bool = True


@dataclass
class OutputSettings:
    """Canonical text rendering."""
    indent: Optional[int] = 2
    ensure_ascii: bool = False


@dataclass
class PerformanceSettings:
    """Soft limits. Exceeding them degrades, never aborts."""
    large_input_threshold: int = 512 * 1024
    regex_timeout: float = 1.0


@dataclass
class ParseConfig:
    """Configuration options for jsonpalpate parsing."""

    stages: Optional[StageSettings] = None
    output: Optional[OutputSettings] = None
    performance: Optional[PerformanceSettings] = None
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        if self.stages is None:
            self.stages = StageSettings()
        if self.output is None:
            self.output = OutputSettings()
        if self.performance is None:
            self.performance = PerformanceSettings()

        if self.performance.large_input_threshold <= 0:
            raise ValueError("large_input_threshold must be positive")
        if self.performance.regex_timeout <= 0:
            raise ValueError("regex_timeout must be positive")

    @property
    def allow_relaxed(self) -> bool:
        """Whether the permissive-grammar stages run."""
        assert self.stages is not None
        return self.stages.relaxed

    @property
    def allow_expressions(self) -> bool:
        """Whether JavaScript expressions are rewritten. Needs allow_relaxed."""
        assert self.stages is not None
        return self.stages.relaxed and self.stages.expressions

    @property
    def allow_yaml(self) -> bool:
        """Whether the YAML fallback runs."""
        assert self.stages is not None
        return self.stages.yaml

    @property
    def indent(self) -> Optional[int]:
        """Indentation of canonical text."""
        assert self.output is not None
        return self.output.indent

    @property
    def ensure_ascii(self) -> bool:
        """Whether canonical text escapes non-ASCII characters."""
        assert self.output is not None
        return self.output.ensure_ascii

    @property
    def large_input_threshold(self) -> int:
        """Input length above which a degraded-performance warning is logged."""
        assert self.performance is not None
        return self.performance.large_input_threshold

    @property
    def regex_timeout(self) -> float:
        """Per-call timeout in seconds for document-wide regex scans."""
        assert self.performance is not None
        return self.performance.regex_timeout

    def get_logger(self, name: str) -> logging.Logger:
        """Return the configured logger, or the module logger for name."""
        return self.logger or logging.getLogger(name)

    @classmethod
    def strict(cls) -> "ParseConfig":
        """Only accept strict JSON."""
        return cls(
            stages=StageSettings(relaxed=False, expressions=False, yaml=False)
        )

    @classmethod
    def relaxed(cls) -> "ParseConfig":
        """Strict JSON plus the permissive grammar, without the YAML fallback."""
        return cls(stages=StageSettings(relaxed=True, expressions=True, yaml=False))

    @classmethod
    def default(cls) -> "ParseConfig":
        """All stages enabled."""
        return cls()
