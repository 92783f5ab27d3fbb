"""
Safe regex utilities with timeout protection.

Document-wide scans run over arbitrary pasted text, so every call goes
through the regex module with a timeout. A timeout is logged and treated
as "no match" rather than propagated.
"""

import logging
from typing import Any, Callable, Optional, Union

import regex  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 1.0

# regex.Match instances; typed loosely since the module ships no stubs
Match = Any


def _log_timeout(operation: str, pattern: str, timeout: float) -> None:
    logger.warning(
        "Regex %s timed out after %ss on pattern: %s", operation, timeout, pattern[:50]
    )


def safe_regex_search(
    pattern: str,
    string: str,
    flags: int = 0,
    timeout: float = DEFAULT_TIMEOUT,
    pos: int = 0,
) -> Optional[Match]:
    """
    Perform regex search with timeout protection.

    Args:
        pattern: Regular expression pattern
        string: Input string to search
        flags: regex module flags
        timeout: Timeout in seconds
        pos: Index to start searching from

    Returns:
        Match object if found, None if no match or timeout
    """
    try:
        return regex.compile(pattern, flags).search(string, pos, timeout=timeout)
    except TimeoutError:
        _log_timeout("search", pattern, timeout)
        return None


def safe_regex_match(
    pattern: str, string: str, flags: int = 0, timeout: float = DEFAULT_TIMEOUT
) -> Optional[Match]:
    """Perform an anchored regex match with timeout protection."""
    try:
        return regex.compile(pattern, flags).match(string, timeout=timeout)
    except TimeoutError:
        _log_timeout("match", pattern, timeout)
        return None


def safe_regex_sub(
    pattern: str,
    repl: Union[str, Callable[[Match], str]],
    string: str,
    flags: int = 0,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """
    Perform regex substitution with timeout protection.

    Returns:
        String with substitutions applied, or the original string on timeout
    """
    try:
        return regex.compile(pattern, flags).sub(repl, string, timeout=timeout)
    except TimeoutError:
        _log_timeout("sub", pattern, timeout)
        return string
