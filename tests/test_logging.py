"""Tests for comment_link.logging (level and format from LoggingConfig)."""

import logging

import pytest

from comment_link.config import LoggingConfig
from comment_link.logging import DEFAULT_FORMAT, DEFAULT_LEVEL, LEVELS, CommentLinkLogging, _resolve_level


def test_default_level_is_supported() -> None:
    assert DEFAULT_LEVEL in LEVELS
    assert set(LEVELS) == {"DEBUG", "INFO", "WARNING", "ERROR"}


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("DEBUG", logging.DEBUG),
        ("warning", logging.WARNING),
        ("  error\t", logging.ERROR),
        ("TRACE", logging.INFO),
        ("", logging.INFO),
    ],
)
def test_resolve_level(name: str, expected: int) -> None:
    """Names are normalized; unknown names fall back to INFO."""
    assert _resolve_level(name) == expected


def test_setup_applies_level_and_format() -> None:
    custom = "%(name)s | %(message)s"
    CommentLinkLogging(LoggingConfig(level="DEBUG", format=custom)).setup()
    assert logging.root.level == logging.DEBUG
    assert logging.root.handlers[0].formatter._fmt == custom


def test_empty_format_uses_default() -> None:
    CommentLinkLogging(LoggingConfig(level="INFO", format="")).setup()
    assert logging.root.handlers[0].formatter._fmt == DEFAULT_FORMAT


def test_package_loggers_inherit_root_level() -> None:
    """Module loggers under comment_link follow the configured root level."""
    CommentLinkLogging(LoggingConfig(level="ERROR")).setup()
    log = logging.getLogger("comment_link.branch")
    assert log.getEffectiveLevel() == logging.ERROR
    assert not log.isEnabledFor(logging.WARNING)
