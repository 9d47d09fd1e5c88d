from __future__ import annotations

import logging

import pytest

from realm_credentials.infrastructure.logging import configure_logging, resolve_log_level


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        ("", logging.INFO),
        ("not-a-level", logging.INFO),
    ],
)
def test_resolve_log_level(level: str, expected: int) -> None:
    assert resolve_log_level(level) == expected


def test_configure_logging_sets_package_logger_level() -> None:
    package_logger = logging.getLogger("realm_credentials")
    previous = package_logger.level
    try:
        assert configure_logging(level="debug") == logging.DEBUG
        assert package_logger.level == logging.DEBUG
    finally:
        package_logger.setLevel(previous)
