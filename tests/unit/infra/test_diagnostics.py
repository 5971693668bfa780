from __future__ import annotations

"""
Unit tests for the diagnostic logger setup.
"""

import logging

import pytest

from logr.infra.diagnostics import (
    DIAGNOSTIC_LOGGER_NAME,
    configure_diagnostics,
    is_our_handler,
    parse_level,
    remove_our_handlers,
)


@pytest.fixture(autouse=True)
def reset_diagnostics():
    diag = logging.getLogger(DIAGNOSTIC_LOGGER_NAME)
    remove_our_handlers(diag)
    yield
    remove_our_handlers(diag)
    diag.setLevel(logging.NOTSET)


def test_configure_is_idempotent() -> None:
    diag = configure_diagnostics("DEBUG")
    count = len(diag.handlers)

    configure_diagnostics("DEBUG")

    assert len(diag.handlers) == count
    assert diag.level == logging.DEBUG


def test_force_replaces_handlers() -> None:
    configure_diagnostics("DEBUG")
    diag = configure_diagnostics("ERROR", force=True)

    ours = [h for h in diag.handlers if is_our_handler(h)]
    assert len(ours) == 1
    assert diag.level == logging.ERROR


@pytest.mark.parametrize("raw,expected", [
    ("debug", logging.DEBUG),
    ("WARN", logging.WARNING),
    ("", logging.INFO),
    ("nonsense", logging.INFO),
])
def test_parse_level(raw: str, expected: int) -> None:
    assert parse_level(raw) == expected
