from __future__ import annotations

"""
Library Diagnostics.

The logr package reports its own trouble (failed filesystem calls, crashing
targets) through the stdlib 'logging' module under the 'logr' namespace,
never through a logr target. This module installs and identifies the
handlers the package manages on stdlib loggers.
"""

import logging
import sys
from typing import Dict

DIAGNOSTIC_LOGGER_NAME = "logr"

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_logr_handler"

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_diagnostics(
        level: str = "WARNING",
        *,
        fmt: str = "%(levelname)s | %(name)s | %(message)s",
        force: bool = False,
) -> logging.Logger:
    """
    Attach a stderr handler to the 'logr' diagnostic logger.

    Idempotent: a second call is a no-op unless force=True, in which case
    previously installed handlers are replaced.

    Args:
        level: Minimum severity name to show.
        fmt: Formatter pattern.
        force: Re-install even if already configured.

    Returns:
        logging.Logger: The diagnostic logger.
    """
    diag = logging.getLogger(DIAGNOSTIC_LOGGER_NAME)

    already_configured = any(
        is_our_handler(h) and isinstance(h, logging.StreamHandler) for h in diag.handlers
    )
    if already_configured and not force:
        return diag

    remove_our_handlers(diag)

    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(logging.Formatter(fmt))
    tag_handler(sh)
    diag.addHandler(sh)
    diag.setLevel(parse_level(level))
    return diag


def parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def tag_handler(handler: logging.Handler) -> None:
    """Mark a handler as managed by this package."""
    setattr(handler, _HANDLER_TAG_ATTR, True)


def is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def remove_our_handlers(target: logging.Logger) -> None:
    """Detach and close every handler tagged by this package."""
    for h in list(target.handlers):
        if is_our_handler(h):
            target.removeHandler(h)
            h.close()
