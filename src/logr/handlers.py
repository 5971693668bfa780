from __future__ import annotations

"""
Stdlib Logging Bridge.

Lets code written against the 'logging' module feed logr targets: a
Handler translates each LogRecord into a Message and dispatches it.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from logr.infra.diagnostics import DIAGNOSTIC_LOGGER_NAME, is_our_handler, tag_handler
from logr.levels import LogLevel
from logr.message import Message, MetaInfo
from logr.service import LogrService


class LogrHandler(logging.Handler):
    """
    logging.Handler dispatching records to a LogrService.

    Records emitted by logr's own diagnostic loggers are dropped so that a
    failing target can never feed back into itself.
    """

    def __init__(self, service: LogrService, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.service = service

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == DIAGNOSTIC_LOGGER_NAME or record.name.startswith(DIAGNOSTIC_LOGGER_NAME + "."):
            return
        try:
            message = Message(
                level=LogLevel.from_logging(record.levelno),
                text=self.format(record),
                meta=MetaInfo(file=record.pathname, function=record.funcName or "", line=record.lineno),
                created=datetime.fromtimestamp(record.created, tz=timezone.utc),
            )
            self.service.dispatch(message)
        except Exception:
            self.handleError(record)


def attach_to_logging(
        service: LogrService,
        logger_name: Optional[str] = None,
        level: int = logging.DEBUG,
        *,
        force: bool = False,
) -> LogrHandler:
    """
    Route a stdlib logger (the root logger by default) into a LogrService.

    Idempotent per logger: an existing LogrHandler is reused unless force=True.

    Returns:
        LogrHandler: The attached handler.
    """
    target = logging.getLogger(logger_name)

    for h in list(target.handlers):
        if isinstance(h, LogrHandler) and is_our_handler(h):
            if not force:
                return h
            target.removeHandler(h)
            h.close()

    handler = LogrHandler(service, level=level)
    tag_handler(handler)
    target.addHandler(handler)
    if target.level == logging.NOTSET or target.level > level:
        target.setLevel(level)
    return handler
