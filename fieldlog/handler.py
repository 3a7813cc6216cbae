"""handler.py - Bridge from the standard ``logging`` module into fieldlog.

FieldLogHandler lets code that already logs through ``logging.getLogger()``
share a fieldlog Logger's output stream, formatter and hooks. Each stdlib
record becomes one fieldlog entry carrying the stdlib logger name and any
fields passed through ``extra``.

Typical usage::

    import logging
    from fieldlog import FieldLogHandler, Logger

    log = Logger()
    logging.getLogger().addHandler(FieldLogHandler(log))

    logging.getLogger("billing").warning(
        "card declined", extra={"fields": {"order_id": 17}}
    )
    # time="..." level=warning msg="card declined" logger="billing" order_id=17

Level mapping:
    ``DEBUG`` -> debug, ``INFO`` -> info, ``WARNING`` -> warning,
    ``ERROR`` -> error, ``CRITICAL`` and above -> fatal. CRITICAL records are
    rendered at fatal level but never terminate the process.
"""

import logging
from typing import Any, Dict

from .level import Level
from .logger import Logger

_OWN_NAMESPACE = __name__.split(".")[0]


def level_for(levelno: int) -> Level:
    """Map a stdlib level number to the closest fieldlog Level."""
    if levelno >= logging.CRITICAL:
        return Level.FATAL
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARN
    if levelno >= logging.INFO:
        return Level.INFO
    return Level.DEBUG


class FieldLogHandler(logging.Handler):
    """A logging.Handler that re-emits records through a fieldlog Logger.

    Thread-safety:
        ``logging.Handler.handle`` holds the handler lock around ``emit()``,
        and the fieldlog Logger serializes its own writes, so the handler
        can be shared by every thread in the process.

    Attributes:
        logger (Logger): Destination for forwarded records.
    """

    def __init__(self, logger: Logger, level: int = logging.NOTSET) -> None:
        super().__init__(level=level)
        self.logger = logger

    def emit(self, record: logging.LogRecord) -> None:
        """Forward one stdlib record.

        Records from fieldlog's own diagnostic loggers are dropped so that a
        failing output stream cannot feed its error reports back into itself.
        """
        if record.name == _OWN_NAMESPACE or record.name.startswith(_OWN_NAMESPACE + "."):
            return
        try:
            entry = self.logger.with_fields(self._fields_for(record))
            entry.log(level_for(record.levelno), record.getMessage())
        except Exception:
            self.handleError(record)

    def _fields_for(self, record: logging.LogRecord) -> Dict[str, Any]:
        fields: Dict[str, Any] = {"logger": record.name}
        extra = getattr(record, "fields", None)
        if isinstance(extra, dict):
            fields.update(extra)
        if record.exc_info and record.exc_info[1] is not None:
            fields["error"] = f"{type(record.exc_info[1]).__name__}: {record.exc_info[1]}"
        return fields
