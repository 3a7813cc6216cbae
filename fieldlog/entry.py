"""entry.py - The log record and its severity-method surface.

An Entry holds the fields attached with ``with_field``/``with_fields`` and a
reference to the Logger that owns the output stream, level, formatter and
hooks. Entries are cheap to derive and safe to share: deriving copies the
fields into a new Entry, and emitting stamps a private copy, so one base
Entry can be reused from many threads as a common field prefix.

Typical usage::

    from fieldlog import Logger

    log = Logger()
    request_log = log.with_fields({"request_id": "abc123", "user": "bob"})
    request_log.info("request started")
    request_log.with_field("status", 500).error("request failed")

Emission pipeline (``_log``):
    1. Stamp time, level and message on a fresh copy of the entry.
    2. Fire hooks registered for the level.
    3. Render through the Logger's formatter.
    4. Write the bytes to the Logger's output under the Logger's lock.

Failures in steps 2-4 go to the ``fieldlog.entry`` logger and never reach
the caller. The only ways an emission affects control flow are the fatal
methods (which call ``logger.exit_func(1)``) and the panic methods (which
raise PanicError).
"""

import io
import logging
import sys
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from .level import Level

if TYPE_CHECKING:  # pragma: no cover
    from .logger import Logger

Fields = Dict[str, Any]

_diag = logging.getLogger(__name__)


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stderr`` is at emit time."""

    def __init__(self) -> None:
        logging.Handler.__init__(self)

    @property
    def stream(self):
        return sys.stderr


# Diagnostics go straight to stderr. Propagating them would route a failing
# output stream's reports back into a FieldLogHandler on the root logger.
_diag.addHandler(_StderrHandler())
_diag.propagate = False


class PanicError(Exception):
    """Raised by the panic methods after (or instead of) logging.

    Attributes:
        payload (str): The rendered log line if the entry was emitted,
            otherwise the composed message.
    """

    def __init__(self, payload: str) -> None:
        super().__init__(payload)
        self.payload = payload


def sprint(*args: Any) -> str:
    """Join operands, adding a space only between two non-string operands.

    Example:
        >>> sprint("a", "b", 1, 2, "c")
        'ab1 2c'
    """
    parts = []
    prev_is_str = True
    for i, arg in enumerate(args):
        is_str = isinstance(arg, str)
        if i > 0 and not is_str and not prev_is_str:
            parts.append(" ")
        parts.append(str(arg))
        prev_is_str = is_str
    return "".join(parts)


def sprintlnn(*args: Any) -> str:
    """Join operands with single spaces, without a trailing newline.

    Example:
        >>> sprintlnn("a", "b", 3)
        'a b 3'
    """
    return " ".join(str(arg) for arg in args)


def sprintf(fmt: str, *args: Any) -> str:
    """Apply printf-style ``%`` substitution when arguments are given.

    A format string that does not match its arguments never raises; the
    format string is returned followed by the ``repr`` of the arguments.

    Example:
        >>> sprintf("%d items", "three")
        "%d items ('three',)"
    """
    if not args:
        return fmt
    try:
        return fmt % args
    except (TypeError, ValueError, KeyError):
        return f"{fmt} {args!r}"


def _write(out, payload: bytes) -> None:
    if isinstance(out, io.TextIOBase):
        out.write(payload.decode("utf-8"))
    else:
        out.write(payload)
    flush = getattr(out, "flush", None)
    if flush is not None:
        flush()


class Entry:
    """One log statement's fields, plus the stamp of its last emission.

    Attributes:
        logger (Logger): The owning context. Shared, never copied.
        data (dict): Fields set by the user. Treated as read-only.
        time (datetime | None): When the entry was emitted.
        level (Level | None): The level it was emitted at.
        message (str): The composed message it was emitted with.
    """

    __slots__ = ("logger", "data", "time", "level", "message")

    def __init__(self, logger: "Logger", data: Optional[Mapping[str, Any]] = None) -> None:
        self.logger = logger
        self.data: Fields = dict(data) if data else {}
        self.time: Optional[datetime] = None
        self.level: Optional[Level] = None
        self.message = ""

    def __repr__(self) -> str:  # pragma: no cover
        return f"Entry(level={self.level!s}, message={self.message!r}, data={self.data!r})"

    # ---------------------------------------------------------------------- #
    # Field accumulation
    # ---------------------------------------------------------------------- #

    def with_field(self, key: str, value: Any) -> "Entry":
        """Return a new Entry with ``key`` set to ``value``."""
        return self.with_fields({key: value})

    def with_fields(self, fields: Mapping[str, Any]) -> "Entry":
        """Return a new Entry with this entry's fields updated by ``fields``.

        The receiver is left untouched. On key collision ``fields`` wins.
        """
        entry = Entry(self.logger)
        entry.data = {**self.data, **fields}
        return entry

    # ---------------------------------------------------------------------- #
    # Rendering
    # ---------------------------------------------------------------------- #

    def reader(self) -> io.BytesIO:
        """Render the entry with the Logger's formatter into a byte buffer."""
        return io.BytesIO(self.logger.formatter.format(self))

    def string(self) -> str:
        """Render the entry with the Logger's formatter as text."""
        return self.reader().getvalue().decode("utf-8")

    def _log(self, level: Level, msg: str) -> str:
        entry = Entry(self.logger)
        # Emissions share the base fields; neither side mutates them.
        entry.data = self.data
        entry.time = datetime.now().astimezone()
        entry.level = level
        entry.message = msg
        logger = entry.logger

        try:
            logger.hooks.fire(level, entry)
        except Exception as err:
            _diag.error("Failed to fire hook: %s", err)

        serialized = b""
        try:
            serialized = logger.formatter.format(entry)
        except Exception as err:
            _diag.error("Failed to format entry: %s", err)

        with logger.mu:
            try:
                _write(logger.out, serialized)
            except Exception as err:
                _diag.error("Failed to write to log: %s", err)

        return serialized.decode("utf-8", errors="replace")

    def _enabled(self, level: Level) -> bool:
        return self.logger.level >= level

    def log(self, level: Level, *args: Any) -> None:
        """Emit at ``level`` with no fatal or panic escalation."""
        if self._enabled(level):
            self._log(level, sprint(*args))

    # ---------------------------------------------------------------------- #
    # Print family
    # ---------------------------------------------------------------------- #

    def debug(self, *args: Any) -> None:
        if self._enabled(Level.DEBUG):
            self._log(Level.DEBUG, sprint(*args))

    def print(self, *args: Any) -> None:
        if self._enabled(Level.INFO):
            self._log(Level.INFO, sprint(*args))

    def info(self, *args: Any) -> None:
        if self._enabled(Level.INFO):
            self._log(Level.INFO, sprint(*args))

    def warn(self, *args: Any) -> None:
        if self._enabled(Level.WARN):
            self._log(Level.WARN, sprint(*args))

    warning = warn

    def error(self, *args: Any) -> None:
        if self._enabled(Level.ERROR):
            self._log(Level.ERROR, sprint(*args))

    def fatal(self, *args: Any) -> None:
        """Log at FATAL, then terminate through ``logger.exit_func(1)``.

        The exit happens even when FATAL is filtered out by the logger level.
        """
        if self._enabled(Level.FATAL):
            self._log(Level.FATAL, sprint(*args))
        self.logger.exit_func(1)

    def panic(self, *args: Any) -> None:
        """Log at PANIC, then raise PanicError.

        Raises:
            PanicError: Always. Carries the rendered line when the entry was
                emitted, or the bare message when PANIC is filtered out.
        """
        msg = sprint(*args)
        self._panic(msg)

    # ---------------------------------------------------------------------- #
    # Printf family
    # ---------------------------------------------------------------------- #

    def debugf(self, fmt: str, *args: Any) -> None:
        if self._enabled(Level.DEBUG):
            self._log(Level.DEBUG, sprintf(fmt, *args))

    def infof(self, fmt: str, *args: Any) -> None:
        if self._enabled(Level.INFO):
            self._log(Level.INFO, sprintf(fmt, *args))

    def printf(self, fmt: str, *args: Any) -> None:
        if self._enabled(Level.INFO):
            self._log(Level.INFO, sprintf(fmt, *args))

    def warnf(self, fmt: str, *args: Any) -> None:
        if self._enabled(Level.WARN):
            self._log(Level.WARN, sprintf(fmt, *args))

    warningf = warnf

    def errorf(self, fmt: str, *args: Any) -> None:
        if self._enabled(Level.ERROR):
            self._log(Level.ERROR, sprintf(fmt, *args))

    def fatalf(self, fmt: str, *args: Any) -> None:
        if self._enabled(Level.FATAL):
            self._log(Level.FATAL, sprintf(fmt, *args))
        self.logger.exit_func(1)

    def panicf(self, fmt: str, *args: Any) -> None:
        self._panic(sprintf(fmt, *args))

    # ---------------------------------------------------------------------- #
    # Println family
    # ---------------------------------------------------------------------- #

    def debugln(self, *args: Any) -> None:
        if self._enabled(Level.DEBUG):
            self._log(Level.DEBUG, sprintlnn(*args))

    def infoln(self, *args: Any) -> None:
        if self._enabled(Level.INFO):
            self._log(Level.INFO, sprintlnn(*args))

    def println(self, *args: Any) -> None:
        if self._enabled(Level.INFO):
            self._log(Level.INFO, sprintlnn(*args))

    def warnln(self, *args: Any) -> None:
        if self._enabled(Level.WARN):
            self._log(Level.WARN, sprintlnn(*args))

    warningln = warnln

    def errorln(self, *args: Any) -> None:
        if self._enabled(Level.ERROR):
            self._log(Level.ERROR, sprintlnn(*args))

    def fatalln(self, *args: Any) -> None:
        if self._enabled(Level.FATAL):
            self._log(Level.FATAL, sprintlnn(*args))
        self.logger.exit_func(1)

    def panicln(self, *args: Any) -> None:
        self._panic(sprintlnn(*args))

    def _panic(self, msg: str) -> None:
        if self._enabled(Level.PANIC):
            raise PanicError(self._log(Level.PANIC, msg))
        raise PanicError(msg)
