"""formatter.py - Rendering entries into bytes.

This module defines the Formatter contract consumed by Entry and provides
TextFormatter, which renders an entry in one of two modes:

    colorized   ANSI-coloured, column-aligned text for an interactive terminal.
    plain       ``key=value`` pairs for files, pipes and log shippers.

Plain output format::

    time="2024-01-01T00:00:00Z" level=info msg="hello" user="bob"

``time``, ``level`` and ``msg`` always come first and in that order. They are
read back out of the working field map, so a user field with one of those
names is renamed to ``fields.<name>`` before the structural values are
written.
"""

import json
import time
from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Mapping

from .caller import caller_location

if TYPE_CHECKING:  # pragma: no cover
    from .entry import Entry

RED = 31
YELLOW = 33
BLUE = 34

RESERVED_KEYS = ("time", "msg", "level")

MESSAGE_WIDTH = 44

_base_timestamp = time.monotonic()


def mini_ts() -> int:
    """Return whole seconds elapsed since fieldlog was imported."""
    return int(time.monotonic() - _base_timestamp)


def rfc3339(moment: datetime) -> str:
    """Render ``moment`` as RFC 3339, using ``Z`` for UTC."""
    return moment.isoformat().replace("+00:00", "Z")


def is_terminal(stream) -> bool:
    """Return True if ``stream`` is attached to an interactive terminal."""
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # Closed file objects raise instead of answering.
        return False


def prefix_field_clashes(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``data`` with reserved keys renamed to ``fields.<key>``.

    Args:
        data: User-supplied fields. Not modified.

    Returns:
        A new dict where ``time``, ``msg`` and ``level`` (if present) appear
        as ``fields.time``, ``fields.msg`` and ``fields.level``.

    Example:
        >>> prefix_field_clashes({"time": "yesterday", "user": "bob"})
        {'user': 'bob', 'fields.time': 'yesterday'}
    """
    resolved = dict(data)
    for key in RESERVED_KEYS:
        if key in resolved:
            resolved["fields." + key] = resolved.pop(key)
    return resolved


def format_value(value: Any, quote: bool = True) -> str:
    """Render one field value.

    Strings are quoted with JSON escaping when ``quote`` is set, booleans are
    lowercase, None is ``<nil>`` and everything else uses ``str()``.
    """
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False) if quote else value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    return str(value)


class Formatter(ABC):
    """Abstract base class for entry renderers.

    Implementations turn one stamped Entry into the exact bytes written to
    the Logger's output stream, including the trailing newline. They may
    raise; Entry reports the failure to the diagnostic stream and carries on.
    """

    @abstractmethod
    def format(self, entry: "Entry") -> bytes:
        """Render ``entry`` to bytes."""


class TextFormatter(Formatter):
    """Human-readable formatter with optional ANSI colours and call sites.

    Attributes:
        force_colors (bool): Colourize even when the output is not a TTY.
        disable_colors (bool): Never colourize. Wins over ``force_colors``.
        show_line_num (bool): Add a ``caller`` field holding ``file:line`` of
            the log call.
        caller_skip (int): Extra frames to skip past the first non-fieldlog
            frame when computing ``caller``.

    Example:
        >>> import io
        >>> from fieldlog import Logger, TextFormatter
        >>> log = Logger(out=io.StringIO(), formatter=TextFormatter(disable_colors=True))
        >>> log.with_field("user", "bob").info("hello")
    """

    def __init__(
        self,
        force_colors: bool = False,
        disable_colors: bool = False,
        show_line_num: bool = False,
        caller_skip: int = 0,
    ) -> None:
        self.force_colors = force_colors
        self.disable_colors = disable_colors
        self.show_line_num = show_line_num
        self.caller_skip = caller_skip

    def format(self, entry: "Entry") -> bytes:
        data = prefix_field_clashes(entry.data)
        data["time"] = rfc3339(entry.time) if entry.time is not None else ""
        data["level"] = str(entry.level) if entry.level is not None else ""
        data["msg"] = entry.message
        if self.show_line_num:
            data["caller"] = caller_location(self.caller_skip)

        if self._use_colors(entry):
            line = self._format_colored(data)
        else:
            line = self._format_plain(data)
        return (line + "\n").encode("utf-8")

    # ---------------------------------------------------------------------- #
    # Private helpers
    # ---------------------------------------------------------------------- #

    def _use_colors(self, entry: "Entry") -> bool:
        if self.disable_colors:
            return False
        return self.force_colors or is_terminal(entry.logger.out)

    def _format_colored(self, data: Dict[str, Any]) -> str:
        level = data["level"]
        level_text = level.upper()[:4]

        if level == "warning":
            color = YELLOW
        elif level in ("error", "fatal", "panic"):
            color = RED
        else:
            color = BLUE

        parts = [
            f"\x1b[{color}m{level_text}\x1b[0m[{mini_ts():04d}] "
            f"{data['msg']:<{MESSAGE_WIDTH}} "
        ]
        for key in sorted(k for k in data if k not in RESERVED_KEYS):
            value = format_value(data[key], quote=False)
            parts.append(f" \x1b[{color}m{key}\x1b[0m={value}")
        return "".join(parts)

    def _format_plain(self, data: Dict[str, Any]) -> str:
        # The structural values are always strings here; only their quoting differs.
        pairs: List[str] = [
            f"time={format_value(data['time'])}",
            f"level={data['level']}",
            f"msg={format_value(data['msg'])}",
        ]
        for key, value in data.items():
            if key not in RESERVED_KEYS:
                pairs.append(f"{key}={format_value(value)}")
        return " ".join(pairs)
