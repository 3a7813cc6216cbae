"""level.py - Ordered severity levels for fieldlog.

Levels are ordered from most to least severe. A Logger configured at a given
level emits every record whose level value is less than or equal to its own,
so ``Level.INFO`` lets INFO, WARN, ERROR, FATAL and PANIC through and drops
DEBUG.
"""

from enum import IntEnum
from typing import Union


class Level(IntEnum):
    """Severity of a log record. Lower values are more severe."""

    PANIC = 0
    FATAL = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    DEBUG = 5

    def __str__(self) -> str:
        return _NAMES[self]


_NAMES = {
    Level.PANIC: "panic",
    Level.FATAL: "fatal",
    Level.ERROR: "error",
    Level.WARN: "warning",
    Level.INFO: "info",
    Level.DEBUG: "debug",
}

_ALIASES = {name: level for level, name in _NAMES.items()}
_ALIASES["warn"] = Level.WARN


def parse_level(value: Union[str, Level]) -> Level:
    """Convert a level name (or an existing Level) into a Level.

    Args:
        value: One of ``panic``, ``fatal``, ``error``, ``warning``, ``warn``,
            ``info``, ``debug`` (case-insensitive), or a Level instance.

    Returns:
        The matching Level.

    Raises:
        ValueError: If ``value`` does not name a known level.

    Example:
        >>> parse_level("WARN")
        <Level.WARN: 3>
    """
    if isinstance(value, Level):
        return value
    try:
        return _ALIASES[str(value).strip().lower()]
    except KeyError:
        raise ValueError(f"not a valid fieldlog level: {value!r}") from None
