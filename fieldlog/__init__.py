"""fieldlog/__init__.py - Public API for the fieldlog package.

fieldlog is a structured, leveled logging facade. Callers attach key/value
fields to an entry, pick a severity, and the entry is rendered by a
formatter and written to the Logger's output stream.

Quick start:
    from fieldlog import Logger

    log = Logger(level="debug")
    base = log.with_fields({"service": "billing", "region": "eu-west-1"})

    base.info("service started")
    base.with_field("order_id", 17).warnf("retrying charge (%d/%d)", 2, 3)
    base.errorln("charge failed:", "card declined")

Output on a non-terminal stream:
    time="2024-01-15T12:34:56.123456Z" level=info msg="service started" service="billing" region="eu-west-1"

Exported names:
    Logger:           Owning context: output stream, level, formatter, hooks, write lock.
    Entry:            A set of fields plus the severity methods that emit them.
    Level:            Ordered severities, PANIC (most severe) to DEBUG.
    parse_level:      Convert a level name into a Level.
    Formatter:        Contract for entry renderers.
    TextFormatter:    Colorized or plain key=value renderer.
    Hook, LevelHooks: Per-emission side effects and their registry.
    PanicError:       Raised by the panic methods.
    FieldLogHandler:  logging.Handler forwarding stdlib records to a Logger.
"""

from .entry import Entry, Fields, PanicError
from .formatter import Formatter, TextFormatter, prefix_field_clashes
from .handler import FieldLogHandler
from .hooks import Hook, LevelHooks
from .level import Level, parse_level
from .logger import Logger

__all__ = [
    "Logger",
    "Entry",
    "Fields",
    "Level",
    "parse_level",
    "Formatter",
    "TextFormatter",
    "prefix_field_clashes",
    "Hook",
    "LevelHooks",
    "PanicError",
    "FieldLogHandler",
]
