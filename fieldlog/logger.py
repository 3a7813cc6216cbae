"""logger.py - The owning context for entries.

A Logger bundles everything an Entry needs to emit: the output stream, the
minimum level, the formatter, the hook registry, the exit function used by
the fatal methods, and the lock that serializes writes to the stream.

There is no module-level default logger. Create one and pass it (or entries
derived from it) to the code that logs.

Thread-safety:
    Only the final write is serialized through ``mu``. Hooks and formatting
    run outside the lock, concurrently across threads. Two concurrent
    emissions therefore never interleave their bytes, but their order in
    the stream is the order in which they acquire the lock.

Example:
    >>> import sys
    >>> from fieldlog import Logger, TextFormatter
    >>> log = Logger(out=sys.stdout, level="debug",
    ...              formatter=TextFormatter(disable_colors=True))
    >>> log.with_field("job", 7).info("started")
"""

import sys
import threading
from typing import Any, Callable, Mapping, Optional, Union

from .entry import Entry
from .formatter import Formatter, TextFormatter
from .hooks import Hook, LevelHooks
from .level import Level, parse_level


class Logger:
    """Shared logging context.

    Attributes:
        out: Writable stream. Text streams receive ``str``, anything else
            receives ``bytes``.
        level (Level): Most verbose level that is still emitted.
        formatter (Formatter): Renders entries to bytes.
        hooks (LevelHooks): Hooks fired once per emitted entry.
        exit_func (Callable[[int], Any]): Called with status 1 by the fatal
            methods. Defaults to ``sys.exit``.
        mu (threading.Lock): Guards writes to ``out``.
    """

    def __init__(
        self,
        out=None,
        level: Union[Level, str] = Level.INFO,
        formatter: Optional[Formatter] = None,
        hooks: Optional[LevelHooks] = None,
        exit_func: Optional[Callable[[int], Any]] = None,
    ) -> None:
        """Initialise the logger.

        Args:
            out: Output stream. Defaults to ``sys.stderr``.
            level: Minimum level, as a Level or a name accepted by
                ``parse_level``. Defaults to INFO.
            formatter: Defaults to a TextFormatter with default settings.
            hooks: Defaults to an empty LevelHooks registry.
            exit_func: Defaults to ``sys.exit``.

        Raises:
            ValueError: If ``level`` is not a known level name.
        """
        self.out = out if out is not None else sys.stderr
        self.level = parse_level(level)
        self.formatter = formatter if formatter is not None else TextFormatter()
        self.hooks = hooks if hooks is not None else LevelHooks()
        self.exit_func = exit_func if exit_func is not None else sys.exit
        self.mu = threading.Lock()

    def new_entry(self) -> Entry:
        """Return an empty Entry bound to this logger."""
        return Entry(self)

    def add_hook(self, hook: Hook) -> None:
        self.hooks.add(hook)

    def set_level(self, level: Union[Level, str]) -> None:
        self.level = parse_level(level)

    def with_field(self, key: str, value: Any) -> Entry:
        return self.new_entry().with_field(key, value)

    def with_fields(self, fields: Mapping[str, Any]) -> Entry:
        return self.new_entry().with_fields(fields)

    # ---------------------------------------------------------------------- #
    # Severity methods, each delegating to a fresh Entry
    # ---------------------------------------------------------------------- #

    def log(self, level: Level, *args: Any) -> None:
        self.new_entry().log(level, *args)

    def debug(self, *args: Any) -> None:
        self.new_entry().debug(*args)

    def print(self, *args: Any) -> None:
        self.new_entry().print(*args)

    def info(self, *args: Any) -> None:
        self.new_entry().info(*args)

    def warn(self, *args: Any) -> None:
        self.new_entry().warn(*args)

    warning = warn

    def error(self, *args: Any) -> None:
        self.new_entry().error(*args)

    def fatal(self, *args: Any) -> None:
        self.new_entry().fatal(*args)

    def panic(self, *args: Any) -> None:
        self.new_entry().panic(*args)

    def debugf(self, fmt: str, *args: Any) -> None:
        self.new_entry().debugf(fmt, *args)

    def infof(self, fmt: str, *args: Any) -> None:
        self.new_entry().infof(fmt, *args)

    def printf(self, fmt: str, *args: Any) -> None:
        self.new_entry().printf(fmt, *args)

    def warnf(self, fmt: str, *args: Any) -> None:
        self.new_entry().warnf(fmt, *args)

    warningf = warnf

    def errorf(self, fmt: str, *args: Any) -> None:
        self.new_entry().errorf(fmt, *args)

    def fatalf(self, fmt: str, *args: Any) -> None:
        self.new_entry().fatalf(fmt, *args)

    def panicf(self, fmt: str, *args: Any) -> None:
        self.new_entry().panicf(fmt, *args)

    def debugln(self, *args: Any) -> None:
        self.new_entry().debugln(*args)

    def infoln(self, *args: Any) -> None:
        self.new_entry().infoln(*args)

    def println(self, *args: Any) -> None:
        self.new_entry().println(*args)

    def warnln(self, *args: Any) -> None:
        self.new_entry().warnln(*args)

    warningln = warnln

    def errorln(self, *args: Any) -> None:
        self.new_entry().errorln(*args)

    def fatalln(self, *args: Any) -> None:
        self.new_entry().fatalln(*args)

    def panicln(self, *args: Any) -> None:
        self.new_entry().panicln(*args)
