"""hooks.py - Side effects fired once per emitted entry.

A Hook declares the levels it cares about and receives the fully stamped
Entry before it is formatted and written. Hooks are collected in a
LevelHooks registry owned by the Logger.

Typical usage::

    from fieldlog import Hook, Level, Logger

    class CountErrors(Hook):
        def __init__(self):
            self.count = 0

        def levels(self):
            return [Level.ERROR, Level.FATAL, Level.PANIC]

        def fire(self, entry):
            self.count += 1

    log = Logger()
    log.add_hook(CountErrors())
"""

from abc import ABC, abstractmethod
from collections import defaultdict
from typing import TYPE_CHECKING, Dict, List

from .level import Level

if TYPE_CHECKING:  # pragma: no cover
    from .entry import Entry


class Hook(ABC):
    """Abstract base class for anything fired on emission.

    Subclasses implement ``levels()`` to choose which severities they receive
    and ``fire()`` to act on the entry. Exceptions raised by ``fire()`` are
    reported to the diagnostic stream by the Entry and never abort the
    emission.
    """

    @abstractmethod
    def levels(self) -> List[Level]:
        """Return the levels this hook should be fired for."""

    @abstractmethod
    def fire(self, entry: "Entry") -> None:
        """Handle one emitted entry.

        Args:
            entry: The entry being emitted, with ``time``, ``level`` and
                ``message`` already set. Hooks must not mutate ``entry.data``.
        """


class LevelHooks:
    """Registry of hooks keyed by level.

    Registration is expected to happen during setup. ``fire()`` only reads
    the registry, so concurrent emissions need no locking here.
    """

    def __init__(self) -> None:
        self._hooks: Dict[Level, List[Hook]] = defaultdict(list)

    def add(self, hook: Hook) -> None:
        """Register ``hook`` for every level it declares."""
        for level in hook.levels():
            self._hooks[level].append(hook)

    def fire(self, level: Level, entry: "Entry") -> None:
        """Fire every hook registered for ``level`` in registration order.

        Raises:
            Exception: Whatever the first failing hook raised. Later hooks
                for the same level are not called.
        """
        for hook in self._hooks.get(level, ()):
            hook.fire(entry)

    def __len__(self) -> int:
        return sum(len(hooks) for hooks in self._hooks.values())
