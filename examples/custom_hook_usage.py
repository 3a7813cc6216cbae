"""examples/custom_hook_usage.py - Implement and plug in custom hooks.

Shows how to subclass Hook to react to emitted entries, in this example an
in-memory collector (handy in tests) and an error counter that only listens
to the severe levels.

Run:
    python examples/custom_hook_usage.py
"""

import sys
from typing import List

from fieldlog import Entry, Hook, Level, Logger


class MemoryHook(Hook):
    """Keeps every emitted entry's level and message in memory.

    Example:
        >>> hook = MemoryHook()
        >>> log = Logger()
        >>> log.add_hook(hook)
        >>> log.info("hello")
        >>> hook.seen
        [('info', 'hello')]
    """

    def __init__(self) -> None:
        self.seen: List[tuple] = []

    def levels(self) -> List[Level]:
        return list(Level)

    def fire(self, entry: Entry) -> None:
        self.seen.append((str(entry.level), entry.message))


class ErrorCounter(Hook):
    def __init__(self) -> None:
        self.count = 0

    def levels(self) -> List[Level]:
        return [Level.ERROR, Level.FATAL, Level.PANIC]

    def fire(self, entry: Entry) -> None:
        self.count += 1


if __name__ == "__main__":
    memory = MemoryHook()
    errors = ErrorCounter()

    log = Logger(out=sys.stdout)
    log.add_hook(memory)
    log.add_hook(errors)

    log.info("job started")
    log.with_field("attempt", 1).warn("slow response")
    log.with_field("attempt", 2).error("request failed")

    print(f"hook saw {len(memory.seen)} entries, {errors.count} error(s)")
