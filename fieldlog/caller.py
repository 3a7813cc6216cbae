"""caller.py - Call-site capture for the ``caller`` field.

The walk starts at the caller of ``caller_location`` and moves outward until
it leaves the fieldlog package, so the reported location is the user's log
call regardless of how many internal layers (Logger -> Entry -> formatter)
sit in between. ``skip`` then moves that many additional frames outward for
applications that wrap fieldlog in their own helper functions.

Frames from the standard ``logging`` module are skipped as well, so records
arriving through FieldLogHandler point at the call into the logging module.
"""

import inspect
import logging
import os

UNKNOWN_CALLER = "???:0"

_PACKAGE = __name__.split(".")[0]

_LOGGING_SRCFILE = os.path.normcase(logging.addLevelName.__code__.co_filename)


def _is_internal(frame) -> bool:
    module = frame.f_globals.get("__name__", "")
    if module == _PACKAGE or module.startswith(_PACKAGE + "."):
        return True
    return os.path.normcase(frame.f_code.co_filename) == _LOGGING_SRCFILE


def caller_location(skip: int = 0) -> str:
    """Return ``basename(file):line`` of the code that issued the log call.

    Args:
        skip: Number of extra frames to walk outward past the first frame
            outside fieldlog. Defaults to 0.

    Returns:
        A string such as ``"app.py:42"``, or ``"???:0"`` if the stack runs
        out before the requested frame.
    """
    frame = inspect.currentframe()
    try:
        while frame is not None and _is_internal(frame):
            frame = frame.f_back
        for _ in range(skip):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            return UNKNOWN_CALLER
        return f"{os.path.basename(frame.f_code.co_filename)}:{frame.f_lineno}"
    finally:
        # Break the reference cycle between this frame and the walked ones.
        del frame
