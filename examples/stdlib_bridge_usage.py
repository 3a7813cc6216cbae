"""examples/stdlib_bridge_usage.py - Route standard logging through fieldlog.

Existing code keeps calling ``logging.getLogger(...)``; one handler sends
its records to a fieldlog Logger so they share its format and hooks.

Run:
    python examples/stdlib_bridge_usage.py
"""

import logging
import sys

from fieldlog import FieldLogHandler, Logger, TextFormatter

log = Logger(out=sys.stdout, level="debug", formatter=TextFormatter(disable_colors=True))

logging.basicConfig(level=logging.DEBUG, handlers=[FieldLogHandler(log)])
logger = logging.getLogger("billing")


if __name__ == "__main__":
    logger.info("invoice created", extra={"fields": {"invoice_id": 42}})
    logger.warning("card expires soon")
    try:
        {}["missing"]
    except KeyError:
        logger.exception("lookup failed")
