"""examples/basic_usage.py - fieldlog quick tour.

Demonstrates:
    Scenario A: shared field prefix reused across several log calls
    Scenario B: the three message styles (print, printf, println)
    Scenario C: user fields that clash with time / level / msg

Run:
    python examples/basic_usage.py
    python examples/basic_usage.py | cat     # plain key=value output
"""

import sys

from fieldlog import Logger, TextFormatter

log = Logger(out=sys.stdout, level="debug", formatter=TextFormatter(show_line_num=True))


# ===========================================================================
# Scenario A: one base entry, many log calls
# ===========================================================================


def pay(user_id: int, amount: int) -> None:
    payment_log = log.with_fields({"user_id": user_id, "amount": amount})
    payment_log.info("Payment attempt")

    balance = 3_000
    payment_log.with_field("balance", balance).debug("Balance fetched")

    if balance < amount:
        payment_log.with_field("shortfall", amount - balance).error("Insufficient funds")
        return
    payment_log.info("Payment successful")


# ===========================================================================
# Scenario B: message composition
# ===========================================================================


def message_styles() -> None:
    log.info("retry ", 2, 3)                    # print:   "retry 2 3"
    log.infof("retry %d of %d", 2, 3)           # printf:  "retry 2 of 3"
    log.infoln("retry", 2, "of", 3)             # println: "retry 2 of 3"


# ===========================================================================
# Scenario C: reserved field names
# ===========================================================================


def clashing_fields() -> None:
    # Rendered as fields.time / fields.level next to the real ones.
    log.with_fields({"time": "yesterday", "level": "expert"}).warn("Odd field names")


if __name__ == "__main__":
    pay(user_id=101, amount=5_000)
    message_styles()
    clashing_fields()
