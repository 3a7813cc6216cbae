"""examples/multithreaded_usage.py - Sharing one Logger across threads.

Every worker derives its own entry from a shared base entry. The base entry
is never modified, and the Logger's lock keeps each line whole even though
the workers write to the same stream at the same time.

Run:
    python examples/multithreaded_usage.py
"""

import sys
import threading
import time

from fieldlog import Logger

log = Logger(out=sys.stdout, level="debug")
service_log = log.with_fields({"service": "order_service", "region": "eu-west-1"})


def place_order(order_id: int, product_id: int, qty: int) -> None:
    order_log = service_log.with_fields(
        {"order_id": order_id, "product_id": product_id, "thread": threading.current_thread().name}
    )
    order_log.infof("Order received (qty=%d)", qty)
    time.sleep(0.01)  # simulate DB latency

    stock = {1: 10, 2: 0, 3: 5}.get(product_id, 0)
    if stock < qty:
        order_log.with_field("available", stock).error("Insufficient stock")
        return
    order_log.info("Order placed")


if __name__ == "__main__":
    orders = [(1001, 1, 2), (1002, 2, 1), (1003, 3, 9), (1004, 3, 1)]
    threads = [
        threading.Thread(target=place_order, args=order, name=f"Thread-{order[0]}")
        for order in orders
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
