"""Per-product stock locks.

Every command that loads a Product and writes it back (checkout, cancel
restock, back-office edits) runs through ``process_holding_stock`` so it
serializes with the others on the products it touches. Locks are taken in
sorted id order so overlapping carts cannot deadlock.
"""

import threading
from contextlib import ExitStack, contextmanager

from protean.utils.globals import current_domain

_registry_guard = threading.Lock()
_locks: dict[str, threading.Lock] = {}


def lock_for(product_id) -> threading.Lock:
    with _registry_guard:
        return _locks.setdefault(str(product_id), threading.Lock())


@contextmanager
def stock_locks(product_ids):
    with ExitStack() as stack:
        for product_id in sorted({str(pid) for pid in product_ids}):
            stack.enter_context(lock_for(product_id))
        yield


def process_holding_stock(command, product_ids):
    """Process ``command`` with the locks of ``product_ids`` held until its unit of work commits."""
    with stock_locks(product_ids):
        return current_domain.process(command, asynchronous=False)
