"""Tests for per-product stock locks."""

import threading
import time

from storefront.checkout.locks import lock_for, stock_locks


class TestStockLocks:
    def test_same_product_same_lock(self):
        assert lock_for("prod-1") is lock_for("prod-1")
        assert lock_for("prod-1") is not lock_for("prod-2")

    def test_released_after_block(self):
        with stock_locks(["prod-a", "prod-b"]):
            assert lock_for("prod-a").locked()
            assert lock_for("prod-b").locked()
        assert not lock_for("prod-a").locked()
        assert not lock_for("prod-b").locked()

    def test_released_on_error(self):
        try:
            with stock_locks(["prod-err"]):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert not lock_for("prod-err").locked()

    def test_duplicate_ids_do_not_deadlock(self):
        with stock_locks(["prod-dup", "prod-dup"]):
            assert lock_for("prod-dup").locked()

    def test_overlapping_holders_serialize(self):
        events = []
        first_inside = threading.Event()

        def worker(name, product_ids):
            with stock_locks(product_ids):
                events.append(f"{name}-in")
                first_inside.set()
                time.sleep(0.05)
                events.append(f"{name}-out")

        first = threading.Thread(target=worker, args=("first", ["prod-x", "prod-y"]))
        second = threading.Thread(target=worker, args=("second", ["prod-y", "prod-x"]))
        first.start()
        first_inside.wait(timeout=2)
        second.start()
        first.join(timeout=2)
        second.join(timeout=2)

        assert events == ["first-in", "first-out", "second-in", "second-out"]
