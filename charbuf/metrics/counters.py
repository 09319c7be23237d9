# FILE: charbuf/metrics/counters.py
# ------------------------------------------------------------------------------
import charbuf_metrics


class Metrics:
    _instance = None
    def __init__(self):
        self.allocations_ok = 0
        self.allocations_failed = 0
        self.bytes_allocated = 0
        self.range_errors = 0
        self.wipes = 0
        self.moves = 0

    @classmethod
    def get(cls):
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def inc_allocation_ok(self, size: int):
        self.allocations_ok += 1
        self.bytes_allocated += size
        charbuf_metrics.allocations_total.labels(outcome="ok").inc()
        charbuf_metrics.allocated_bytes_total.inc(size)

    def inc_allocation_fail(self):
        self.allocations_failed += 1
        charbuf_metrics.allocations_total.labels(outcome="failed").inc()

    def inc_range_error(self, operation: str):
        self.range_errors += 1
        charbuf_metrics.range_errors_total.labels(operation=operation).inc()

    def inc_wipe(self):
        self.wipes += 1
        charbuf_metrics.wipes_total.inc()

    def inc_move(self):
        self.moves += 1
        charbuf_metrics.moves_total.inc()

    def snapshot(self):
        return {
            "allocations_ok": self.allocations_ok,
            "allocations_failed": self.allocations_failed,
            "bytes_allocated": self.bytes_allocated,
            "range_errors": self.range_errors,
            "wipes": self.wipes,
            "moves": self.moves,
        }
