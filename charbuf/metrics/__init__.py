from charbuf.metrics.counters import Metrics

__all__ = ["Metrics"]
