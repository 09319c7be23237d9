from prometheus_client import Counter

# Prometheus metrics for fixed-capacity buffers (process-wide, default registry)
allocations_total = Counter("charbuf_allocations_total", "Buffer storage allocations", ["outcome"])
allocated_bytes_total = Counter("charbuf_allocated_bytes_total", "Total bytes of buffer storage allocated")
range_errors_total = Counter("charbuf_range_errors_total", "Rejected out-of-range buffer operations", ["operation"])
wipes_total = Counter("charbuf_wipes_total", "Buffer storage wipes")
moves_total = Counter("charbuf_moves_total", "Buffer storage ownership transfers")
