# FILE: charbuf/buffer/allocator.py
# ------------------------------------------------------------------------------
import logging

from charbuf.buffer import layout
from charbuf.config import get_config
from charbuf.errors.fatal import AllocationError
from charbuf.metrics.counters import Metrics

logger = logging.getLogger("charbuf.allocator")


def allocate_storage(capacity: int) -> bytearray:
    """Acquire a zeroed storage region of ``capacity + 1`` bytes.

    Raises AllocationError when the capacity is negative or at/above
    MAX_CAPACITY, when the configured allocation limit would be exceeded,
    or when the interpreter cannot provide the memory.
    """
    metrics = Metrics.get()
    if capacity < 0 or capacity >= layout.MAX_CAPACITY:
        metrics.inc_allocation_fail()
        raise AllocationError(
            "Requested capacity is outside the valid range",
            context={"capacity": capacity, "max_capacity": layout.MAX_CAPACITY},
        )

    size = capacity + 1
    limit = get_config().allocation_limit
    if limit is not None and size > limit:
        metrics.inc_allocation_fail()
        logger.warning("Storage request over allocation limit: size=%s limit=%s", size, limit)
        raise AllocationError(
            "Requested storage exceeds the configured allocation limit",
            context={"size": size, "limit": limit},
        )

    try:
        storage = bytearray(size)
    except (MemoryError, OverflowError):
        metrics.inc_allocation_fail()
        logger.warning("Failed to allocate buffer storage: size=%s", size)
        raise AllocationError("Failed to allocate raw memory buffer", context={"size": size})

    metrics.inc_allocation_ok(size)
    logger.debug("Allocated buffer storage: capacity=%s bytes=%s", capacity, size)
    return storage


def empty_storage() -> bytearray:
    """Storage of a zero-capacity buffer, as left behind by a move."""
    return bytearray(1)
