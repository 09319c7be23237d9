"""Fixed-capacity, NUL-terminated byte buffers.

All mutating operations are checked against the capacity declared at
construction and fail with RangeError instead of overflowing or
reallocating.
"""

from charbuf.buffer import CharBuffer, MAX_CAPACITY, NOT_FOUND
from charbuf.errors import (
    AllocationError,
    CharBufferError,
    ConfigurationError,
    LengthOverflow,
    RangeError,
)

__version__ = "0.1.0"

__all__ = [
    "AllocationError",
    "CharBuffer",
    "CharBufferError",
    "ConfigurationError",
    "LengthOverflow",
    "MAX_CAPACITY",
    "NOT_FOUND",
    "RangeError",
]
