from charbuf.errors.fatal import (
    AllocationError,
    CharBufferError,
    ConfigurationError,
    LengthOverflow,
    RangeError,
)

__all__ = [
    "AllocationError",
    "CharBufferError",
    "ConfigurationError",
    "LengthOverflow",
    "RangeError",
]
