# FILE: charbuf/buffer/layout.py
# ------------------------------------------------------------------------------
import sys

from charbuf.errors.fatal import LengthOverflow

# Largest index value; reserved so that no valid capacity, length or offset
# can ever equal it.
NOT_FOUND = sys.maxsize

# Maximum content capacity, excluding the terminator slot.
MAX_CAPACITY = NOT_FOUND - 1

TERMINATOR = 0


def as_text_bytes(text) -> memoryview:
    """Return a flat byte view of a text argument without measuring it."""
    if isinstance(text, str):
        try:
            text = text.encode("latin-1")
        except UnicodeEncodeError:
            raise ValueError("text must be Latin-1 encodable (one byte per character)") from None
    view = memoryview(text)
    if view.ndim != 1 or view.itemsize != 1:
        view = view.cast("B")
    return view


def text_length(view: memoryview) -> int:
    """Length of the text up to, not including, the first NUL byte.

    Raises LengthOverflow if the measured length reaches MAX_CAPACITY.
    """
    end = view.tobytes().find(bytes([TERMINATOR]))
    length = len(view) if end < 0 else end
    if length >= MAX_CAPACITY:
        raise LengthOverflow(
            "Text length reaches the reserved capacity boundary",
            context={"length": length, "max_capacity": MAX_CAPACITY},
        )
    return length
