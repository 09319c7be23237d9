from charbuf.buffer.char_buffer import CharBuffer
from charbuf.buffer.layout import MAX_CAPACITY, NOT_FOUND

__all__ = ["CharBuffer", "MAX_CAPACITY", "NOT_FOUND"]
