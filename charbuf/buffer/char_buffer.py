# FILE: charbuf/buffer/char_buffer.py
# ------------------------------------------------------------------------------
import logging
import operator
from typing import Optional, Tuple

from charbuf.buffer import layout, ops
from charbuf.buffer.allocator import allocate_storage, empty_storage
from charbuf.config import get_config
from charbuf.errors.fatal import RangeError
from charbuf.metrics.counters import Metrics

logger = logging.getLogger("charbuf.buffer")

_TEXT_TYPES = (bytes, bytearray, memoryview, str)


def _range_error(operation: str, message: str, **context) -> RangeError:
    Metrics.get().inc_range_error(operation)
    context["operation"] = operation
    logger.debug("Rejected buffer operation: %s", message, extra=dict(context))
    return RangeError(message, context=context)


def _index(value, operation: str, name: str) -> int:
    try:
        value = operator.index(value)
    except TypeError:
        raise TypeError(f"{name} must be an integer, not {type(value).__name__}") from None
    if value < 0:
        raise _range_error(operation, f"{name} must not be negative", **{name: value})
    return value


def _latin1_text(value) -> bool:
    if not isinstance(value, str):
        return True
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        return False
    return True


def _byte_value(value) -> int:
    if isinstance(value, str):
        value = value.encode("latin-1")
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 1:
            raise ValueError(f"expected a single character, got {len(value)}")
        return value[0]
    value = operator.index(value)
    if not 0 <= value <= 0xFF:
        raise ValueError("byte must be in range(0, 256)")
    return value


class CharBuffer:
    """Fixed-capacity, mutable, NUL-terminated byte buffer.

    The storage holds ``capacity + 1`` bytes and is never resized. Every
    operation keeps ``length <= capacity`` and ``storage[length] == 0``;
    requests that would break either raise RangeError before any byte is
    written.

    Wherever *text* is accepted it may be bytes-like, a ``str`` (encoded as
    Latin-1, one character per byte) or another CharBuffer. Text is read up
    to its first NUL byte. Raw data (``copy_raw``, ``append_raw``) is not
    scanned; the caller passes explicit lengths or spans.

    A buffer has a single owner. There is no internal locking.
    """

    def __init__(self, capacity: int, text=None):
        capacity = operator.index(capacity)
        storage = allocate_storage(capacity)
        length = 0
        if text is not None:
            view, length = self._text_view(text)
            if length > capacity:
                raise _range_error(
                    "construct", "Text does not fit in capacity", capacity=capacity, length=length
                )
            ops.copy_span(view, 0, length, storage, 0)
        self._storage = storage
        self._capacity = capacity
        self._set_length(length)

    @classmethod
    def with_capacity(cls, capacity: int) -> "CharBuffer":
        return cls(capacity)

    @classmethod
    def from_text(cls, text) -> "CharBuffer":
        """Build a buffer whose capacity equals the length of ``text``."""
        view, length = cls._text_view(text)
        buf = cls(length)
        ops.copy_span(view, 0, length, buf._storage, 0)
        buf._set_length(length)
        return buf

    @classmethod
    def with_capacity_and_text(cls, capacity: int, text) -> "CharBuffer":
        return cls(capacity, text)

    # ------------------------------------------------------------------
    # ownership
    # ------------------------------------------------------------------
    def copy(self) -> "CharBuffer":
        duplicate = type(self)(self._capacity)
        ops.copy_span(self._storage, 0, self._length, duplicate._storage, 0)
        duplicate._set_length(self._length)
        return duplicate

    def __copy__(self) -> "CharBuffer":
        return self.copy()

    def __deepcopy__(self, memo) -> "CharBuffer":
        return self.copy()

    def assign(self, source) -> "CharBuffer":
        """Replace the content with ``source``, keeping this buffer's storage."""
        if source is self:
            return self
        view, length = self._text_view(source)
        if length > self._capacity:
            raise _range_error(
                "assign", "Source does not fit in capacity", capacity=self._capacity, length=length
            )
        ops.copy_span(view, 0, length, self._storage, 0)
        self._set_length(length)
        return self

    def take(self) -> "CharBuffer":
        """Move the storage into a new buffer and leave this one empty with capacity 0."""
        moved = type(self).__new__(type(self))
        moved._storage = self._storage
        moved._capacity = self._capacity
        moved._length = self._length
        self._release()
        Metrics.get().inc_move()
        logger.debug("Moved buffer storage: capacity=%s", moved._capacity)
        return moved

    def move_from(self, other: "CharBuffer") -> "CharBuffer":
        if other is self:
            return self
        self._storage = other._storage
        self._capacity = other._capacity
        self._length = other._length
        other._release()
        Metrics.get().inc_move()
        logger.debug("Moved buffer storage: capacity=%s", self._capacity)
        return self

    def _release(self):
        self._storage = empty_storage()
        self._capacity = 0
        self._length = 0

    # ------------------------------------------------------------------
    # state
    # ------------------------------------------------------------------
    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def length(self) -> int:
        return self._length

    def __len__(self) -> int:
        return self._length

    def is_empty(self) -> bool:
        return self._length == 0

    def _set_length(self, length: int):
        self._length = length
        self._storage[length] = layout.TERMINATOR

    # ------------------------------------------------------------------
    # mutation
    # ------------------------------------------------------------------
    def clear(self):
        self._set_length(0)

    def truncate(self, new_length: int):
        """Shorten to ``new_length``; a length at or past the current one is ignored."""
        new_length = _index(new_length, "truncate", "new_length")
        if new_length < self._length:
            self._set_length(new_length)

    def wipe(self):
        """Zero every storage byte, terminator slot included. Length and capacity are kept."""
        size = len(self._storage)
        self._storage[0:size] = bytes(size)
        Metrics.get().inc_wipe()

    def copy_raw(self, data, start_or_length: int, end: Optional[int] = None):
        """Replace the content with ``data[:length]`` or ``data[start:end]``."""
        view = layout.as_text_bytes(data)
        start, end = self._raw_span("copy_raw", view, start_or_length, end)
        if end - start > self._capacity:
            raise _range_error(
                "copy_raw", "Span does not fit in capacity", capacity=self._capacity, start=start, end=end
            )
        ops.copy_span(view, start, end, self._storage, 0)
        self._set_length(end - start)

    def substring(self, start: int, end: int):
        """Keep only ``content[start:end]``."""
        start, end = self._source_span("substring", start, end, self._length)
        ops.copy_span(self._storage, start, end, self._storage, 0)
        self._set_length(end - start)

    def substring_from(self, other: "CharBuffer", start: int, end: int):
        """Replace the content with ``other.content[start:end]``."""
        start, end = self._source_span("substring", start, end, other._length)
        if end - start > self._capacity:
            raise _range_error(
                "substring", "Span does not fit in capacity", capacity=self._capacity, start=start, end=end
            )
        ops.copy_span(other._storage, start, end, self._storage, 0)
        self._set_length(end - start)

    def append(self, other: "CharBuffer", start: int = 0, end: Optional[int] = None):
        if end is None:
            end = other._length
        start, end = self._source_span("append", start, end, other._length)
        self._append_span("append", other._storage, start, end)

    def append_raw(self, data, start_or_length: int, end: Optional[int] = None):
        view = layout.as_text_bytes(data)
        start, end = self._raw_span("append_raw", view, start_or_length, end)
        self._append_span("append_raw", view, start, end)

    def overwrite(self, dst_start: int, source, src_start: Optional[int] = None, src_end: Optional[int] = None):
        """Copy a span of ``source`` over this buffer starting at ``dst_start``.

        Writing may begin anywhere up to the current length (no gaps). The
        length only grows when the write ends past it; overwriting inside the
        existing content keeps the tail.
        """
        dst_start = _index(dst_start, "overwrite", "dst_start")
        view, src_length = self._text_view(source)
        src_start = 0 if src_start is None else _index(src_start, "overwrite", "src_start")
        src_end = src_length if src_end is None else _index(src_end, "overwrite", "src_end")

        if dst_start > self._capacity or dst_start > self._length:
            raise _range_error(
                "overwrite", "Destination start is past the current content",
                dst_start=dst_start, length=self._length, capacity=self._capacity,
            )
        if src_start > src_end or src_end > src_length:
            raise _range_error(
                "overwrite", "Invalid source span", src_start=src_start, src_end=src_end, src_length=src_length
            )
        count = src_end - src_start
        if count > self._capacity - dst_start:
            raise _range_error(
                "overwrite", "Span does not fit in capacity",
                dst_start=dst_start, count=count, capacity=self._capacity,
            )

        ops.copy_span(view, src_start, src_end, self._storage, dst_start)
        new_length = dst_start + count
        if new_length > self._length:
            self._set_length(new_length)

    def fill(self, char, target_length: Optional[int] = None):
        """Pad with ``char`` up to ``target_length`` (default: the full capacity).

        A target at or below the current length truncates to it.
        """
        value = _byte_value(char)
        if target_length is None:
            target_length = self._capacity
        else:
            target_length = _index(target_length, "fill", "target_length")
            if target_length > self._capacity:
                raise _range_error(
                    "fill", "Target length exceeds capacity",
                    target_length=target_length, capacity=self._capacity,
                )
        if target_length > self._length:
            self._storage[self._length : target_length] = bytes([value]) * (target_length - self._length)
        self._set_length(target_length)

    def at(self, index: int) -> int:
        return self._storage[self._checked_index(index)]

    def set_at(self, index: int, value):
        self._storage[self._checked_index(index)] = _byte_value(value)

    def __getitem__(self, index) -> int:
        if isinstance(index, slice):
            raise TypeError("CharBuffer does not support slicing; use substring()")
        return self.at(index)

    def __setitem__(self, index, value):
        if isinstance(index, slice):
            raise TypeError("CharBuffer does not support slice assignment; use overwrite()")
        self.set_at(index, value)

    def __iadd__(self, other):
        if isinstance(other, CharBuffer):
            self.append(other)
        elif isinstance(other, _TEXT_TYPES):
            view, length = self._text_view(other)
            self._append_span("append", view, 0, length)
        else:
            value = _byte_value(other)
            if self._length >= self._capacity:
                raise _range_error("append", "Buffer is full", capacity=self._capacity)
            self._storage[self._length] = value
            self._set_length(self._length + 1)
        return self

    def _append_span(self, operation: str, source, start: int, end: int):
        count = end - start
        if count > self._capacity - self._length:
            raise _range_error(
                operation, "Span does not fit in remaining capacity",
                count=count, length=self._length, capacity=self._capacity,
            )
        ops.copy_span(source, start, end, self._storage, self._length)
        self._set_length(self._length + count)

    def _checked_index(self, index) -> int:
        index = _index(index, "index", "index")
        if index >= self._length:
            raise _range_error("index", "Index out of range", index=index, length=self._length)
        return index

    @staticmethod
    def _source_span(operation: str, start, end, source_length: int) -> Tuple[int, int]:
        start = _index(start, operation, "start")
        end = _index(end, operation, "end")
        if start > end or end > source_length:
            raise _range_error(
                operation, "Invalid span", start=start, end=end, source_length=source_length
            )
        return start, end

    @staticmethod
    def _raw_span(operation: str, view: memoryview, start_or_length, end) -> Tuple[int, int]:
        if end is None:
            start, end = 0, _index(start_or_length, operation, "length")
        else:
            start = _index(start_or_length, operation, "start")
            end = _index(end, operation, "end")
        if start > end or end > len(view):
            raise _range_error(operation, "Invalid span", start=start, end=end, data_length=len(view))
        return start, end

    @staticmethod
    def _text_view(text):
        if isinstance(text, CharBuffer):
            return text._storage, text._length
        view = layout.as_text_bytes(text)
        return view, layout.text_length(view)

    # ------------------------------------------------------------------
    # comparison & search
    # ------------------------------------------------------------------
    def compare_to(self, other) -> int:
        """Three-way lexicographic comparison: -1, 0 or 1."""
        view, length = self._text_view(other)
        return ops.compare_lexicographic(self._storage, self._length, view, length)

    def __eq__(self, other):
        if not isinstance(other, (CharBuffer,) + _TEXT_TYPES):
            return NotImplemented
        # Text outside Latin-1 has no byte form, so it never equals a buffer
        if not _latin1_text(other):
            return False
        view, length = self._text_view(other)
        if length != self._length:
            return False
        return ops.match_span(self._storage, 0, view, 0, length)

    def __lt__(self, other):
        if not isinstance(other, (CharBuffer,) + _TEXT_TYPES):
            return NotImplemented
        return self.compare_to(other) < 0

    def __gt__(self, other):
        if not isinstance(other, (CharBuffer,) + _TEXT_TYPES):
            return NotImplemented
        return self.compare_to(other) > 0

    def __le__(self, other):
        if not isinstance(other, (CharBuffer,) + _TEXT_TYPES):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __ge__(self, other):
        if not isinstance(other, (CharBuffer,) + _TEXT_TYPES):
            return NotImplemented
        return self.compare_to(other) >= 0

    # mutable
    __hash__ = None

    def starts_with(self, other) -> bool:
        view, length = self._text_view(other)
        return length <= self._length and ops.match_span(self._storage, 0, view, 0, length)

    def ends_with(self, other) -> bool:
        view, length = self._text_view(other)
        return length <= self._length and ops.match_span(
            self._storage, self._length - length, view, 0, length
        )

    def index_of(self, pattern, start: int = 0) -> int:
        """Lowest offset >= ``start`` where ``pattern`` occurs, or NOT_FOUND.

        ``start`` may equal the length (only an empty pattern matches there);
        a start past the length raises RangeError.
        """
        start = _index(start, "index_of", "start")
        if start > self._length:
            raise _range_error("index_of", "Start is past the content", start=start, length=self._length)
        view, length = self._text_view(pattern)
        return ops.find_span(self._storage, self._length, view, length, start)

    def __contains__(self, pattern) -> bool:
        if not isinstance(pattern, (CharBuffer,) + _TEXT_TYPES):
            pattern = bytes([_byte_value(pattern)])
        elif not _latin1_text(pattern):
            return False
        return self.index_of(pattern) != layout.NOT_FOUND

    # ------------------------------------------------------------------
    # output
    # ------------------------------------------------------------------
    def c_str(self) -> memoryview:
        """Read-only view of the content including its NUL terminator."""
        return memoryview(self._storage)[: self._length + 1].toreadonly()

    def to_bytes(self) -> bytes:
        return bytes(self._storage[: self._length])

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __iter__(self):
        return iter(self.to_bytes())

    def __str__(self) -> str:
        return self.to_bytes().decode("latin-1")

    def __repr__(self) -> str:
        return f"CharBuffer(capacity={self._capacity}, content={self.to_bytes()!r})"

    def __enter__(self) -> "CharBuffer":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if get_config().wipe_on_exit:
            self.wipe()
        return False
