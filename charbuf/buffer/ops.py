# FILE: charbuf/buffer/ops.py
# ------------------------------------------------------------------------------
"""Raw span routines shared by CharBuffer.

Callers validate every span before calling in here; these helpers do no
bounds checking of their own.
"""
from charbuf.buffer.layout import NOT_FOUND


def copy_span(src, src_start: int, src_end: int, dst: bytearray, dst_offset: int) -> int:
    # Copy out first: src may alias dst (in-place substring).
    chunk = bytes(src[src_start:src_end])
    count = len(chunk)
    dst[dst_offset : dst_offset + count] = chunk
    return count


def compare_span(left, left_start: int, right, right_start: int, count: int) -> int:
    """Three-way unsigned byte comparison of two equally sized spans."""
    a = bytes(left[left_start : left_start + count])
    b = bytes(right[right_start : right_start + count])
    if a == b:
        return 0
    return -1 if a < b else 1


def compare_lexicographic(left, left_length: int, right, right_length: int) -> int:
    # Equal common prefix: shorter sorts first.
    common = min(left_length, right_length)
    result = compare_span(left, 0, right, 0, common)
    if result == 0 and left_length != right_length:
        result = -1 if left_length < right_length else 1
    return result


def match_span(left, left_start: int, right, right_start: int, count: int) -> bool:
    return compare_span(left, left_start, right, right_start, count) == 0


def find_span(haystack, length: int, pattern, pattern_length: int, start: int) -> int:
    """Lowest offset >= start where pattern occurs in haystack[:length].

    An empty pattern matches at ``start``. Returns NOT_FOUND when there is
    no room left for the pattern or it does not occur.
    """
    if pattern_length > length - start:
        return NOT_FOUND
    if pattern_length == 0:
        return start
    needle = bytes(pattern[:pattern_length])
    index = bytes(haystack[:length]).find(needle, start)
    return NOT_FOUND if index < 0 else index
