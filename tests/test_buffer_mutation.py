# FILE: tests/test_buffer_mutation.py
# ------------------------------------------------------------------------------
import pytest

from charbuf import CharBuffer, RangeError


def test_append_past_capacity_keeps_content(check_invariants):
    buf = CharBuffer.with_capacity(5)
    buf += "hello"
    with pytest.raises(RangeError):
        buf += "!"
    assert bytes(buf) == b"hello"
    assert buf.length == 5
    check_invariants(buf)


def test_clear_is_idempotent(check_invariants):
    buf = CharBuffer(4, "abcd")
    buf.clear()
    state = (buf.length, bytes(buf._storage[:1]))
    buf.clear()
    assert (buf.length, bytes(buf._storage[:1])) == state == (0, b"\x00")
    check_invariants(buf)


def test_truncate_only_shortens():
    buf = CharBuffer(8, "hello")
    buf.truncate(10)
    assert bytes(buf) == b"hello"
    buf.truncate(5)
    assert bytes(buf) == b"hello"
    buf.truncate(2)
    assert bytes(buf) == b"he"
    assert buf.c_str().tobytes() == b"he\x00"
    with pytest.raises(RangeError):
        buf.truncate(-1)


def test_wipe_zeroes_whole_storage():
    buf = CharBuffer(4, "ab")
    buf.wipe()
    assert buf._storage == bytearray(5)
    assert buf.length == 2
    assert buf.capacity == 4
    assert bytes(buf) == b"\x00\x00"


def test_copy_raw_with_length_and_span(check_invariants):
    buf = CharBuffer(5)
    buf.copy_raw(b"abcdef", 3)
    assert bytes(buf) == b"abc"
    buf.copy_raw(b"abcdef", 2, 5)
    assert bytes(buf) == b"cde"
    buf.copy_raw(b"ab\x00cd", 5)
    assert bytes(buf) == b"ab\x00cd"
    assert buf.length == 5
    check_invariants(buf)


def test_copy_raw_rejects_bad_spans():
    buf = CharBuffer(4, "keep")
    with pytest.raises(RangeError):
        buf.copy_raw(b"abcdef", 0, 5)
    with pytest.raises(RangeError):
        buf.copy_raw(b"abcdef", 3, 2)
    with pytest.raises(RangeError):
        buf.copy_raw(b"ab", 0, 3)
    assert bytes(buf) == b"keep"


def test_substring_in_place(check_invariants):
    buf = CharBuffer.with_capacity_and_text(10, "abc")
    buf.substring(1, 3)
    assert bytes(buf) == b"bc"
    assert buf.length == 2
    assert buf.capacity == 10
    check_invariants(buf)

    buf.substring(0, 1)
    assert bytes(buf) == b"b"
    buf.substring(1, 1)
    assert buf.is_empty()


def test_substring_rejects_bad_spans():
    buf = CharBuffer(10, "abcdef")
    with pytest.raises(RangeError):
        buf.substring(3, 2)
    with pytest.raises(RangeError):
        buf.substring(0, 7)
    assert bytes(buf) == b"abcdef"


def test_substring_from_other_buffer(check_invariants):
    source = CharBuffer.from_text("abcdef")
    buf = CharBuffer(3, "zz")
    buf.substring_from(source, 1, 4)
    assert bytes(buf) == b"bcd"
    check_invariants(buf)

    with pytest.raises(RangeError):
        buf.substring_from(source, 0, 5)
    with pytest.raises(RangeError):
        buf.substring_from(source, 2, 7)
    with pytest.raises(RangeError):
        buf.substring_from(source, 3, 1)
    assert bytes(buf) == b"bcd"


def test_append_span_of_other(check_invariants):
    buf = CharBuffer(6, "ab")
    other = CharBuffer.from_text("xyz")
    buf.append(other, 1, 3)
    assert bytes(buf) == b"abyz"
    with pytest.raises(RangeError):
        buf.append(other)
    with pytest.raises(RangeError):
        buf.append(other, 2, 4)
    assert bytes(buf) == b"abyz"
    buf.append(other, 0, 2)
    assert bytes(buf) == b"abyzxy"
    check_invariants(buf)


def test_append_self():
    buf = CharBuffer(6, "abc")
    buf.append(buf)
    assert bytes(buf) == b"abcabc"


def test_append_raw():
    buf = CharBuffer(5, "a")
    buf.append_raw(b"1234", 2)
    buf.append_raw(b"1234", 1, 3)
    assert bytes(buf) == b"a1223"
    with pytest.raises(RangeError):
        buf.append_raw(b"x", 1)
    with pytest.raises(RangeError):
        buf.append_raw(b"1234", 3, 1)


def test_overwrite_inside_content_keeps_tail(check_invariants):
    buf = CharBuffer(10, "abcdef")
    buf.overwrite(1, "XY")
    assert bytes(buf) == b"aXYdef"
    assert buf.length == 6
    check_invariants(buf)


def test_overwrite_extends_past_length(check_invariants):
    buf = CharBuffer(10, "abcdef")
    buf.overwrite(4, "1234")
    assert bytes(buf) == b"abcd1234"
    buf.overwrite(8, CharBuffer.from_text("zz"))
    assert bytes(buf) == b"abcd1234zz"
    assert buf.length == buf.capacity
    check_invariants(buf)


def test_overwrite_with_source_span():
    buf = CharBuffer(5, "hello")
    buf.overwrite(0, CharBuffer.from_text("WORLD"), 1, 3)
    assert bytes(buf) == b"ORllo"
    buf.overwrite(3, "xyz", 2, 3)
    assert bytes(buf) == b"ORlzo"


def test_overwrite_rejects_out_of_range():
    buf = CharBuffer(3)
    with pytest.raises(RangeError) as exc:
        buf.overwrite(5, "x")
    assert exc.value.context["dst_start"] == 5

    buf = CharBuffer(10, "abcdefgh")
    with pytest.raises(RangeError):
        buf.overwrite(9, "abc")
    with pytest.raises(RangeError):
        buf.overwrite(8, "abc")
    with pytest.raises(RangeError):
        buf.overwrite(0, "abc", 2, 1)
    with pytest.raises(RangeError):
        buf.overwrite(0, "abc", 0, 4)
    assert bytes(buf) == b"abcdefgh"


def test_fill_to_capacity(check_invariants):
    buf = CharBuffer(4)
    buf.fill("x")
    assert bytes(buf) == b"xxxx"
    assert buf.length == buf.capacity
    check_invariants(buf)


def test_fill_to_target_length():
    buf = CharBuffer(6, "ab")
    buf.fill(ord("-"), 4)
    assert bytes(buf) == b"ab--"
    with pytest.raises(RangeError):
        buf.fill("-", 7)
    assert bytes(buf) == b"ab--"


def test_fill_with_target_below_length_truncates(check_invariants):
    buf = CharBuffer(6, "abcd")
    buf.fill(b"z", 2)
    assert bytes(buf) == b"ab"
    assert buf.length == 2
    check_invariants(buf)
    buf.fill("z", 2)
    assert bytes(buf) == b"ab"


def test_fill_rejects_non_byte_values():
    buf = CharBuffer(2)
    with pytest.raises(ValueError):
        buf.fill(256)
    with pytest.raises(ValueError):
        buf.fill("ab")


def test_index_access():
    buf = CharBuffer.from_text("abc")
    assert buf[0] == ord("a")
    assert buf.at(2) == ord("c")
    buf[1] = "Z"
    buf.set_at(0, 0x7A)
    assert bytes(buf) == b"zZc"
    for bad in (3, 10, -1):
        with pytest.raises(RangeError):
            buf[bad]
    with pytest.raises(IndexError):
        buf[3] = "x"
    with pytest.raises(TypeError):
        buf[0:2]


def test_index_access_on_empty_buffer():
    buf = CharBuffer(4)
    with pytest.raises(RangeError):
        buf.at(0)


def test_inplace_add_forms(check_invariants):
    buf = CharBuffer(6)
    buf += ord("a")
    buf += b"b"
    buf += CharBuffer.from_text("cd")
    buf += bytearray(b"e\x00ignored")
    assert bytes(buf) == b"abcde"
    buf += 0x66
    with pytest.raises(RangeError):
        buf += ord("g")
    assert bytes(buf) == b"abcdef"
    check_invariants(buf)


def test_assign_from_text_overwrites_fully():
    buf = CharBuffer(6, "abcdef")
    buf.assign("xy")
    assert bytes(buf) == b"xy"
    assert buf.c_str().tobytes() == b"xy\x00"
