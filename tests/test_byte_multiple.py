import pytest

from snifftrace.byte_multiple import ByteMultiple, from_char_to_multiple


def test_interpret_suffix_correctly():
    assert from_char_to_multiple("B") == ByteMultiple.B
    assert from_char_to_multiple("k") == ByteMultiple.KB
    assert from_char_to_multiple("M") == ByteMultiple.MB
    assert from_char_to_multiple("g") == ByteMultiple.GB


def test_interpret_unknown_suffix_correctly():
    assert from_char_to_multiple("T") == ByteMultiple.B
    assert from_char_to_multiple("p") == ByteMultiple.B


@pytest.mark.parametrize(
    "multiple, expected",
    [
        (ByteMultiple.B, 1),
        (ByteMultiple.KB, 1_000),
        (ByteMultiple.MB, 1_000_000),
        (ByteMultiple.GB, 1_000_000_000),
    ],
)
def test_multiplier(multiple, expected):
    assert multiple.get_multiplier() == expected


@pytest.mark.parametrize(
    "multiple, expected",
    [
        (ByteMultiple.B, ""),
        (ByteMultiple.KB, "K"),
        (ByteMultiple.MB, "M"),
        (ByteMultiple.GB, "G"),
    ],
)
def test_char(multiple, expected):
    assert multiple.get_char() == expected


def test_char_round_trip():
    for multiple in (ByteMultiple.KB, ByteMultiple.MB, ByteMultiple.GB):
        assert from_char_to_multiple(multiple.get_char()) == multiple
        assert from_char_to_multiple(multiple.get_char().lower()) == multiple


def test_display_is_name():
    assert str(from_char_to_multiple("k")) == "KB"
    assert str(from_char_to_multiple("G")) == "GB"
    assert str(from_char_to_multiple("x")) == "B"