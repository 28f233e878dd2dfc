import pytest

from jcat.common import (
    bits_length64,
    bits_ones_count64,
    bits_trailing_zeros64,
    format_kv,
    format_kx,
    get_contents_bytes,
    mkdir_parent,
    set_contents_bytes,
)


def test_format_kv_aligns_value_at_column_25():
    out = format_kv(0, "Kind", "sha256")
    assert out.endswith("sha256\n")
    assert out.index("sha256") == 25
    assert out.startswith("Kind:")


def test_format_kv_indent():
    out = format_kv(2, "Kind", "gpg")
    assert out.startswith("    Kind:")
    assert out.index("gpg") == 25


def test_format_kv_multiline_value():
    out = format_kv(1, "Data", "first\nsecond")
    lines = out.split("\n")
    assert lines[0].index("first") == 25
    assert lines[1] == " " * 25 + "second"
    assert out.endswith("\n")


def test_format_kv_no_value():
    assert format_kv(1, "JcatItem", None) == "  JcatItem:\n"


def test_format_kv_no_key():
    assert format_kv(0, None, "value") == ""


def test_format_kv_long_key_has_no_padding():
    key = "K" * 30
    out = format_kv(0, key, "v")
    assert out == key + ":v\n"


def test_format_kv_too_deep():
    with pytest.raises(ValueError):
        format_kv(13, "Kind", "x")


def test_format_kx_hex():
    out = format_kx(0, "Size", 255)
    assert out.rstrip("\n").endswith("0xff")


@pytest.mark.parametrize("n", range(64))
def test_bits_single_bit(n):
    assert bits_trailing_zeros64(1 << n) == n
    assert bits_length64(1 << n) == n + 1
    assert bits_ones_count64(1 << n) == 1


@pytest.mark.parametrize("n", range(65))
def test_bits_ones_count_of_low_mask(n):
    assert bits_ones_count64((1 << n) - 1) == n


def test_bits_zero():
    assert bits_trailing_zeros64(0) == 64
    assert bits_length64(0) == 0
    assert bits_ones_count64(0) == 0


def test_contents_round_trip_creates_parents(tmp_path):
    target = tmp_path / "a" / "b" / "file.bin"
    set_contents_bytes(target, b"\x00\x01payload", 0o644)
    assert get_contents_bytes(target) == b"\x00\x01payload"


def test_contents_replaces_existing(tmp_path):
    target = tmp_path / "file.bin"
    set_contents_bytes(target, b"old", 0o644)
    set_contents_bytes(target, b"new", 0o644)
    assert get_contents_bytes(target) == b"new"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["file.bin"]


def test_get_contents_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        get_contents_bytes(tmp_path / "missing")


def test_mkdir_parent(tmp_path):
    target = tmp_path / "x" / "y" / "file"
    mkdir_parent(target)
    assert (tmp_path / "x" / "y").is_dir()
    assert not target.exists()
    mkdir_parent(target)
    assert (tmp_path / "x" / "y").is_dir()