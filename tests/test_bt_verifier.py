import base64

import pytest

from jcat.bt_verifier import BtVerifier
from jcat.common import InvalidDataError

KEY = bytes(range(32))


def _encode(name: str, hash_hint: str, alg: int, key: bytes) -> bytes:
    payload = base64.b64encode(bytes([alg]) + key).decode("ascii")
    return f"{name}+{hash_hint}+{payload}".encode("ascii")


def test_parse_fields():
    verifier = BtVerifier.parse(_encode("log.example.com", "c0ffee01", 1, KEY))
    assert verifier.name == "log.example.com"
    assert verifier.hash == "c0ffee01"
    assert verifier.alg == 1
    assert verifier.key == KEY


def test_parse_stops_at_nul():
    blob = _encode("log.example.com", "c0ffee01", 1, KEY) + b"\0trailing+junk"
    verifier = BtVerifier.parse(blob)
    assert verifier.key == KEY


def test_parse_key_may_contain_plus():
    # a key whose base64 contains '+' must stay in the third section
    key = bytes([0xFB] * 32)
    blob = _encode("origin", "abcd", 1, key)
    assert b"+" in blob.split(b"+", 2)[2]
    assert BtVerifier.parse(blob).key == key


@pytest.mark.parametrize("blob", [b"", b"only-name", b"name+hash"])
def test_parse_too_few_sections(blob):
    with pytest.raises(InvalidDataError, match="invalid pubkey format"):
        BtVerifier.parse(blob)


@pytest.mark.parametrize("size", [0, 31, 33])
def test_parse_wrong_key_size(size):
    with pytest.raises(InvalidDataError, match="invalid pubkey format"):
        BtVerifier.parse(_encode("origin", "abcd", 1, bytes(size)))


def test_to_string_lists_fields():
    verifier = BtVerifier.parse(_encode("log.example.com", "c0ffee01", 1, KEY))
    lines = verifier.to_string().splitlines()
    assert lines[0] == "BtVerifier:"
    assert lines[1].startswith("  Name:") and lines[1].endswith("log.example.com")
    assert lines[2].startswith("  Hash:") and lines[2].endswith("c0ffee01")
    assert lines[3].startswith("  AlgoId:") and lines[3].endswith("0x1")
    assert lines[4].startswith("  KeySz:") and lines[4].endswith("0x20")


def test_to_string_omits_zero_alg():
    verifier = BtVerifier.parse(_encode("origin", "abcd", 0, KEY))
    assert verifier.alg == 0
    assert "AlgoId" not in verifier.to_string()


def test_empty_verifier_string():
    assert BtVerifier().to_string() == "BtVerifier:\n"