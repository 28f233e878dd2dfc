import base64

import pytest

from jcat.bt_checkpoint import BtCheckpoint
from jcat.common import InvalidDataError, format_kv, format_kx

PUBKEY = bytes(range(32))
SIG_HASH = b"\x01\x02\x03\x04"
SIG_BODY = bytes(range(100, 164))


def _checkpoint(
    origin="example.com/log",
    size="42",
    pubkey=PUBKEY,
    dash="\u2014",
    sig=SIG_HASH + SIG_BODY,
    trailing="",
):
    lines = [
        origin,
        size,
        base64.b64encode(pubkey).decode(),
        "",
        f"{dash} example.com/log {base64.b64encode(sig).decode()}",
        trailing,
    ]
    return "\n".join(lines).encode("utf-8")


def test_parse_valid():
    cp = BtCheckpoint.parse(_checkpoint())
    assert cp.origin == "example.com/log"
    assert cp.identity == "example.com/log"
    assert cp.log_size == 42
    assert cp.pubkey == PUBKEY
    assert cp.signature == SIG_BODY
    assert cp.hash == "01020304"


def test_payload_is_first_three_lines():
    raw = _checkpoint()
    cp = BtCheckpoint.parse(raw)
    assert cp.payload == b"\n".join(raw.split(b"\n")[:3]) + b"\n"


def test_parse_stops_at_nul():
    cp = BtCheckpoint.parse(_checkpoint() + b"\0garbage\n\n")
    assert cp.log_size == 42


def test_wrong_line_count():
    with pytest.raises(InvalidDataError, match="lines"):
        BtCheckpoint.parse(b"only\ntwo")


def test_extra_line_rejected():
    with pytest.raises(InvalidDataError, match="lines"):
        BtCheckpoint.parse(_checkpoint(trailing="x\n"))


def test_bad_pubkey_size():
    with pytest.raises(InvalidDataError, match="pubkeysz"):
        BtCheckpoint.parse(_checkpoint(pubkey=PUBKEY[:31]))


def test_bad_dash():
    with pytest.raises(InvalidDataError, match="sections"):
        BtCheckpoint.parse(_checkpoint(dash="-"))


def test_bad_signature_size():
    with pytest.raises(InvalidDataError, match="sigsz"):
        BtCheckpoint.parse(_checkpoint(sig=SIG_HASH + SIG_BODY[:10]))


def test_non_numeric_size_is_zero():
    cp = BtCheckpoint.parse(_checkpoint(size="abc"))
    assert cp.log_size == 0
    assert "TreeSize" not in cp.to_string()


def test_to_string():
    cp = BtCheckpoint.parse(_checkpoint())
    text = cp.to_string()
    assert text.startswith(format_kv(0, "BtCheckpoint", None))
    assert format_kv(1, "Origin", "example.com/log") in text
    assert format_kv(1, "OriginSignature", "example.com/log") in text
    assert format_kx(1, "TreeSize", 42) in text
    assert format_kx(1, "BlobPubkeySz", len(PUBKEY)) in text
    assert format_kx(1, "BlobSignatureSz", len(SIG_BODY)) in text
    assert format_kx(1, "BlobPayloadSz", len(cp.payload)) in text


def test_empty_checkpoint_to_string():
    assert BtCheckpoint().to_string() == format_kv(0, "BtCheckpoint", None)