"""Binary transparency checkpoints."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

from .common import InvalidDataError, format_kv, format_kx

_DASH = "\u2014".encode("utf-8")
_LEADING_NUMBER = re.compile(rb"\s*\+?(\d+)")


def _b64decode(text: bytes) -> bytes:
    cleaned = bytes(c for c in text if c not in b" \t\r\n")
    cleaned += b"=" * (-len(cleaned) % 4)
    try:
        return base64.b64decode(cleaned)
    except (binascii.Error, ValueError):
        return b""


def _parse_size(text: bytes) -> int:
    match = _LEADING_NUMBER.match(text)
    return int(match.group(1)) if match else 0


@dataclass
class BtCheckpoint:
    """A signed checkpoint of a transparency log."""

    origin: str | None = None
    identity: str | None = None
    hash: str | None = None
    log_size: int = 0
    pubkey: bytes | None = None
    signature: bytes | None = None
    payload: bytes | None = None

    @classmethod
    def parse(cls, blob: bytes) -> BtCheckpoint:
        """Parse a checkpoint from its text form."""
        text = bytes(blob).split(b"\0", 1)[0]
        lines = text.split(b"\n")
        if len(lines) != 6:
            raise InvalidDataError(f"invalid checkpoint format, lines {len(lines)}")

        self = cls()
        self.payload = b"".join(line + b"\n" for line in lines[:3])
        self.origin = lines[0].decode("utf-8", errors="replace")
        self.log_size = _parse_size(lines[1])

        pubkey = _b64decode(lines[2])
        if len(pubkey) != 32:
            raise InvalidDataError(f"invalid pubkey format, pubkeysz 0x{len(pubkey):x}")
        self.pubkey = pubkey

        sections = lines[4].split(b" ", 2)
        if len(sections) != 3 or sections[0] != _DASH:
            raise InvalidDataError(f"invalid checkpoint format, sections {len(sections):x}")
        self.identity = sections[1].decode("utf-8", errors="replace")
        sig = _b64decode(sections[2])
        if len(sig) != 64 + 4:
            raise InvalidDataError(f"invalid pubkey format, sigsz was 0x{len(sig):x}")
        self.hash = sig[:4].hex()
        self.signature = sig[4:]
        return self

    def add_string(self, idt: int) -> str:
        """Describe the checkpoint as indented key/value lines."""
        parts = [format_kv(idt, type(self).__name__, None)]
        if self.origin is not None:
            parts.append(format_kv(idt + 1, "Origin", self.origin))
        if self.identity is not None:
            parts.append(format_kv(idt + 1, "OriginSignature", self.identity))
        if self.log_size != 0:
            parts.append(format_kx(idt + 1, "TreeSize", self.log_size))
        if self.pubkey is not None:
            parts.append(format_kx(idt + 1, "BlobPubkeySz", len(self.pubkey)))
        if self.signature is not None:
            parts.append(format_kx(idt + 1, "BlobSignatureSz", len(self.signature)))
        if self.payload is not None:
            parts.append(format_kx(idt + 1, "BlobPayloadSz", len(self.payload)))
        return "".join(parts)

    def to_string(self) -> str:
        """Describe the checkpoint as text."""
        return self.add_string(0)

    def __str__(self) -> str:
        return self.to_string()