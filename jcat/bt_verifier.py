"""Binary transparency verifier keys."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from .common import InvalidDataError, format_kv, format_kx


def _b64decode(text: str) -> bytes:
    cleaned = "".join(c for c in text if c not in " \t\r\n")
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        return base64.b64decode(cleaned)
    except (binascii.Error, ValueError):
        return b""


@dataclass
class BtVerifier:
    """A log verifier key of the form ``name+hash+base64(alg||pubkey)``."""

    name: str | None = None
    hash: str | None = None
    alg: int = 0
    key: bytes | None = None

    @classmethod
    def parse(cls, blob: bytes) -> BtVerifier:
        """Parse a verifier from its text form."""
        text = bytes(blob).split(b"\0", 1)[0].decode("utf-8", errors="replace")
        sections = text.split("+", 2)
        if len(sections) != 3:
            raise InvalidDataError("invalid pubkey format")
        raw = _b64decode(sections[2])
        if len(raw) != 33:
            raise InvalidDataError("invalid pubkey format")
        return cls(name=sections[0], hash=sections[1], alg=raw[0], key=raw[1:])

    def add_string(self, idt: int) -> str:
        """Describe the verifier as indented key/value lines."""
        parts = [format_kv(idt, type(self).__name__, None)]
        if self.name is not None:
            parts.append(format_kv(idt + 1, "Name", self.name))
        if self.hash is not None:
            parts.append(format_kv(idt + 1, "Hash", self.hash))
        if self.alg != 0:
            parts.append(format_kx(idt + 1, "AlgoId", self.alg))
        if self.key is not None:
            parts.append(format_kx(idt + 1, "KeySz", len(self.key)))
        return "".join(parts)

    def to_string(self) -> str:
        """Describe the verifier as text."""
        return self.add_string(0)

    def __str__(self) -> str:
        return self.to_string()