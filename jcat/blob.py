"""Blobs: checksums and signatures attached to an item."""

from __future__ import annotations

import base64
import binascii
import enum
import time
from datetime import datetime, timezone
from typing import Any

from .common import ExportFlags, ImportFlags, InvalidDataError, format_kv


class BlobKind(enum.IntEnum):
    """The kind of data stored in a blob."""

    UNKNOWN = 0
    SHA256 = 1
    GPG = 2
    PKCS7 = 3
    SHA1 = 4
    BT_MANIFEST = 5
    BT_CHECKPOINT = 6
    BT_INCLUSION_PROOF = 7
    BT_VERIFIER = 8
    ED25519 = 9
    SHA512 = 10
    BT_LOGINDEX = 11


class BlobMethod(enum.IntEnum):
    """How a blob is verified."""

    UNKNOWN = 0
    CHECKSUM = 1
    SIGNATURE = 2


class BlobFlags(enum.IntFlag):
    """Flags describing the blob data."""

    NONE = 0
    IS_UTF8 = 1 << 0


_KIND_NAMES = {
    BlobKind.GPG: "gpg",
    BlobKind.PKCS7: "pkcs7",
    BlobKind.SHA256: "sha256",
    BlobKind.SHA1: "sha1",
    BlobKind.BT_MANIFEST: "bt-manifest",
    BlobKind.BT_CHECKPOINT: "bt-checkpoint",
    BlobKind.BT_INCLUSION_PROOF: "bt-inclusion-proof",
    BlobKind.BT_VERIFIER: "bt-verifier",
    BlobKind.ED25519: "ed25519",
    BlobKind.SHA512: "sha512",
    BlobKind.BT_LOGINDEX: "bt-logindex",
}
_KINDS_BY_NAME = {name: kind for kind, name in _KIND_NAMES.items()}

_KIND_EXTS = {
    BlobKind.GPG: "asc",
    BlobKind.PKCS7: "p7b",
    BlobKind.SHA256: "sha256",
    BlobKind.SHA1: "sha1",
    BlobKind.BT_MANIFEST: "btmanifest",
    BlobKind.BT_CHECKPOINT: "btcheckpoint",
    BlobKind.BT_INCLUSION_PROOF: "btinclusionproof",
    BlobKind.BT_VERIFIER: "btverifier",
    BlobKind.ED25519: "ed25519",
    BlobKind.SHA512: "sha512",
    BlobKind.BT_LOGINDEX: "btlogindex",
}


def _coerce_kind(value: int) -> BlobKind | int:
    """Return a BlobKind, keeping unknown integers for forward compatibility."""
    try:
        return BlobKind(value)
    except ValueError:
        return int(value)


def blob_kind_from_string(kind: str | None) -> BlobKind:
    """Convert a kind name to a BlobKind, or UNKNOWN if not recognised."""
    return _KINDS_BY_NAME.get(kind, BlobKind.UNKNOWN)


def blob_kind_to_string(kind: int) -> str | None:
    """Convert a kind to its name, or None if unknown."""
    return _KIND_NAMES.get(kind)


def blob_kind_to_filename_ext(kind: int) -> str | None:
    """Return the usual file extension for a kind, or None if unknown."""
    return _KIND_EXTS.get(kind)


class Blob:
    """A checksum or signature of some kind."""

    def __init__(self, kind: int, data: bytes, flags: BlobFlags = BlobFlags.NONE) -> None:
        self.kind: BlobKind | int = _coerce_kind(kind)
        self.data: bytes = bytes(data)
        self.flags: BlobFlags = BlobFlags(flags)
        self.target: BlobKind | int = BlobKind.UNKNOWN
        self.appstream_id: str | None = None
        self.timestamp: int = int(time.time())

    @classmethod
    def new_utf8(cls, kind: int, data: str) -> Blob:
        """Create a blob holding text."""
        return cls(kind, data.encode("utf-8"), BlobFlags.IS_UTF8)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind!r}, flags={self.flags!r}, "
            f"size={len(self.data)})"
        )

    def data_as_string(self) -> str:
        """Return the data in printable form: text, or base64 for binary."""
        if self.flags & BlobFlags.IS_UTF8:
            return self.data.decode("utf-8", errors="replace")
        return base64.b64encode(self.data).decode("ascii")

    def add_string(self, idt: int) -> str:
        """Describe the blob as indented key/value lines."""
        parts = [
            format_kv(idt, type(self).__name__, None),
            format_kv(idt + 1, "Kind", blob_kind_to_string(self.kind)),
        ]
        if self.target != BlobKind.UNKNOWN:
            parts.append(format_kv(idt + 1, "Target", blob_kind_to_string(self.target)))
        parts.append(
            format_kv(idt + 1, "Flags", "is-utf8" if self.flags & BlobFlags.IS_UTF8 else "none")
        )
        if self.appstream_id is not None:
            parts.append(format_kv(idt + 1, "AppstreamId", self.appstream_id))
        if self.timestamp != 0:
            when = datetime.fromtimestamp(self.timestamp, timezone.utc)
            parts.append(format_kv(idt + 1, "Timestamp", when.strftime("%Y-%m-%dT%H:%M:%SZ")))
        parts.append(format_kv(idt + 1, "Size", f"0x{len(self.data):x}"))
        parts.append(format_kv(idt + 1, "Data", self.data_as_string()))
        return "".join(parts)

    def to_string(self) -> str:
        """Describe the blob as text."""
        return self.add_string(0)

    def __str__(self) -> str:
        return self.to_string()

    @classmethod
    def from_json(cls, obj: dict[str, Any], flags: ImportFlags = ImportFlags.NONE) -> Blob:
        """Build a blob from its JSON object form."""
        for required in ("Kind", "Data", "Flags"):
            if required not in obj:
                raise InvalidDataError(f"failed to find {required}")
        blob_flags = BlobFlags(int(obj["Flags"]))
        data_str = obj["Data"]
        if not isinstance(data_str, str):
            raise InvalidDataError("Data is not a string")
        if blob_flags & BlobFlags.IS_UTF8:
            data = data_str.encode("utf-8")
        else:
            try:
                data = base64.b64decode(data_str)
            except (binascii.Error, ValueError) as exc:
                raise InvalidDataError(f"failed to decode Data: {exc}") from exc
        blob = cls(int(obj["Kind"]), data, blob_flags)
        if "Timestamp" in obj:
            blob.timestamp = int(obj["Timestamp"])
        if "AppstreamId" in obj:
            blob.appstream_id = obj["AppstreamId"]
        if "Target" in obj:
            blob.target = _coerce_kind(int(obj["Target"]))
        return blob

    def to_json(self, flags: ExportFlags = ExportFlags.NONE) -> dict[str, Any]:
        """Return the JSON object form of the blob."""
        obj: dict[str, Any] = {"Kind": int(self.kind)}
        if self.target != BlobKind.UNKNOWN:
            obj["Target"] = int(self.target)
        obj["Flags"] = int(self.flags)
        if self.appstream_id is not None:
            obj["AppstreamId"] = self.appstream_id
        if self.timestamp > 0 and not flags & ExportFlags.NO_TIMESTAMP:
            obj["Timestamp"] = self.timestamp
        obj["Data"] = self.data_as_string()
        return obj