"""Items: a named target with the blobs that check or sign it."""

from __future__ import annotations

from typing import Any

from .blob import Blob, BlobKind, blob_kind_to_string
from .common import ExportFlags, ImportFlags, InvalidDataError, format_kv


class Item:
    """An identified item, typically a file, carrying checksums and signatures."""

    def __init__(self, item_id: str) -> None:
        if item_id is None:
            raise ValueError("item ID must not be None")
        self.id: str = item_id
        self.blobs: list[Blob] = []
        self.alias_ids: list[str] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, blobs={len(self.blobs)})"

    def add_string(self, idt: int) -> str:
        """Describe the item and its blobs as indented key/value lines."""
        parts = [
            format_kv(idt, type(self).__name__, None),
            format_kv(idt + 1, "ID", self.id),
        ]
        parts.extend(format_kv(idt + 1, "AliasId", alias) for alias in self.alias_ids)
        parts.extend(blob.add_string(idt + 1) for blob in self.blobs)
        return "".join(parts)

    def to_string(self) -> str:
        """Describe the item as text."""
        return self.add_string(0)

    def __str__(self) -> str:
        return self.to_string()

    @classmethod
    def from_json(cls, obj: dict[str, Any], flags: ImportFlags = ImportFlags.NONE) -> Item:
        """Build an item from its JSON object form."""
        for required in ("Id", "Blobs"):
            if required not in obj:
                raise InvalidDataError(f"failed to find {required}")
        item_id = obj["Id"]
        if not isinstance(item_id, str):
            raise InvalidDataError("Id is not a string")
        item = cls(item_id)

        blobs = obj["Blobs"]
        if not isinstance(blobs, list):
            raise InvalidDataError("failed to read Blobs array")
        for node in blobs:
            if not isinstance(node, dict):
                raise InvalidDataError("failed to read object")
            item.add_blob(Blob.from_json(node, flags))

        if "AliasIds" in obj:
            aliases = obj["AliasIds"]
            if not isinstance(aliases, list):
                raise InvalidDataError("failed to read AliasIds array")
            for node in aliases:
                if not isinstance(node, str):
                    raise InvalidDataError("failed to read AliasIds value")
                item.add_alias_id(node)
        return item

    def to_json(self, flags: ExportFlags = ExportFlags.NONE) -> dict[str, Any]:
        """Return the JSON object form of the item."""
        obj: dict[str, Any] = {"Id": self.id}
        if self.alias_ids:
            obj["AliasIds"] = list(self.alias_ids)
        if self.blobs:
            obj["Blobs"] = [blob.to_json(flags) for blob in self.blobs]
        return obj

    def get_blobs_by_kind(self, kind: int) -> list[Blob]:
        """Return all blobs of the given kind, in order."""
        if kind == BlobKind.UNKNOWN:
            raise ValueError("blob kind must not be UNKNOWN")
        return [blob for blob in self.blobs if blob.kind == kind]

    def get_blob_by_kind(self, kind: int) -> Blob:
        """Return the single blob of the given kind."""
        matches = self.get_blobs_by_kind(kind)
        if not matches:
            raise InvalidDataError(
                f"no existing checksum of type {blob_kind_to_string(kind)}"
            )
        if len(matches) > 1:
            raise InvalidDataError(f"multiple checksums of type {blob_kind_to_string(kind)}")
        return matches[0]

    def add_blob(self, blob: Blob) -> None:
        """Add a blob, replacing one with the same kind, target and AppStream ID."""
        for existing in self.blobs:
            if (
                existing.kind == blob.kind
                and existing.target == blob.target
                and existing.appstream_id == blob.appstream_id
            ):
                self.blobs.remove(existing)
                break
        self.blobs.append(blob)

    def add_alias_id(self, alias_id: str) -> None:
        """Add an alias ID unless it is already present."""
        if alias_id not in self.alias_ids:
            self.alias_ids.append(alias_id)

    def remove_alias_id(self, alias_id: str) -> None:
        """Remove an alias ID if present."""
        if alias_id in self.alias_ids:
            self.alias_ids.remove(alias_id)

    def has_target(self) -> bool:
        """Return True if any blob targets an internal checksum."""
        return any(blob.target != BlobKind.UNKNOWN for blob in self.blobs)