"""Jcat files: a versioned collection of items, stored as gzipped JSON."""

from __future__ import annotations

import gzip
import json
import os
import zlib
from typing import Any, BinaryIO

from .common import (
    ExportFlags,
    ImportFlags,
    InvalidDataError,
    JcatError,
    NotFoundError,
    format_kv,
)
from .item import Item


class JcatFile:
    """A collection of items with the checksums and signatures for each."""

    def __init__(self) -> None:
        self.items: list[Item] = []
        self.version_major: int = 0
        self.version_minor: int = 1

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(version={self.version_major}.{self.version_minor}, "
            f"items={len(self.items)})"
        )

    def add_string(self, idt: int) -> str:
        """Describe the file and its items as indented key/value lines."""
        parts = [format_kv(idt, type(self).__name__, None)]
        if self.version_major > 0 or self.version_minor > 0:
            parts.append(
                format_kv(idt + 1, "Version", f"{self.version_major}.{self.version_minor}")
            )
        parts.extend(item.add_string(idt + 1) for item in self.items)
        return "".join(parts)

    def to_string(self) -> str:
        """Describe the file as text."""
        return self.add_string(0)

    def __str__(self) -> str:
        return self.to_string()

    def _import_object(self, obj: Any, flags: ImportFlags) -> None:
        if not isinstance(obj, dict):
            raise InvalidDataError("root node is not an object")
        for required in ("JcatVersionMajor", "JcatVersionMinor", "Items"):
            if required not in obj:
                raise InvalidDataError(f"failed to find {required}")
        try:
            version_major = int(obj["JcatVersionMajor"])
            version_minor = int(obj["JcatVersionMinor"])
        except (TypeError, ValueError) as exc:
            raise InvalidDataError(f"invalid version: {exc}") from exc
        nodes = obj["Items"]
        if not isinstance(nodes, list):
            raise InvalidDataError("failed to read Items array")
        items = []
        for node in nodes:
            if not isinstance(node, dict):
                raise InvalidDataError("failed to read object")
            items.append(Item.from_json(node, flags))

        self.version_major = version_major
        self.version_minor = version_minor
        for item in items:
            self.add_item(item)

    def _to_object(self, flags: ExportFlags) -> dict[str, Any]:
        obj: dict[str, Any] = {
            "JcatVersionMajor": self.version_major,
            "JcatVersionMinor": self.version_minor,
        }
        if self.items:
            obj["Items"] = [item.to_json(flags) for item in self.items]
        return obj

    def import_json(self, data: str | bytes, flags: ImportFlags = ImportFlags.NONE) -> None:
        """Import items from uncompressed JSON text."""
        try:
            obj = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidDataError(f"failed to parse JSON: {exc}") from exc
        self._import_object(obj, flags)

    def import_stream(self, stream: BinaryIO, flags: ImportFlags = ImportFlags.NONE) -> None:
        """Import items from a gzip-compressed binary stream."""
        try:
            with gzip.GzipFile(fileobj=stream, mode="rb") as handle:
                raw = handle.read()
        except (OSError, EOFError, zlib.error) as exc:
            raise InvalidDataError(f"failed to decompress: {exc}") from exc
        self.import_json(raw, flags)

    def import_file(
        self, path: str | os.PathLike, flags: ImportFlags = ImportFlags.NONE
    ) -> None:
        """Import items from a gzip-compressed file."""
        with open(path, "rb") as stream:
            self.import_stream(stream, flags)

    def export_json(self, flags: ExportFlags = ExportFlags.NONE) -> str:
        """Return the file as pretty-printed JSON text."""
        return json.dumps(
            self._to_object(flags), indent=2, separators=(",", " : "), ensure_ascii=False
        )

    def export_stream(self, stream: BinaryIO, flags: ExportFlags = ExportFlags.NONE) -> None:
        """Write the file as gzip-compressed compact JSON to a binary stream."""
        text = json.dumps(self._to_object(flags), separators=(",", ":"), ensure_ascii=False)
        with gzip.GzipFile(fileobj=stream, mode="wb") as handle:
            handle.write(text.encode("utf-8"))

    def export_file(
        self, path: str | os.PathLike, flags: ExportFlags = ExportFlags.NONE
    ) -> None:
        """Write the file as gzip-compressed JSON to ``path``, replacing it."""
        with open(path, "wb") as stream:
            self.export_stream(stream, flags)

    def get_item_by_id(self, item_id: str) -> Item:
        """Find an item by ID, falling back to alias IDs."""
        if item_id is None:
            raise ValueError("item ID must not be None")
        for item in self.items:
            if item.id == item_id:
                return item
        for item in self.items:
            if item_id in item.alias_ids:
                return item
        raise NotFoundError(f"failed to find {item_id}")

    def get_item_default(self) -> Item:
        """Return the only item; fails if there are none or several."""
        if not self.items:
            raise NotFoundError("no items found")
        if len(self.items) > 1:
            raise JcatError("multiple items found, no default possible")
        return self.items[0]

    def add_item(self, item: Item) -> None:
        """Add an item to the file."""
        if not isinstance(item, Item):
            raise TypeError("expected an Item")
        self.items.append(item)