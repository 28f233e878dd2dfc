# jcat

`jcat` reads and writes Jcat files: gzip-compressed JSON catalogs that hold,
for each named item, a set of checksums and detached signatures, each tagged
with its kind (SHA-1, SHA-256, SHA-512, GPG, PKCS-7, ED25519 and the
binary-transparency kinds). It also parses binary-transparency checkpoints and
verifier keys. It needs nothing beyond the Python standard library.

## Installing

```
pip install jcat
```

## The pieces

- `jcat.file.JcatFile` holds a list of `Item`s and a format version
  (`version_major`, `version_minor`, 0.1 by default). It reads and writes them
  as plain JSON (`import_json`, `export_json`), as a gzip stream
  (`import_stream`, `export_stream`) or as a file (`import_file`,
  `export_file`). `get_item_by_id` finds an item by ID and then by alias ID;
  `get_item_default` returns the only item.
- `jcat.item.Item` has an `id`, optional `alias_ids` and a list of `blobs`.
  `add_blob` replaces any blob that has the same kind, target and AppStream
  ID. `get_blobs_by_kind`, `get_blob_by_kind` and `has_target` look blobs up.
- `jcat.blob.Blob` is one checksum or signature, tagged with a `BlobKind`,
  with optional `target`, `appstream_id` and `timestamp`.
  `Blob.new_utf8` creates a text blob; binary blobs are stored as base64 in
  the JSON. `blob_kind_from_string`, `blob_kind_to_string` and
  `blob_kind_to_filename_ext` convert kinds to and from names.
- `jcat.bt_checkpoint.BtCheckpoint.parse` reads a six-line signed log
  checkpoint; `jcat.bt_verifier.BtVerifier.parse` reads a
  `name+hash+base64` verifier key.
- `jcat.common` holds the flag enums (`ImportFlags`, `ExportFlags`,
  `VerifyFlags`, `SignFlags`), the text formatting helpers `format_kv` and
  `format_kx`, 64-bit helpers (`bits_ones_count64`, `bits_trailing_zeros64`,
  `bits_length64`) and file helpers (`mkdir_parent`, `set_contents_bytes`,
  `get_contents_bytes`).

Every object has a `to_string()` that describes it as aligned key/value lines.

Errors are raised as `jcat.common.JcatError` or its subclasses
`InvalidDataError`, `NotSupportedError` and `NotFoundError`.

## Example

```python
import io

from jcat.blob import Blob, BlobKind
from jcat.common import ExportFlags, ImportFlags
from jcat.file import JcatFile
from jcat.item import Item

item = Item("firmware.bin")
item.add_blob(Blob.new_utf8(BlobKind.SHA256, "a" * 64))

catalog = JcatFile()
catalog.add_item(item)
print(catalog.export_json(ExportFlags.NO_TIMESTAMP))

buf = io.BytesIO()
catalog.export_stream(buf, ExportFlags.NONE)
buf.seek(0)

loaded = JcatFile()
loaded.import_stream(buf, ImportFlags.NONE)
print(loaded.get_item_by_id("firmware.bin").to_string())
```

## What it does not do

This package stores and describes checksums and signatures; it does not
compute or check them. There are no signing or verification engines, no
keyring handling and no command-line tool: to verify a file you compare its
digest with the blob's data yourself.

## Running the tests

```
pip install -e ".[test]"
pytest
```