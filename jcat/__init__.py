"""Read and write Jcat catalogs of checksums and detached signatures."""

__version__ = "0.2.2"

__all__ = [
    "blob",
    "bt_checkpoint",
    "bt_verifier",
    "common",
    "file",
    "item",
]