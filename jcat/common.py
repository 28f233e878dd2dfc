"""Shared errors, flags, text formatting, bit helpers and file helpers."""

from __future__ import annotations

import enum
import logging
import os
import secrets
import unicodedata
from pathlib import Path

_log = logging.getLogger(__name__)

_ALIGN = 25
_MASK64 = (1 << 64) - 1


class JcatError(Exception):
    """Base class for all errors raised by this package."""


class InvalidDataError(JcatError):
    """The data was malformed or could not be verified."""


class NotSupportedError(JcatError):
    """The requested operation is not supported or not allowed."""


class NotFoundError(JcatError):
    """The requested object could not be found."""


class ImportFlags(enum.IntFlag):
    """Flags used when importing."""

    NONE = 0


class ExportFlags(enum.IntFlag):
    """Flags used when exporting."""

    NONE = 0
    NO_TIMESTAMP = 1 << 1


class VerifyFlags(enum.IntFlag):
    """Flags used when verifying."""

    NONE = 0
    DISABLE_TIME_CHECKS = 1 << 2
    REQUIRE_CHECKSUM = 1 << 3
    REQUIRE_SIGNATURE = 1 << 4


class SignFlags(enum.IntFlag):
    """Flags used when signing."""

    NONE = 0
    ADD_TIMESTAMP = 1 << 0
    ADD_CERT = 1 << 1


def _is_zero_width(ch: str) -> bool:
    cp = ord(ch)
    if cp == 0x00AD:
        return False
    if cp == 0x200B or 0x1160 <= cp < 0x1200:
        return True
    return unicodedata.category(ch) in ("Mn", "Me", "Cf")


def _strwidth(text: str) -> int:
    width = 0
    for ch in text:
        if unicodedata.east_asian_width(ch) in ("W", "F"):
            width += 2
        elif not _is_zero_width(ch):
            width += 1
    return width


def format_kv(idt: int, key: str | None, value: str | None) -> str:
    """Format a key/value pair indented by ``idt`` levels, values aligned."""
    if idt * 2 >= _ALIGN:
        raise ValueError(f"indent {idt} too deep")
    if key is None:
        return ""
    parts = ["  " * idt]
    if key:
        parts.append(f"{key}:")
        keysz = idt * 2 + _strwidth(key) + 1
    else:
        keysz = idt * 2
    if value is None:
        parts.append("\n")
        return "".join(parts)
    for index, line in enumerate(value.split("\n")):
        pad = max(_ALIGN - keysz, 0) if index == 0 else _ALIGN
        parts.append(" " * pad)
        parts.append(line)
        parts.append("\n")
    return "".join(parts)


def format_kx(idt: int, key: str | None, value: int) -> str:
    """Format a key with an integer value shown in hexadecimal."""
    return format_kv(idt, key, f"0x{value:x}")


def bits_ones_count64(val: int) -> int:
    """Count the bits set in a 64-bit value."""
    return bin(val & _MASK64).count("1")


def bits_trailing_zeros64(val: int) -> int:
    """Count the trailing zero bits of a 64-bit value; 64 for zero."""
    val &= _MASK64
    if val == 0:
        return 64
    return (val & -val).bit_length() - 1


def bits_length64(val: int) -> int:
    """Return the minimum number of bits needed to represent a 64-bit value."""
    return (val & _MASK64).bit_length()


def mkdir_parent(filename: str | os.PathLike) -> None:
    """Create the parent directory of ``filename`` if it does not exist."""
    Path(filename).parent.mkdir(parents=True, exist_ok=True)


def set_contents_bytes(filename: str | os.PathLike, data: bytes, mode: int = 0o666) -> None:
    """Atomically replace ``filename`` with ``data``, creating parents as needed."""
    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    _log.debug("writing %s with %d bytes", path, len(data))
    tmp = path.with_name(f".{path.name}.{secrets.token_hex(4)}")
    fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def get_contents_bytes(filename: str | os.PathLike) -> bytes:
    """Read the whole of ``filename``."""
    data = Path(filename).read_bytes()
    _log.debug("reading %s with %d bytes", filename, len(data))
    return data