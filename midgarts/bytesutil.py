"""Small helpers for reading little-endian binary streams."""

from __future__ import annotations

from typing import BinaryIO


def _build_windows1252_table() -> tuple[str, ...]:
    table = []
    for value in range(256):
        try:
            table.append(bytes([value]).decode("cp1252"))
        except UnicodeDecodeError:
            # Code points left undefined by the code page map to the
            # matching C1 control character.
            table.append(chr(value))
    return tuple(table)


_WINDOWS1252 = _build_windows1252_table()


def decode_windows1252(data: bytes) -> str:
    """Decode bytes as Windows-1252, mapping undefined bytes to C1 controls."""
    return "".join(_WINDOWS1252[value] for value in data)


def skip_bytes(stream: BinaryIO, n: int) -> None:
    """Advance the stream by up to ``n`` bytes; stops quietly at end of data."""
    stream.read(n)


def read_string(stream: BinaryIO, length: int) -> str:
    """Read a fixed-size, NUL-padded field and return the text before the first NUL.

    The field is decoded as Windows-1252. When fewer than ``length`` bytes
    remain, the remaining bytes are consumed and an empty string is returned.
    """
    raw = stream.read(length)
    if len(raw) < length:
        return ""
    return decode_windows1252(raw.split(b"\x00", 1)[0])