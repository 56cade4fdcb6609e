"""Entries stored in a GRF archive and the decoding of their payloads."""

from __future__ import annotations

import enum
import struct
import zlib
from dataclasses import dataclass

from midgarts.fileformat.des import decode_full, decode_header

ENTRY_HEADER_LENGTH = 4 + 4 + 4 + 1 + 4

_HEADER = struct.Struct("<IIIBI")


class EntryFlags(enum.IntFlag):
    """Bits of an entry's flag byte."""

    FILE = 0x01
    ENCRYPT_MIXED = 0x02
    ENCRYPT_HEADER = 0x04


@dataclass
class EntryHeader:
    """Sizes, flags and location of an entry's payload."""

    compressed_size: int
    compressed_size_aligned: int
    uncompressed_size: int
    flags: int
    offset: int

    @classmethod
    def from_bytes(cls, data: bytes) -> EntryHeader:
        """Parse the packed little-endian header at the start of ``data``."""
        if len(data) < ENTRY_HEADER_LENGTH:
            raise ValueError(
                f"entry header needs {ENTRY_HEADER_LENGTH} bytes, got {len(data)}"
            )
        return cls(*_HEADER.unpack_from(data))

    @property
    def is_file(self) -> bool:
        """Whether the entry is a regular file rather than a directory."""
        return bool(self.flags & EntryFlags.FILE)


def decompress(data: bytes) -> bytes:
    """Inflate a zlib stream; bytes after the end of the stream are ignored."""
    inflater = zlib.decompressobj()
    try:
        out = inflater.decompress(data) + inflater.flush()
    except zlib.error as exc:
        raise ValueError(f"could not decompress data: {exc}") from exc
    if not inflater.eof:
        raise ValueError("could not decompress data: truncated zlib stream")
    return out


@dataclass
class Entry:
    """A named entry of a GRF archive; ``data`` is filled once decoded."""

    name: str
    header: EntryHeader
    data: bytes = b""

    def decode(self, data: bytes) -> bytes:
        """Decrypt and inflate the raw payload, store it in ``data`` and return it."""
        flags = self.header.flags
        if flags & EntryFlags.ENCRYPT_MIXED:
            data = decode_full(
                data, self.header.compressed_size_aligned, self.header.compressed_size
            )
        elif flags & EntryFlags.ENCRYPT_HEADER:
            data = decode_header(data)

        if self.header.compressed_size == self.header.uncompressed_size:
            self.data = bytes(data)
            return self.data

        try:
            self.data = decompress(data)
        except ValueError as exc:
            raise ValueError(f"could not decompress entry data: {exc}") from exc
        return self.data