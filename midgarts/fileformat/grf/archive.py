"""Reader for GRF archives, the container of the game's data files."""

from __future__ import annotations

import io
import os
import struct
import zlib
from dataclasses import dataclass
from typing import BinaryIO

from midgarts.bytesutil import decode_windows1252
from midgarts.fileformat import act, spr
from midgarts.fileformat.grf.entry import (
    ENTRY_HEADER_LENGTH,
    Entry,
    EntryFlags,
    EntryHeader,
)
from midgarts.fileformat.grf.tree import EntryTree

FILE_HEADER_LENGTH = 46
FILE_HEADER_SIGNATURE = b"Master of Magic"
SUPPORTED_VERSION = 0x200

_FILE_HEADER = struct.Struct("<15s15sIIII")
_TABLE_SIZES = struct.Struct("<II")


class EntryNotFoundError(LookupError):
    """Raised when a directory or entry is not in the archive."""


@dataclass(frozen=True)
class ActionSpriteFilePair:
    """An action file together with the sprite file it animates."""

    act: act.ActionFile
    spr: spr.SpriteFile


def _directory_of(name: str) -> str:
    return name.rpartition("/")[0]


class GrfFile:
    """An open GRF archive read from a seekable binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self.entries: dict[str, list[Entry]] = {}
        self.tree = EntryTree()
        self._parse_header()
        self._parse_entries()

    def __enter__(self) -> GrfFile:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _parse_header(self) -> None:
        size = self._stream.seek(0, io.SEEK_END)
        self._stream.seek(0)
        raw = self._stream.read(FILE_HEADER_LENGTH)
        if len(raw) < FILE_HEADER_LENGTH:
            raise ValueError("could not read header: file too short")

        signature, key, table_offset, seed, reserved, version = _FILE_HEADER.unpack(raw)
        if signature != FILE_HEADER_SIGNATURE:
            raise ValueError(f"invalid file signature {signature!r}")
        if version != SUPPORTED_VERSION:
            raise ValueError(f"unsupported file version {version:#x}")

        table_offset = (table_offset + FILE_HEADER_LENGTH) & 0xFFFFFFFF
        if table_offset > size:
            raise ValueError("invalid file table offset")

        self.encryption_key = key
        self.version = version
        self.file_table_offset = table_offset
        self.reserved_files = reserved
        self.entry_count = (reserved - seed - 7) & 0xFFFFFFFF

    def _parse_entries(self) -> None:
        self._stream.seek(self.file_table_offset)
        if len(self._stream.read(_TABLE_SIZES.size)) < _TABLE_SIZES.size:
            raise ValueError("could not read file table sizes")

        inflater = zlib.decompressobj()
        try:
            table = inflater.decompress(self._stream.read()) + inflater.flush()
        except zlib.error as exc:
            raise ValueError(f"could not inflate file table: {exc}") from exc

        directories: dict[str, list[Entry]] = {}
        pos = 0
        for _ in range(self.entry_count):
            end = table.find(b"\x00", pos)
            if end < 0:
                raise ValueError("could not parse entry file name")
            raw_name = table[pos:end]
            pos = end + 1
            if pos + ENTRY_HEADER_LENGTH > len(table):
                raise ValueError("could not read file entry header")
            header = EntryHeader.from_bytes(table[pos:pos + ENTRY_HEADER_LENGTH])
            pos += ENTRY_HEADER_LENGTH

            if not header.flags & EntryFlags.FILE:
                continue

            name = decode_windows1252(raw_name).replace("\\", "/").lower()
            directories.setdefault(_directory_of(name), []).append(Entry(name, header))

        for directory in sorted(directories):
            self.tree.insert(directory, directories[directory])
        self.entries = directories

    def get_entries(self, directory: str) -> list[Entry]:
        """Return the entries of ``directory``, or an empty list."""
        return self.entries.get(directory, [])

    def get_entry(self, name: str) -> Entry:
        """Return the named entry with its data read and decoded."""
        name = name.lower()
        directory = _directory_of(name)
        entries = self.tree.find(directory)
        if entries is None:
            raise EntryNotFoundError(f"could not find directory '{directory}'")

        entry = next((e for e in entries if e.name == name), None)
        if entry is None:
            raise EntryNotFoundError(f"could not find entry '{name}'")
        if entry.data:
            return entry

        wanted = entry.header.compressed_size_aligned
        self._stream.seek(entry.header.offset + FILE_HEADER_LENGTH)
        raw = self._stream.read(wanted)
        if len(raw) != wanted:
            raise ValueError(f"could not read next bytes: want {wanted}, got {len(raw)}")
        entry.decode(raw)
        return entry

    def get_action_and_sprite_files(self, name: str) -> ActionSpriteFilePair:
        """Load ``<name>.act`` and ``<name>.spr`` from the archive."""
        action_file = act.load(self.get_entry(f"{name}.act").data)
        sprite_file = spr.load(self.get_entry(f"{name}.spr").data)
        return ActionSpriteFilePair(act=action_file, spr=sprite_file)

    def close(self) -> None:
        """Close the underlying stream."""
        self._stream.close()


def load(path: str | os.PathLike[str]) -> GrfFile:
    """Open and index the GRF archive at ``path``."""
    stream = open(path, "rb")
    try:
        return GrfFile(stream)
    except BaseException:
        stream.close()
        raise