"""Reader for sprite (.spr) files."""

from __future__ import annotations

import enum
import io
import struct
from dataclasses import dataclass, field
from typing import BinaryIO

import numpy as np

from midgarts.graphic.rgba import UniqueRGBA

HEADER_SIGNATURE = b"SP"
PALETTE_SIZE = 1024


class FileType(enum.IntEnum):
    """Pixel encoding of a sprite frame."""

    PAL = 0
    RGBA = 1


@dataclass
class SpriteFrame:
    """One sprite image: palette indices or raw ABGR pixels."""

    sprite_type: FileType
    width: int
    height: int
    data: bytes
    compiled: bool = False


@dataclass
class SpriteFile:
    """A parsed .spr file; paletted frames come before RGBA frames."""

    signature: str
    version: float
    paletted_frame_count: int
    rgba_frame_count: int
    frames: list[SpriteFrame]
    palette: bytes = bytes(PALETTE_SIZE)
    images: list[UniqueRGBA | None] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.images = [None] * len(self.frames)

    @property
    def rgba_index(self) -> int:
        """Index of the first RGBA frame."""
        return self.paletted_frame_count

    def image_at(self, index: int) -> UniqueRGBA | None:
        """Return the frame at ``index`` as an RGBA image, or None if it is empty.

        Images are built once and cached.
        """
        cached = self.images[index]
        if cached is not None:
            return cached

        frame = self.frames[index]
        width, height = frame.width, frame.height
        if width <= 0 or height <= 0:
            return None

        raw = np.frombuffer(frame.data, dtype=np.uint8)
        if frame.sprite_type == FileType.RGBA:
            # Stored as A, B, G, R.
            pixels = raw[: width * height * 4].reshape(height, width, 4)[:, :, ::-1]
        else:
            indices = raw[: width * height].reshape(height, width)
            palette = np.frombuffer(self.palette, dtype=np.uint8).reshape(-1, 4)
            pixels = np.empty((height, width, 4), dtype=np.uint8)
            pixels[:, :, :3] = palette[indices, :3]
            pixels[:, :, 3] = np.where(indices != 0, 255, 0)

        image = UniqueRGBA(width, height, pixels)
        self.images[index] = image
        return image


def _version(major: int, minor: int) -> float:
    return round(minor + major / 10, 1)


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    raw = stream.read(size)
    if len(raw) < size:
        raise ValueError("truncated spr data")
    return raw


def _unpack(stream: BinaryIO, fmt: str) -> tuple:
    return struct.unpack(fmt, _read_exact(stream, struct.calcsize(fmt)))


def _read_paletted_frame(stream: BinaryIO) -> SpriteFrame:
    width, height = _unpack(stream, "<HH")
    data = _read_exact(stream, width * height)
    return SpriteFrame(FileType.PAL, width, height, data)


def _read_paletted_frame_rle(stream: BinaryIO) -> SpriteFrame:
    """Read a paletted frame whose zero bytes are run-length encoded."""
    width, height, encoded_size = _unpack(stream, "<HHH")
    size = width * height
    encoded = _read_exact(stream, encoded_size)

    out = bytearray()
    values = iter(encoded)
    for value in values:
        if value:
            out.append(value)
            continue
        count = next(values, None)
        if count is None:
            # The run length of a trailing zero lies just past the block.
            (count,) = _unpack(stream, "<B")
        out.extend(bytes(count or 2))

    if len(out) > size:
        raise ValueError(f"RLE data decodes to {len(out)} bytes, frame holds {size}")
    out.extend(bytes(size - len(out)))
    return SpriteFrame(FileType.PAL, width, height, bytes(out))


def _read_rgba_frame(stream: BinaryIO) -> SpriteFrame:
    width, height = _unpack(stream, "<HH")
    data = _read_exact(stream, width * height * 4)
    return SpriteFrame(FileType.RGBA, width, height, data)


def load(data: bytes) -> SpriteFile:
    """Parse the contents of an .spr file."""
    stream = io.BytesIO(data)
    signature = stream.read(2)
    if signature != HEADER_SIGNATURE:
        raise ValueError(f"invalid signature: {signature!r}")

    major, minor, paletted_count = _unpack(stream, "<BBH")
    version = _version(major, minor)
    rgba_count = _unpack(stream, "<H")[0] if version > 1.1 else 0

    read_paletted = _read_paletted_frame if version < 2.1 else _read_paletted_frame_rle
    frames = [read_paletted(stream) for _ in range(paletted_count)]
    frames.extend(_read_rgba_frame(stream) for _ in range(rgba_count))

    palette = bytes(PALETTE_SIZE)
    if version > 1.0:
        if len(data) < PALETTE_SIZE:
            raise ValueError("spr data too short to hold a palette")
        palette = bytes(data[-PALETTE_SIZE:])

    return SpriteFile(
        signature=signature.decode("ascii"),
        version=version,
        paletted_frame_count=paletted_count,
        rgba_frame_count=rgba_count,
        frames=frames,
        palette=palette,
    )