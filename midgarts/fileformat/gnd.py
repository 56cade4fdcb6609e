"""Reader for ground (.gnd) files."""

from __future__ import annotations

import io
import logging
import struct
from dataclasses import dataclass, field
from typing import BinaryIO

from midgarts.bytesutil import read_string

logger = logging.getLogger(__name__)


@dataclass
class LightMapData:
    """Light map table description."""

    per_cell: int
    count: int
    data: bytes = b""


@dataclass
class GroundFile:
    """A parsed .gnd file."""

    version: float
    width: int
    height: int
    zoom: float
    textures: list[str] = field(default_factory=list)
    texture_indices: list[int] = field(default_factory=list)
    light_map: LightMapData | None = None


def _unpack(stream: BinaryIO, fmt: str) -> tuple:
    layout = struct.Struct(fmt)
    raw = stream.read(layout.size)
    if len(raw) < layout.size:
        raise ValueError("truncated gnd data")
    return layout.unpack(raw)


def _load_textures(stream: BinaryIO, remaining: int) -> tuple[list[str], list[int]]:
    count, path_length = _unpack(stream, "<II")
    if count * path_length > remaining - 8:
        raise ValueError("truncated gnd texture table")

    positions: dict[str, int] = {}
    indices = []
    for _ in range(count):
        name = read_string(stream, path_length)
        indices.append(positions.setdefault(name, len(positions)))
    return list(positions), indices


def _load_light_maps(stream: BinaryIO) -> LightMapData:
    count, per_cell_x, per_cell_y, size_cell = _unpack(stream, "<IIII")
    per_cell = (per_cell_x * per_cell_y * size_cell) & 0xFFFFFFFF
    return LightMapData(per_cell=per_cell, count=count)


def load(data: bytes) -> GroundFile:
    """Parse the header, texture table and light map header of a .gnd file."""
    stream = io.BytesIO(data)
    stream.read(4)  # signature, not validated

    major, minor = _unpack(stream, "<BB")
    width, height = _unpack(stream, "<II")
    (zoom,) = _unpack(stream, "<f")

    textures, indices = _load_textures(stream, len(data) - stream.tell())
    light_map = _load_light_maps(stream)

    result = GroundFile(
        version=major + minor / 10,
        width=width,
        height=height,
        zoom=zoom,
        textures=textures,
        texture_indices=indices,
        light_map=light_map,
    )
    logger.debug("loaded ground file %r", result)
    return result