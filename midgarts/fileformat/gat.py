"""Reader for ground altitude (.gat) files."""

from __future__ import annotations

import enum
import logging
import struct
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

HEADER_SIGNATURE = b"GRAT"

_HEADER = struct.Struct("<BBII")
_CELL = struct.Struct("<4fI")


class CellType(enum.IntFlag):
    """Properties of a map cell."""

    NONE = 1 << 0
    WALKABLE = 1 << 1
    WATER = 1 << 2
    SNIPABLE = 1 << 3


TYPE_TABLE: tuple[CellType, ...] = (
    CellType.WALKABLE | CellType.SNIPABLE,  # walkable ground
    CellType.NONE,  # non-walkable ground
    CellType.WALKABLE | CellType.SNIPABLE,
    CellType.WALKABLE | CellType.SNIPABLE | CellType.WATER,  # walkable water
    CellType.WALKABLE | CellType.SNIPABLE,
    CellType.SNIPABLE,  # snipable
    CellType.WALKABLE | CellType.SNIPABLE,
)


@dataclass(frozen=True)
class Cell:
    """One map cell: the heights of its four corners and its type."""

    heights: tuple[float, float, float, float]
    cell_type: CellType


@dataclass
class GroundAltitudeFile:
    """A parsed .gat file."""

    version: float
    width: int
    height: int
    cells: list[Cell] = field(default_factory=list)


def load(data: bytes) -> GroundAltitudeFile:
    """Parse the contents of a .gat file."""
    signature = bytes(data[:4])
    if signature != HEADER_SIGNATURE:
        raise ValueError(f"invalid file header signature: {signature!r}")

    try:
        major, minor, width, height = _HEADER.unpack_from(data, 4)
    except struct.error as exc:
        raise ValueError("truncated gat header") from exc

    start = 4 + _HEADER.size
    end = start + width * height * _CELL.size
    if len(data) < end:
        raise ValueError(f"truncated gat cell data: need {end} bytes, got {len(data)}")

    cells = []
    for h1, h2, h3, h4, kind in _CELL.iter_unpack(data[start:end]):
        if kind >= len(TYPE_TABLE):
            raise ValueError(f"unknown cell type {kind}")
        cells.append(Cell(heights=(h1, h2, h3, h4), cell_type=TYPE_TABLE[kind]))

    result = GroundAltitudeFile(
        version=major + minor / 10,
        width=width,
        height=height,
        cells=cells,
    )
    logger.debug("loaded ground altitude file %dx%d v%s", width, height, result.version)
    return result