"""RGBA images tagged with a unique identifier."""

from __future__ import annotations

import uuid

import numpy as np

Color = tuple[int, int, int, int]

_TRANSPARENT: Color = (0, 0, 0, 0)


class UniqueRGBA:
    """An RGBA image carrying a unique id, usable as a texture cache key.

    Pixels are stored row by row in ``pix``, an array of shape
    ``(height, width, 4)`` holding unsigned bytes in R, G, B, A order.
    """

    def __init__(self, width: int, height: int, pixels: np.ndarray | None = None) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.id = uuid.uuid4()
        self.width = width
        self.height = height
        if pixels is None:
            self.pix = np.zeros((height, width, 4), dtype=np.uint8)
        else:
            array = np.asarray(pixels, dtype=np.uint8)
            if array.shape != (height, width, 4):
                raise ValueError(
                    f"pixel array of shape {array.shape} does not match {width}x{height} RGBA"
                )
            self.pix = array.copy()

    @property
    def size(self) -> tuple[int, int]:
        """Width and height of the image."""
        return self.width, self.height

    @property
    def stride(self) -> int:
        """Number of bytes in one row of pixels."""
        return self.width * 4

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        """Set one pixel; points outside the image are ignored."""
        if self._contains(x, y):
            self.pix[y, x] = color

    def get_pixel(self, x: int, y: int) -> Color:
        """Return one pixel; points outside the image read as transparent black."""
        if not self._contains(x, y):
            return _TRANSPARENT
        r, g, b, a = (int(v) for v in self.pix[y, x])
        return r, g, b, a

    def tobytes(self) -> bytes:
        """Return the pixel data as contiguous RGBA bytes."""
        return self.pix.tobytes()

    def __repr__(self) -> str:
        return f"UniqueRGBA(id={self.id}, width={self.width}, height={self.height})"