"""Position, scale and rotation of an object in the world."""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np

ORIGIN = (0.0, 0.0, 0.0)
UP = (0.0, 1.0, 0.0)
FORWARD = (0.0, 0.0, 1.0)
BACKWARDS = (0.0, 0.0, -1.0)

# Quaternion components in (w, x, y, z) order.
IDENTITY_ROTATION = (1.0, 0.0, 0.0, 0.0)


def _vec3(value: Iterable[float]) -> np.ndarray:
    array = np.array(value, dtype=np.float64)
    if array.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {array.shape}")
    return array


def _translation(v: np.ndarray) -> np.ndarray:
    m = np.eye(4)
    m[:3, 3] = v
    return m


def _scaling(v: np.ndarray) -> np.ndarray:
    return np.diag([v[0], v[1], v[2], 1.0])


def _rotation_x(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[1, 0, 0, 0], [0, c, -s, 0], [0, s, c, 0], [0, 0, 0, 1]], dtype=np.float64)


def _rotation_y(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, 0, s, 0], [0, 1, 0, 0], [-s, 0, c, 0], [0, 0, 0, 1]], dtype=np.float64)


def _rotation_z(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0, 0], [s, c, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]], dtype=np.float64)


class Transform:
    """Placement of an object: position, scale, facing direction and rotation.

    Matrices use the usual mathematical layout: a point is a column vector
    and the translation sits in the last column.
    """

    def __init__(
        self,
        position: Iterable[float] = ORIGIN,
        scale: Iterable[float] = (1.0, 1.0, 1.0),
        direction: Iterable[float] = FORWARD,
        rotation: Iterable[float] = IDENTITY_ROTATION,
    ) -> None:
        self.position = position
        self.scale = scale
        self.direction = direction
        self.rotation = rotation

    @property
    def position(self) -> np.ndarray:
        return self._position

    @position.setter
    def position(self, value: Iterable[float]) -> None:
        self._position = _vec3(value)

    @property
    def scale(self) -> np.ndarray:
        return self._scale

    @scale.setter
    def scale(self, value: Iterable[float]) -> None:
        self._scale = _vec3(value)

    @property
    def direction(self) -> np.ndarray:
        return self._direction

    @direction.setter
    def direction(self, value: Iterable[float]) -> None:
        self._direction = _vec3(value)

    @property
    def rotation(self) -> tuple[float, float, float, float]:
        """Rotation quaternion as (w, x, y, z)."""
        return self._rotation

    @rotation.setter
    def rotation(self, value: Iterable[float]) -> None:
        components = tuple(float(v) for v in value)
        if len(components) != 4:
            raise ValueError(f"expected 4 quaternion components, got {len(components)}")
        self._rotation = components  # type: ignore[assignment]

    def model(self) -> np.ndarray:
        """Return the model matrix: translation, then rotation, then scale.

        The x, y and z parts of the rotation quaternion are used as angles
        in radians around the matching axes.
        """
        _, rx, ry, rz = self._rotation
        rotation = _rotation_z(rz) @ _rotation_y(ry) @ _rotation_x(rx)
        return _translation(self._position) @ rotation @ _scaling(self._scale)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(position={self._position.tolist()}, "
            f"scale={self._scale.tolist()}, rotation={self._rotation})"
        )