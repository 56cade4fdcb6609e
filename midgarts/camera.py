"""A perspective camera looking down the world's forward axis."""

from __future__ import annotations

import enum
import math

import numpy as np

from midgarts.graphic.transform import FORWARD, UP, Transform

YAW = 270.0
PITCH = -60.0

_START_POSITION = (0.0, 40.0, 0.0)
_SET_Y_DEPTH_SHIFT = 32.0


class Projection(enum.IntEnum):
    """Kind of projection a camera applies."""

    PERSPECTIVE = 0


def _perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    f = 1.0 / math.tan(fovy / 2.0)
    nmf = near - far
    return np.array(
        [
            [f / aspect, 0, 0, 0],
            [0, f, 0, 0],
            [0, 0, (near + far) / nmf, 2.0 * far * near / nmf],
            [0, 0, -1, 0],
        ],
        dtype=np.float64,
    )


def _look_at(eye: np.ndarray, center: np.ndarray, up: np.ndarray) -> np.ndarray:
    f = center - eye
    f = f / np.linalg.norm(f)
    s = np.cross(f, up / np.linalg.norm(up))
    s = s / np.linalg.norm(s)
    u = np.cross(s, f)
    m = np.eye(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[:3, 3] = -(m[:3, :3] @ eye)
    return m


class Camera(Transform):
    """A camera with a perspective projection; its position comes from Transform."""

    def __init__(self, fov: float, aspect: float, near: float, far: float) -> None:
        super().__init__(position=_START_POSITION)
        self.target: Transform | None = None
        self.projection_type = Projection.PERSPECTIVE
        self.fov = fov
        self.aspect = aspect
        self.near = near
        self.far = far
        self.distance = 30.0
        self.altitude = 50.0
        self.yaw = 0.0
        self.pitch = 0.0
        self.front = np.array((0.0, 0.0, -1.0))
        self.right = np.zeros(3)
        self.up = np.zeros(3)
        self.target_rotation = np.zeros(3)
        self.projection_matrix = _perspective(fov, aspect, near, far)
        self._view = np.eye(4)

    @classmethod
    def perspective(cls, fov: float, aspect: float, near: float, far: float) -> Camera:
        """Create a perspective camera; ``fov`` is the vertical field of view in radians."""
        return cls(fov, aspect, near, far)

    def _create_view_matrix(self) -> np.ndarray:
        eye = self.position
        return _look_at(eye, eye + np.array(FORWARD), np.array(UP))

    def view_matrix(self) -> np.ndarray:
        """Return the view matrix for the camera's current position."""
        self._view = self._create_view_matrix()
        return self._view

    def reset_angle_and_y(self, window_width: int, window_height: int) -> None:
        """Restore the default angles and height, then refresh the view."""
        self.yaw = YAW
        self.pitch = PITCH
        self.set_y(40)
        self.rotate(self.pitch, self.yaw)
        self.update_visible_z_range(window_width, window_height)

    def set_y(self, y: float) -> None:
        """Move the camera to height ``y``, stepping it back along z."""
        x, _, z = self.position
        self.position = (x, y, z - _SET_Y_DEPTH_SHIFT)

    def rotate(self, yaw: float, pitch: float) -> None:
        """Recompute the front, right and up vectors from angles in degrees."""
        cos_pitch = math.cos(math.radians(pitch))
        yaw_rad = math.radians(yaw)
        self.front = np.array(
            (cos_pitch * math.cos(yaw_rad), cos_pitch, cos_pitch * math.sin(yaw_rad))
        )
        self.right = np.cross(self.front, np.array(UP))
        self.up = np.cross(self.right, self.front)

    def update_visible_z_range(self, width: int, height: int) -> None:
        """Refresh the cached view matrix for a window of the given size."""
        self._view = self._create_view_matrix()