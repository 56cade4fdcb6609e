import numpy as np
import pytest

from midgarts.camera import PITCH, YAW, Camera, Projection
from midgarts.graphic.transform import FORWARD, UP


@pytest.fixture
def camera():
    return Camera.perspective(0.638, 1280 / 720, 0.1, 1000.0)


def _project(matrix, point):
    clip = matrix @ np.append(np.asarray(point, dtype=float), 1.0)
    return clip[:3] / clip[3]


def test_initial_state(camera):
    assert np.allclose(camera.position, (0, 40, 0))
    assert np.allclose(camera.front, (0, 0, -1))
    assert camera.projection_type is Projection.PERSPECTIVE
    assert camera.distance == 30.0
    assert camera.altitude == 50.0


def test_projection_maps_near_and_far_planes(camera):
    near = _project(camera.projection_matrix, (0, 0, -camera.near))
    far = _project(camera.projection_matrix, (0, 0, -camera.far))
    assert near[2] == pytest.approx(-1.0)
    assert far[2] == pytest.approx(1.0)


def test_view_matrix_moves_camera_to_origin(camera):
    view = camera.view_matrix()
    assert np.allclose(view @ np.append(camera.position, 1.0), [0, 0, 0, 1])


def test_view_matrix_looks_forward(camera):
    view = camera.view_matrix()
    ahead = view @ np.append(camera.position + np.array(FORWARD), 1.0)
    assert np.allclose(ahead, [0, 0, -1, 1])


def test_view_matrix_rotation_is_orthonormal(camera):
    camera.position = (3, -2, 7)
    r = camera.view_matrix()[:3, :3]
    assert np.allclose(r @ r.T, np.eye(3))


def test_set_y_moves_back_along_z(camera):
    camera.position = (1, 2, 3)
    camera.set_y(10)
    assert np.allclose(camera.position, (1, 10, 3 - 32))


def test_reset_angle_and_y(camera):
    start_z = camera.position[2]
    camera.reset_angle_and_y(1280, 720)
    assert camera.yaw == YAW
    assert camera.pitch == PITCH
    assert camera.position[1] == 40
    assert camera.position[2] == start_z - 32


@pytest.mark.parametrize(("yaw", "pitch"), [(0, 0), (30, 45), (270, -60), (-60, 270)])
def test_rotate_basis_is_perpendicular(camera, yaw, pitch):
    camera.rotate(yaw, pitch)
    assert np.dot(camera.right, camera.front) == pytest.approx(0.0, abs=1e-9)
    assert np.dot(camera.right, UP) == pytest.approx(0.0, abs=1e-9)
    assert np.dot(camera.up, camera.right) == pytest.approx(0.0, abs=1e-9)
    assert np.dot(camera.up, camera.front) == pytest.approx(0.0, abs=1e-9)


def test_camera_model_translates_to_position(camera):
    camera.position = (4, 5, 6)
    assert np.allclose(camera.model()[:3, 3], (4, 5, 6))


def test_update_visible_z_range_keeps_view_consistent(camera):
    camera.position = (2, 3, 4)
    camera.update_visible_z_range(1280, 720)
    view = camera.view_matrix()
    assert np.allclose(view @ np.array([2, 3, 4, 1.0]), [0, 0, 0, 1])