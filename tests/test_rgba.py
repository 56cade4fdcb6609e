import numpy as np
import pytest

from midgarts.graphic.rgba import UniqueRGBA


def test_new_image_is_transparent():
    img = UniqueRGBA(3, 2)
    assert img.size == (3, 2)
    assert img.pix.shape == (2, 3, 4)
    assert not img.pix.any()


def test_ids_are_unique():
    images = [UniqueRGBA(1, 1) for _ in range(3)]
    assert len({img.id for img in images}) == 3


def test_set_and_get_pixel_round_trip():
    img = UniqueRGBA(4, 4)
    img.set_pixel(2, 3, (1, 2, 3, 4))
    assert img.get_pixel(2, 3) == (1, 2, 3, 4)
    assert img.get_pixel(3, 2) == (0, 0, 0, 0)


def test_out_of_bounds_is_ignored():
    img = UniqueRGBA(2, 2)
    img.set_pixel(5, 0, (9, 9, 9, 9))
    img.set_pixel(-1, 0, (9, 9, 9, 9))
    assert not img.pix.any()
    assert img.get_pixel(-1, 0) == (0, 0, 0, 0)
    assert img.get_pixel(0, 2) == (0, 0, 0, 0)


def test_tobytes_is_row_major_rgba():
    img = UniqueRGBA(2, 1)
    img.set_pixel(0, 0, (1, 2, 3, 4))
    img.set_pixel(1, 0, (5, 6, 7, 8))
    assert img.tobytes() == bytes([1, 2, 3, 4, 5, 6, 7, 8])
    assert len(img.tobytes()) == img.stride * img.height


def test_pixels_are_copied():
    source = np.zeros((1, 1, 4), dtype=np.uint8)
    img = UniqueRGBA(1, 1, source)
    source[0, 0] = (7, 7, 7, 7)
    assert img.get_pixel(0, 0) == (0, 0, 0, 0)


def test_mismatched_pixels_raise():
    with pytest.raises(ValueError):
        UniqueRGBA(2, 2, np.zeros((2, 3, 4), dtype=np.uint8))


def test_negative_size_raises():
    with pytest.raises(ValueError):
        UniqueRGBA(-1, 2)