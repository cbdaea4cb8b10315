import math

import numpy as np
import pytest

from cyclotron.camera import (
    DEFAULT_CAMERA,
    FOLLOW_OFFSET,
    aspect_ratio,
    follow_camera,
    view_angles,
)


def test_follow_offset_behind_and_above():
    assert FOLLOW_OFFSET == pytest.approx([-10.0, 10 * math.tan(math.radians(20)), 0.0])


def test_follow_pose_for_particle_on_x_axis():
    pose = follow_camera([5.0, 0.0, 0.0])
    assert pose.position == pytest.approx([-5.0, 3.639702, 0.0], abs=1e-6)
    np.testing.assert_array_equal(pose.target, [5.0, 0.0, 0.0])


def test_follow_view_looks_down_twenty_degrees_along_x():
    elev, azim = view_angles(follow_camera([1.0, -2.0, 3.0]))
    assert elev == pytest.approx(20.0)
    assert abs(azim) == pytest.approx(180.0)


def test_default_camera_aims_at_origin():
    np.testing.assert_array_equal(DEFAULT_CAMERA.target, [0.0, 0.0, 0.0])
    assert DEFAULT_CAMERA.position[2] == 10.0


@pytest.mark.parametrize("width, height, expected", [
    (800, 600, 800 / 600),
    (300, 300, 1.0),
    (640, 0, 1.0),
])
def test_aspect_ratio(width, height, expected):
    assert aspect_ratio(width, height) == pytest.approx(expected)
