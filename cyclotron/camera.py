# camera.py
"""
Camera geometry for the helix viewer.

World coordinates are y-up: the particle gyrates in the x-y plane and drifts
along z. In follow mode the camera sits at a fixed offset from the particle,
10 units behind it along -x and raised so that it looks down at 20 degrees,
and always aims at the particle.
"""

import math
from dataclasses import dataclass

import numpy as np

FOLLOW_DISTANCE = 10.0
FOLLOW_ANGLE_DEG = 20.0

FOLLOW_OFFSET = np.array([
    -FOLLOW_DISTANCE,
    FOLLOW_DISTANCE * math.tan(math.radians(FOLLOW_ANGLE_DEG)),
    0.0,
])


@dataclass
class CameraPose:
    """Camera position and the point it looks at."""
    position: np.ndarray
    target: np.ndarray

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.position - self.target))


DEFAULT_CAMERA = CameraPose(
    position=np.array([-FOLLOW_DISTANCE, FOLLOW_OFFSET[1], FOLLOW_DISTANCE]),
    target=np.zeros(3),
)


def follow_camera(position) -> CameraPose:
    """
    Camera pose tracking a particle at ``position``.

    Parameters
    ----------
    position : array-like
        Particle position [x, y, z].

    Returns
    -------
    CameraPose
        Position ``position + FOLLOW_OFFSET``, target ``position``.
    """
    target = np.array(position, dtype=float)
    return CameraPose(position=target + FOLLOW_OFFSET, target=target)


def view_angles(pose: CameraPose):
    """
    Convert a pose into matplotlib ``(elev, azim)`` in degrees.

    The viewer draws world (x, y, z) on plot axes (x, z, y), so the world y
    axis is the plot's vertical axis.
    """
    dx, dy, dz = pose.position - pose.target
    horizontal = math.hypot(dx, dz)
    elev = math.degrees(math.atan2(dy, horizontal))
    azim = math.degrees(math.atan2(dz, dx))
    return elev, azim


def aspect_ratio(width, height) -> float:
    """Projection aspect ratio for a viewport, 1.0 for a degenerate height."""
    if height <= 0:
        return 1.0
    return width / height
