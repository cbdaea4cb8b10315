# simulation.py
"""
Frame-driven helix simulation.

This module provides the ``Simulation`` class that advances simulated time
once per animation frame and derives everything drawn on screen from it:
the particle position (closed form, see ``cyclotron.trajectory``), the
trail of recent positions and, in follow mode, the camera pose.

There is no integration step: the position is evaluated exactly at the
current simulated time, so a varying frame rate only changes how densely
the trail is sampled.

Example
-------
>>> from cyclotron.simulation import Simulation
>>> sim = Simulation()
>>> frame = sim.tick(1 / 60)
>>> len(sim.trail)
1
>>> sim.set_parameter('mass', 2.0)  # restarts from t = 0
>>> sim.time
0.0
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from cyclotron.camera import CameraPose, aspect_ratio, follow_camera
from cyclotron.config import MAX_TRAIL_POINTS, RESET_ON_CHANGE, SimulationParameters
from cyclotron.magnetic_field import UniformField
from cyclotron.trail import TrailBuffer
from cyclotron.trajectory import helix_position

logger = logging.getLogger(__name__)


@dataclass
class FrameState:
    """Everything the renderer needs for one frame."""
    time: float
    position: np.ndarray
    trail: np.ndarray
    camera: Optional[CameraPose] = None


class Simulation:
    """
    Single-particle helix simulation driven by ``tick``.

    Parameters
    ----------
    params : SimulationParameters, optional
        Initial parameter snapshot (defaults if omitted).
    trail_length : int
        Capacity of the trail buffer.

    Attributes
    ----------
    params : SimulationParameters
        Current parameter snapshot, replaced on every change.
    time : float
        Simulated time since the last reset.
    trail : TrailBuffer
        Recent particle positions.
    aspect : float
        Viewport aspect ratio recorded by the last ``resize``.
    """

    def __init__(self, params: SimulationParameters = None, trail_length: int = MAX_TRAIL_POINTS):
        self.params = params or SimulationParameters()
        self.time = 0.0
        self.trail = TrailBuffer(trail_length)
        self.aspect = 1.0

    @property
    def field(self) -> UniformField:
        """Magnetic field for the current snapshot."""
        return UniformField(self.params.field_strength)

    def position(self) -> np.ndarray:
        """Particle position at the current simulated time."""
        return helix_position(self.time, self.params)

    def tick(self, delta: float) -> FrameState:
        """
        Advance by one frame.

        Parameters
        ----------
        delta : float
            Wall-clock seconds since the previous frame; scaled by
            ``params.time_scale``.

        Returns
        -------
        FrameState
            Position, trail and (in follow mode) camera pose for this frame.
        """
        params = self.params
        self.time += params.time_scale * delta

        position = helix_position(self.time, params)
        self.trail.append(position)

        camera = follow_camera(position) if params.follow_camera else None
        return FrameState(
            time=self.time,
            position=position,
            trail=self.trail.to_polyline(),
            camera=camera,
        )

    def reset(self):
        """Restart the trajectory: time back to zero and the trail emptied."""
        self._restart()
        logger.info("Simulation reset")

    def _restart(self):
        self.time = 0.0
        self.trail.clear()

    def set_parameter(self, name: str, value):
        """
        Replace one parameter, restarting if the policy table says so.

        Parameters
        ----------
        name : str
            Parameter name, one of ``RESET_ON_CHANGE``.
        value : float or bool
            New value. Slider values are taken as they come.

        Raises
        ------
        KeyError
            If ``name`` is not a simulation parameter.
        """
        if name not in RESET_ON_CHANGE:
            raise KeyError(f"Unknown simulation parameter: {name!r}")
        self.params = self.params.with_value(name, value)
        logger.debug("Parameter %s set to %s", name, value)
        if name == 'mass' and self.params.mass == 0:
            logger.debug("Zero mass: particle drifts in a straight line")
        if RESET_ON_CHANGE[name]:
            self._restart()

    def set_follow_camera(self, enabled: bool):
        self.set_parameter('follow_camera', enabled)

    def resize(self, width, height) -> float:
        """
        Record the new viewport size; only the aspect ratio changes.

        matplotlib re-projects its own axes on resize, so the stored
        ``aspect`` is kept for callers that lay out their own projection.
        """
        self.aspect = aspect_ratio(width, height)
        return self.aspect
