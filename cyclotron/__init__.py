"""
Cyclotron helix viewer.

Closed-form motion of a charged particle in a uniform magnetic field, with a
bounded trail, a follow camera and a matplotlib front end.
"""

from cyclotron.config import SimulationParameters
from cyclotron.simulation import FrameState, Simulation
from cyclotron.trail import TrailBuffer
from cyclotron.trajectory import helix_position, sample_trajectory

__all__ = [
    "FrameState",
    "Simulation",
    "SimulationParameters",
    "TrailBuffer",
    "helix_position",
    "sample_trajectory",
]
