# trail.py
"""
Bounded history of recent particle positions.

The trail is drawn as a polyline behind the particle. It keeps at most
``maxlen`` points; appending to a full trail drops the oldest one.

Example
-------
>>> from cyclotron.trail import TrailBuffer
>>> trail = TrailBuffer(maxlen=2)
>>> for z in range(3):
...     trail.append([0, 0, z])
>>> trail.to_polyline()[:, 2]
array([1., 2.])
"""

from collections import deque

import numpy as np

from cyclotron.config import MAX_TRAIL_POINTS


class TrailBuffer:
    """
    FIFO of past positions with a fixed capacity.

    Parameters
    ----------
    maxlen : int
        Maximum number of points kept.

    Attributes
    ----------
    maxlen : int
        Capacity of the buffer.
    """

    def __init__(self, maxlen=MAX_TRAIL_POINTS):
        if maxlen <= 0:
            raise ValueError(f"Trail capacity must be positive, got {maxlen}")
        self.maxlen = maxlen
        self._points = deque(maxlen=maxlen)

    def append(self, position):
        """
        Record a position at the end of the trail.

        Parameters
        ----------
        position : array-like
            Point [x, y, z]; a copy is stored.
        """
        self._points.append(np.array(position, dtype=float))

    def clear(self):
        """Drop every recorded point."""
        self._points.clear()

    def to_polyline(self):
        """
        Get the trail points in insertion order.

        Returns
        -------
        numpy.ndarray
            Array of shape (n, 3); (0, 3) when empty.
        """
        if not self._points:
            return np.empty((0, 3))
        return np.stack(self._points)

    def __len__(self):
        return len(self._points)
