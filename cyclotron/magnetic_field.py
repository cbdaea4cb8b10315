# magnetic_field.py
"""
Magnetic Field Implementations for the Helix Viewer.

This module provides the magnetic field classes the trajectory model reads
its field strength from:

- ``MagneticField``: Abstract base class defining the magnetic field interface
- ``UniformField``: Constant field along the helix axis

The viewer works in a y-up world frame: gyration happens in the x-y plane
and the guiding centre drifts along z, so a uniform field points along +z.

Example
-------
>>> from cyclotron.magnetic_field import UniformField
>>> field = UniformField(B0=2.0)
>>> field.magnetic_field(0, 0, 0)
array([0., 0., 2.])
>>> field.field_strength(field.magnetic_field(0, 0, 0))
2.0
"""

import numpy as np
from abc import ABC, abstractmethod


class MagneticField(ABC):
    """
    Abstract base class for magnetic field implementations.

    Subclasses must implement the ``magnetic_field`` method.

    Parameters
    ----------
    B0 : float, optional
        Base magnetic field strength (used by some subclasses).

    Attributes
    ----------
    B0 : float
        Stored base field strength.

    See Also
    --------
    UniformField : Constant field along the z axis.
    """

    def __init__(self, B0=None):
        self.B0 = B0

    @abstractmethod
    def magnetic_field(self, x, y, z):
        """
        Calculate the magnetic field vector at position (x, y, z).

        Parameters
        ----------
        x, y, z : float
            Position coordinates in scene units.

        Returns
        -------
        numpy.ndarray
            Magnetic field vector [Bx, By, Bz].
        """
        pass

    def field_strength(self, B):
        """
        Calculate the magnitude of a magnetic field vector.

        Parameters
        ----------
        B : array-like
            Magnetic field vector [Bx, By, Bz].

        Returns
        -------
        float
            Magnitude |B| = sqrt(Bx² + By² + Bz²).
        """
        return float(np.linalg.norm(B))


class UniformField(MagneticField):
    """
    Uniform magnetic field along the helix axis.

    ``B0`` is signed: a negative value reverses the field, which for the
    analytic model only flips the sense of gyration through the sign of
    ``charge * B0`` (the cyclotron frequency uses its absolute value).

    Parameters
    ----------
    B0 : float
        Field strength along +z.

    Examples
    --------
    >>> UniformField(0.5).axial_strength
    0.5
    """

    def __init__(self, B0=1.0):
        super().__init__(float(B0))

    def magnetic_field(self, x, y, z):
        """Return [0, 0, B0] everywhere."""
        return np.array([0.0, 0.0, self.B0])

    @property
    def axial_strength(self):
        """Signed component of the field along the helix axis."""
        return self.B0
