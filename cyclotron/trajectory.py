# trajectory.py
"""
Closed-form cyclotron kinematics.

A charged particle in a uniform field along z gyrates in the x-y plane with
the cyclotron frequency omega = |qB/m| on a circle of radius r = v_perp/omega
centred at (0, -r), while its guiding centre drifts along z with v_parallel:

- x = r * sin(omega * t)
- y = -r * (1 - cos(omega * t))
- z = v_parallel * t

When omega is zero (no charge, no field) or v_perp is zero, the motion is a
straight drift: (v_perp * t, 0, v_parallel * t). A massless particle or any
non-finite intermediate result is treated the same way, so the model never
yields NaN geometry.

Example
-------
>>> import math
>>> from cyclotron.config import SimulationParameters
>>> from cyclotron.trajectory import helix_position
>>> params = SimulationParameters(v_parallel=0.0)
>>> helix_position(math.pi, params).round(6)
array([ 0., -2.,  0.])
"""

import logging
import math

import numpy as np

logger = logging.getLogger(__name__)


def cyclotron_frequency(charge, field_strength, mass):
    """
    Angular cyclotron frequency omega = |q * B / m|.

    Parameters
    ----------
    charge : float
        Particle charge.
    field_strength : float
        Magnetic field strength along the helix axis.
    mass : float
        Particle mass.

    Returns
    -------
    float
        omega, or ``inf`` for a massless charged particle in a field,
        or ``nan`` when 0/0.
    """
    if mass == 0:
        product = charge * field_strength
        return math.nan if product == 0 else math.inf
    return abs(charge * field_strength / mass)


def gyroradius(v_perp, omega):
    """Radius of the circular component, v_perp / omega (``inf`` if omega is 0)."""
    if omega == 0:
        return math.inf
    return v_perp / omega


def is_degenerate(v_perp, omega):
    """True when the motion reduces to a straight drift."""
    if not math.isfinite(omega) or omega == 0 or v_perp == 0:
        return True
    return not math.isfinite(gyroradius(v_perp, omega))


def linear_drift(t, v_perp, v_parallel):
    """Straight-line motion used for the degenerate case."""
    return np.array([v_perp * t, 0.0, v_parallel * t])


def helix_position(t, params):
    """
    Particle position at simulated time ``t``.

    Parameters
    ----------
    t : float
        Elapsed simulated time.
    params : SimulationParameters
        Current parameter snapshot.

    Returns
    -------
    numpy.ndarray
        Position [x, y, z].
    """
    omega = cyclotron_frequency(params.charge, params.field_strength, params.mass)
    if is_degenerate(params.v_perp, omega):
        if params.v_perp != 0 and omega != 0:
            logger.debug("Degenerate gyration (omega=%s), using linear drift", omega)
        return linear_drift(t, params.v_perp, params.v_parallel)

    r = gyroradius(params.v_perp, omega)
    phase = omega * t
    if not math.isfinite(phase):
        logger.debug("Non-finite gyration phase at t=%s (omega=%s), using linear drift", t, omega)
        return linear_drift(t, params.v_perp, params.v_parallel)

    position = np.array([
        r * math.sin(phase),
        -r * (1 - math.cos(phase)),
        params.v_parallel * t,
    ])
    if not np.all(np.isfinite(position)):
        logger.debug("Non-finite helix position at t=%s (omega=%s), using linear drift", t, omega)
        return linear_drift(t, params.v_perp, params.v_parallel)
    return position


def sample_trajectory(times, params):
    """
    Evaluate the trajectory at many times at once.

    Parameters
    ----------
    times : array-like
        1D array of simulated times.
    params : SimulationParameters
        Parameter snapshot.

    Returns
    -------
    numpy.ndarray
        Array of shape (len(times), 3), row i equal to
        ``helix_position(times[i], params)``.
    """
    t = np.asarray(times, dtype=float)
    omega = cyclotron_frequency(params.charge, params.field_strength, params.mass)
    drift = np.column_stack([params.v_perp * t, np.zeros_like(t), params.v_parallel * t])
    if is_degenerate(params.v_perp, omega):
        return drift

    r = gyroradius(params.v_perp, omega)
    # Overflowing phases become nan here and are replaced by the drift below.
    with np.errstate(over='ignore', invalid='ignore'):
        phase = omega * t
        positions = np.column_stack([
            r * np.sin(phase),
            -r * (1 - np.cos(phase)),
            params.v_parallel * t,
        ])
    bad = ~np.all(np.isfinite(positions), axis=1)
    positions[bad] = drift[bad]
    return positions


def cyclotron_period(params):
    """Time for one full gyration, 2*pi/omega (``inf`` for a straight drift)."""
    omega = cyclotron_frequency(params.charge, params.field_strength, params.mass)
    if is_degenerate(params.v_perp, omega):
        return math.inf
    return 2 * math.pi / omega
