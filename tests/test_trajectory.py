import logging
import math

import numpy as np
import pytest

from cyclotron.config import SimulationParameters
from cyclotron.simulation import Simulation
from cyclotron.trajectory import (
    cyclotron_frequency,
    cyclotron_period,
    gyroradius,
    helix_position,
    sample_trajectory,
)

TIMES = [0.0, 0.1, 1.0, 2.5, math.pi, 10.0, 123.4]


def test_half_period_is_diameter_below_start(unit_params):
    position = helix_position(math.pi, unit_params)
    assert position == pytest.approx([0.0, -2.0, 0.0], abs=1e-12)


def test_cyclotron_frequency_uses_absolute_value():
    assert cyclotron_frequency(-2.0, 3.0, 4.0) == pytest.approx(1.5)
    assert cyclotron_frequency(2.0, -3.0, 4.0) == pytest.approx(1.5)


@pytest.mark.parametrize("t", TIMES)
def test_no_perpendicular_velocity_is_pure_axial_drift(t):
    params = SimulationParameters(v_perp=0.0, v_parallel=2.0)
    x, y, z = helix_position(t, params)
    assert x == 0
    assert y == 0
    assert z == 2.0 * t


@pytest.mark.parametrize("overrides", [
    {},
    {"charge": 0.0},
    {"field_strength": 0.0},
    {"mass": 0.0},
    {"mass": 7.5, "charge": -3.0, "v_perp": 4.0},
])
@pytest.mark.parametrize("t", TIMES)
def test_axial_motion_is_decoupled(overrides, t):
    params = SimulationParameters(v_parallel=0.7, **overrides)
    assert helix_position(t, params)[2] == 0.7 * t


@pytest.mark.parametrize("overrides", [{"charge": 0.0}, {"field_strength": 0.0}])
def test_zero_frequency_falls_back_to_linear_drift(overrides):
    params = SimulationParameters(v_perp=1.5, v_parallel=0.5, **overrides)
    omega = cyclotron_frequency(params.charge, params.field_strength, params.mass)
    assert omega == 0
    t = 4.0
    np.testing.assert_array_equal(helix_position(t, params), [1.5 * t, 0.0, 0.5 * t])


def test_zero_mass_drifts_instead_of_producing_nan():
    params = SimulationParameters(mass=0.0, v_perp=1.0, v_parallel=0.5)
    position = helix_position(2.0, params)
    assert np.all(np.isfinite(position))
    np.testing.assert_array_equal(position, [2.0, 0.0, 1.0])


def test_zero_mass_without_charge_drifts():
    params = SimulationParameters(mass=0.0, charge=0.0)
    assert math.isnan(cyclotron_frequency(0.0, 1.0, 0.0))
    np.testing.assert_array_equal(helix_position(1.0, params), [1.0, 0.0, 1.0])


def test_overflowing_gyroradius_falls_back_to_drift():
    # omega is a tiny subnormal, so v_perp / omega overflows to inf
    params = SimulationParameters(mass=1.0, charge=1e-155, field_strength=1e-155, v_perp=1.0)
    position = helix_position(3.0, params)
    assert np.all(np.isfinite(position))
    np.testing.assert_array_equal(position, [3.0, 0.0, 3.0])


@pytest.mark.parametrize("params", [
    SimulationParameters(),
    SimulationParameters(mass=2.0, charge=-1.0, field_strength=3.0, v_perp=2.5),
    SimulationParameters(mass=0.3, charge=4.0, field_strength=0.2, v_perp=0.4),
])
@pytest.mark.parametrize("t", TIMES)
def test_particle_stays_on_gyration_circle(params, t):
    omega = cyclotron_frequency(params.charge, params.field_strength, params.mass)
    r = gyroradius(params.v_perp, omega)
    x, y, _ = helix_position(t, params)
    assert math.hypot(x, y + r) == pytest.approx(r)


def test_gyroradius_of_zero_frequency_is_infinite():
    assert gyroradius(1.0, 0.0) == math.inf


def test_period_returns_to_start_plane(unit_params):
    period = cyclotron_period(unit_params)
    assert period == pytest.approx(2 * math.pi)
    assert helix_position(period, unit_params) == pytest.approx([0.0, 0.0, 0.0], abs=1e-12)


def test_period_of_drift_is_infinite():
    assert cyclotron_period(SimulationParameters(charge=0.0)) == math.inf


@pytest.mark.parametrize("params", [
    SimulationParameters(),
    SimulationParameters(charge=0.0, v_parallel=-1.0),
    SimulationParameters(mass=0.0),
    SimulationParameters(mass=1e-308, v_parallel=0.5),
])
def test_sampler_matches_pointwise_model(params):
    times = np.linspace(0.0, 20.0, 57)
    sampled = sample_trajectory(times, params)
    assert sampled.shape == (57, 3)
    assert np.all(np.isfinite(sampled))
    expected = np.array([helix_position(t, params) for t in times])
    np.testing.assert_allclose(sampled, expected, rtol=1e-12, atol=1e-12)


def test_overflowing_phase_falls_back_to_drift():
    # omega = 1e308 is finite, but omega * t overflows to inf
    params = SimulationParameters(mass=1e-308, v_parallel=0.5)
    np.testing.assert_array_equal(helix_position(10.0, params), [10.0, 0.0, 5.0])
    np.testing.assert_array_equal(sample_trajectory([10.0], params), [[10.0, 0.0, 5.0]])


def test_tick_survives_overflowing_phase():
    sim = Simulation(SimulationParameters(mass=1e-308))
    frame = sim.tick(10.0)
    assert np.all(np.isfinite(frame.position))
    np.testing.assert_array_equal(frame.position, [10.0, 0.0, 10.0])


def test_drift_fallback_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="cyclotron.trajectory"):
        helix_position(1.0, SimulationParameters(mass=0.0))
        helix_position(10.0, SimulationParameters(mass=1e-308))
    messages = [r.getMessage() for r in caplog.records]
    assert any("Degenerate gyration" in m for m in messages)
    assert any("Non-finite gyration phase" in m for m in messages)


def test_plain_drift_is_not_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="cyclotron.trajectory"):
        helix_position(1.0, SimulationParameters(charge=0.0))
        helix_position(1.0, SimulationParameters(v_perp=0.0))
    assert not caplog.records
