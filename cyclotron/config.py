"""
Simulation parameters, slider ranges and the reset-on-change policy.

``SimulationParameters`` is an immutable snapshot: user input produces a new
snapshot through ``with_value`` and the simulation reads the current one once
per tick.
"""

import dataclasses
import json
import math
from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class SimulationParameters:
    """Physical and playback parameters of the helix simulation."""
    mass: float = 1.0
    charge: float = 1.0
    field_strength: float = 1.0
    v_perp: float = 1.0
    v_parallel: float = 1.0

    # Playback
    time_scale: float = 1.0
    follow_camera: bool = False

    def with_value(self, name: str, value) -> 'SimulationParameters':
        """Return a copy with ``name`` replaced by ``value``."""
        if name == 'follow_camera':
            return dataclasses.replace(self, follow_camera=bool(value))
        if name not in PARAMETER_NAMES:
            raise KeyError(f"Unknown simulation parameter: {name!r}")
        return dataclasses.replace(self, **{name: float(value)})

    def as_dict(self) -> Dict[str, float]:
        return dataclasses.asdict(self)


# Numeric parameters in slider order.
PARAMETER_NAMES: Tuple[str, ...] = (
    'mass', 'charge', 'field_strength', 'v_perp', 'v_parallel', 'time_scale',
)

# Slider (min, max, step) per numeric parameter.
PARAMETER_RANGES: Dict[str, Tuple[float, float, float]] = {
    'mass': (0.1, 10.0, 0.1),
    'charge': (-5.0, 5.0, 0.1),
    'field_strength': (0.0, 5.0, 0.1),
    'v_perp': (0.0, 5.0, 0.1),
    'v_parallel': (-5.0, 5.0, 0.1),
    'time_scale': (0.1, 5.0, 0.1),
}

PARAMETER_LABELS: Dict[str, str] = {
    'mass': 'Mass',
    'charge': 'Charge',
    'field_strength': 'B',
    'v_perp': 'v_perp',
    'v_parallel': 'v_parallel',
    'time_scale': 'Speed',
}

# Changing any of these restarts the trajectory from t = 0.
RESET_ON_CHANGE: Dict[str, bool] = {
    'mass': True,
    'charge': True,
    'field_strength': True,
    'v_perp': True,
    'v_parallel': True,
    'time_scale': False,
    'follow_camera': False,
}

MAX_TRAIL_POINTS = 1000


def load_config(path, base: SimulationParameters = None) -> SimulationParameters:
    """
    Load parameter overrides from a JSON file.

    Parameters
    ----------
    path : str or Path
        JSON file holding an object whose keys are parameter names.
    base : SimulationParameters, optional
        Snapshot the overrides are applied to (defaults if omitted).

    Returns
    -------
    SimulationParameters
        New snapshot with the overrides applied.

    Raises
    ------
    ValueError
        If the file is not a JSON object, names unknown parameters, or holds
        non-numeric values for numeric parameters.
    """
    with open(path, 'r') as f:
        overrides = json.load(f)
    if not isinstance(overrides, dict):
        raise ValueError(f"{path}: expected a JSON object of parameter overrides")
    return apply_overrides(base or SimulationParameters(), overrides)


def apply_overrides(params: SimulationParameters, overrides: dict) -> SimulationParameters:
    """Apply a mapping of overrides to ``params``, validating keys and values."""
    known = set(PARAMETER_NAMES) | {'follow_camera'}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(f"Unknown parameter(s) in config: {', '.join(unknown)}")

    for name, value in overrides.items():
        if name == 'follow_camera':
            if not isinstance(value, bool):
                raise ValueError(f"Parameter 'follow_camera' must be true or false, got {value!r}")
        else:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Parameter {name!r} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"Parameter {name!r} must be finite, got {value!r}")
        params = params.with_value(name, value)
    return params
