"""
Helix viewer command line.

Opens the interactive viewer by default. ``--save`` renders a GIF without
opening a window and ``--export`` writes a sampled trajectory to JSON.

Usage:
    cyclotron-viewer [--mass M] [--charge Q] [--field-strength B]
                     [--v-perp V] [--v-parallel V] [--time-scale S] [--follow]
                     [--config FILE] [--save OUT.gif --frames N --fps F]
                     [--export OUT.json --periods K --samples N]
                     [--log-level LEVEL] [--log-file FILE]
"""

import argparse
import json
import logging
import math
import os

import numpy as np

from cyclotron.config import PARAMETER_NAMES, SimulationParameters, apply_overrides, load_config
from cyclotron.magnetic_field import UniformField
from cyclotron.simulation import Simulation
from cyclotron.trajectory import cyclotron_frequency, cyclotron_period, gyroradius, sample_trajectory

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO", log_file: str = None):
    """Configure the root logger with a console handler and an optional file."""
    level = getattr(logging, log_level.upper())

    handlers = [logging.StreamHandler()]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def build_parser():
    parser = argparse.ArgumentParser(
        description="Animate a charged particle's helix in a uniform magnetic field"
    )
    parser.add_argument("--mass", type=float, help="Particle mass")
    parser.add_argument("--charge", type=float, help="Particle charge")
    parser.add_argument("--field-strength", type=float, help="Magnetic field strength B")
    parser.add_argument("--v-perp", type=float, help="Velocity perpendicular to B")
    parser.add_argument("--v-parallel", type=float, help="Velocity along B")
    parser.add_argument("--time-scale", type=float, help="Simulated seconds per wall-clock second")
    parser.add_argument("--follow", action="store_true", help="Start with the camera following the particle")
    parser.add_argument("--config", type=str, help="JSON file of parameter overrides")

    # Output options
    parser.add_argument("--save", type=str, help="Render to this GIF instead of opening a window")
    parser.add_argument("--frames", type=int, default=300, help="Frames to render with --save")
    parser.add_argument("--fps", type=int, default=30, help="Frame rate for --save")
    parser.add_argument("--export", type=str, help="Write a sampled trajectory to this JSON file")
    parser.add_argument("--periods", type=float, default=3.0, help="Gyration periods covered by --export")
    parser.add_argument("--samples", type=int, default=500, help="Number of samples for --export")

    # Logging options
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        default="INFO", help="Logging level")
    parser.add_argument("--log-file", type=str, help="Log file path")
    return parser


def resolve_parameters(args) -> SimulationParameters:
    """Defaults, then the config file, then explicit flags."""
    params = SimulationParameters()
    if args.config:
        params = load_config(args.config, params)
        logger.info("Configuration loaded from %s", args.config)

    overrides = {name: getattr(args, name) for name in PARAMETER_NAMES
                 if getattr(args, name) is not None}
    if args.follow:
        overrides['follow_camera'] = True
    return apply_overrides(params, overrides)


def export_trajectory(path, params, periods=3.0, samples=500):
    """
    Sample the trajectory and save it as JSON.

    The window covers ``periods`` gyrations; for a straight drift it covers
    ``periods * 2*pi`` time units.

    Parameters
    ----------
    path : str
        Output JSON file.
    params : SimulationParameters
        Parameter snapshot.
    periods : float
        Number of gyration periods to cover.
    samples : int
        Number of sample times.

    Returns
    -------
    dict
        The data written to ``path``.
    """
    period = cyclotron_period(params)
    if not math.isfinite(period):
        period = 2 * math.pi
    times = np.linspace(0.0, periods * period, samples)
    positions = sample_trajectory(times, params)

    omega = cyclotron_frequency(params.charge, params.field_strength, params.mass)
    radius = gyroradius(params.v_perp, omega)
    field = UniformField(params.field_strength)
    data = {
        'parameters': params.as_dict(),
        'field': field.magnetic_field(0, 0, 0).tolist(),
        'omega': omega if math.isfinite(omega) else None,
        'gyroradius': radius if math.isfinite(radius) else None,
        'time': times.tolist(),
        'position': positions.tolist(),
    }

    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=4)
    logger.info("Wrote %d trajectory samples to %s", samples, path)
    return data


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    for flag in ('frames', 'fps', 'samples'):
        if getattr(args, flag) <= 0:
            parser.error(f"--{flag} must be a positive integer, got {getattr(args, flag)}")

    try:
        params = resolve_parameters(args)
    except (OSError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        parser.error(str(e))

    if args.export:
        export_trajectory(args.export, params, args.periods, args.samples)
        if not args.save:
            return 0

    if args.save:
        import matplotlib
        matplotlib.use("Agg")

    from cyclotron.viewer import HelixViewer

    viewer = HelixViewer(Simulation(params))
    if args.save:
        viewer.save(args.save, args.frames, args.fps)
    else:
        viewer.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
