# MIT License (see LICENSE)
"""
Headless runner.

    python -m physicsim collisions --frames 600 --csv collisions.csv
    python -m physicsim --config scenes/tir.json --render debug --frames 1
"""
from __future__ import annotations
import argparse
import logging
import sys

from .host import FrameLoop
from .io import export_records, load_config
from .logging_config import setup_logging
from .renderer import DebugRenderer, NullRenderer
from .simulations import create_simulation, get_simulation, list_simulations

logger = logging.getLogger("physicsim.cli")

RENDERERS = {"debug": DebugRenderer, "null": NullRenderer}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="physicsim", description="Run a physics simulation headless")
    parser.add_argument("simulation", nargs="?", choices=list_simulations(),
                        help="Simulation to run (optional when --config names one)")
    parser.add_argument("--config", default=None,
                        help="JSON config file with 'simulation' and 'params'")
    parser.add_argument("--frames", type=int, default=300,
                        help="Number of frames to run after the baseline frame")
    parser.add_argument("--dt", type=float, default=1 / 30,
                        help="Seconds per frame")
    parser.add_argument("--csv", default=None,
                        help="Export the event log to this CSV file")
    parser.add_argument("--render", choices=sorted(RENDERERS), default="null",
                        help="Renderer used for every frame")
    parser.add_argument("--log-level", default="INFO",
                        help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.config:
        name, config = load_config(args.config)
        if args.simulation and args.simulation != name:
            parser.error(f"--config describes {name!r}, not {args.simulation!r}")
        simulation = get_simulation(name)(config)
    elif args.simulation:
        simulation = create_simulation(args.simulation)
    else:
        parser.error("a simulation name or --config is required")

    loop = FrameLoop(simulation, renderer=RENDERERS[args.render]())
    loop.run(args.frames, args.dt)
    logger.info(
        "%s: %d frames stepped, %d skipped, t=%.3f s",
        simulation.title, loop.frames, loop.skipped_frames, simulation.time,
    )

    if args.csv:
        export_records(simulation, args.csv)
    return 0


if __name__ == "__main__":
    sys.exit(main())
