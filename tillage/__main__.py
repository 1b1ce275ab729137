"""Entry point for ``python -m tillage``.

Loads the YAML config, builds a simulation on a generated field, and
opens a Pygame window to play it.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from tillage.simulation.config import SimulationConfig
from tillage.ui.pygame_client import PygameRenderer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main() -> None:
    """Parse CLI args, configure logging, launch renderer."""
    parser = argparse.ArgumentParser(
        prog="tillage",
        description="Tillage - farm carrots, dodge mold and angry carrots",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=2,
        help="Screen pixels per world pixel (default: 2)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=60,
        help="Target frames per second (default: 60)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)
    renderer = PygameRenderer(config=config, scale=args.scale)
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
