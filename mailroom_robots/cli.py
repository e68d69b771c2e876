#!/usr/bin/env python3
"""
Command-line entry point for the mailroom simulation.

Usage:
    mailroom_sim                              # Run with config/simulation.yaml
    mailroom_sim --config config/simulation.yaml
    mailroom_sim --seed 42 --robots 4 --mail 200
    mailroom_sim --log-level DEBUG

Exit Codes:
    0: Success
    1: Configuration error
    2: Simulation error
"""

import argparse
import logging
import sys
from typing import List, Optional

from .core.config import Config, load_config
from .core.exceptions import ConfigError, MailroomError
from .core.logging_setup import configure_logging
from .simulation import Simulation

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "simulation.yaml"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Simulate mailroom delivery robots",
    )
    parser.add_argument('--config', '-c', help='YAML configuration file')
    parser.add_argument('--seed', type=int, help='Random seed for mail generation')
    parser.add_argument('--robots', type=int, help='Number of robots')
    parser.add_argument('--floors', type=int, help='Number of floors including the mailroom')
    parser.add_argument('--mail', type=int, help='Number of mail items to create')
    parser.add_argument('--log-level', default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Override the configured log level')
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Load the given or default config file and apply command-line overrides."""
    config = load_config(args.config or DEFAULT_CONFIG)

    if args.seed is not None:
        config.simulation.seed = args.seed
    if args.robots is not None:
        config.robot.count = args.robots
    if args.floors is not None:
        config.building.floors = args.floors
    if args.mail is not None:
        config.mail.mail_to_create = args.mail

    config.validate()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = build_config(args)
    except (ConfigError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    configure_logging(config.logging, level=args.log_level)

    try:
        results = Simulation(config).run()
    except MailroomError as e:
        logger.error(f"Simulation failed: {e}")
        return 2

    print("=" * 50)
    print("Mailroom Simulation Results")
    print("=" * 50)
    for key, value in results.to_dict().items():
        print(f"{key:<24} {value}")
    for item in results.rejected:
        print(f"Rejected: {item}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
