"""Command line entry point.

Runs a single reconciliation pass and exits. Intended to be started once per
boot (or on a timer) by the init system, which owns any retry policy.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from nvidia_migmanager.config import DEFAULT_CONFIG_PATH, load_settings
from nvidia_migmanager.errors import MigManagerError, UsageError
from nvidia_migmanager.logging_setup import LOGGER_NAME, parse_log_level, setup_logging
from nvidia_migmanager.models.mig import ReconcileAction
from nvidia_migmanager.services.command_runner import CommandRunner
from nvidia_migmanager.services.commands import build_command_table
from nvidia_migmanager.services.gpu_state_reader import GpuStateReader
from nvidia_migmanager.services.reconciler import Reconciler

# Not __name__, which is "__main__" under python -m
logger = logging.getLogger(f"{LOGGER_NAME}.main")


@dataclass
class Args:
    """Global arguments supplied on the command line."""

    log_level: int = logging.INFO
    config_path: Path = DEFAULT_CONFIG_PATH


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise UsageError(message)


def parse_args(argv: Optional[Sequence[str]] = None) -> Args:
    """Parse command line arguments. Unrecognised arguments are ignored."""
    parser = _ArgumentParser(
        prog="nvidia-migmanager",
        add_help=False,
        allow_abbrev=False,
        description="Enable MIG mode and apply a partition profile on NVIDIA GPUs",
    )
    parser.add_argument("--log-level", default="info",
                        help="off, error, warn, info, debug or trace")
    parser.add_argument("-c", "--config-path", type=Path, default=DEFAULT_CONFIG_PATH,
                        help="Path to the TOML config file")

    namespace, _ = parser.parse_known_args(argv)
    return Args(
        log_level=parse_log_level(namespace.log_level),
        config_path=namespace.config_path,
    )


def run(argv: Optional[Sequence[str]] = None) -> ReconcileAction:
    """Set up the process and run one reconciliation pass."""
    args = parse_args(argv)
    settings = load_settings(args.config_path)
    setup_logging(args.log_level, settings.log_file)

    runner = CommandRunner()
    commands = build_command_table(settings)
    reconciler = Reconciler(GpuStateReader(runner, commands), runner, commands)

    action = reconciler.reconcile()
    logger.info(f"Reconciliation finished: {action.value}")
    return action


def main(argv: Optional[List[str]] = None) -> int:
    try:
        run(argv)
    except MigManagerError as e:
        print(e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
