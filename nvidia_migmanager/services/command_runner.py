import logging
import subprocess
from typing import Sequence

from nvidia_migmanager.errors import CommandExecutionError, CommandFailedError
from nvidia_migmanager.services.commands import CommandSpec

logger = logging.getLogger(__name__)


class CommandRunner:
    """Runs external commands synchronously and returns their stdout.

    There is no timeout: a hung command blocks the caller.
    """

    def run(self, bin_path: str, args: Sequence[str] = ()) -> str:
        """Run bin_path with args.

        Raises CommandExecutionError if the process cannot be started and
        CommandFailedError if it exits non-zero.
        """
        cmd = [bin_path, *args]
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise CommandExecutionError(cmd, e) from e

        logger.debug(f"stdout: {result.stdout}")
        logger.debug(f"stderr: {result.stderr}")

        if result.returncode != 0:
            raise CommandFailedError(bin_path, result.returncode, result.stderr)

        return result.stdout

    def run_spec(self, spec: CommandSpec) -> str:
        """Run a command from the command table."""
        return self.run(spec.bin_path, spec.args)
