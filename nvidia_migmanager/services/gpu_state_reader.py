import logging
from typing import Dict, List

from nvidia_migmanager.models.mig import GpuModeRecord, MigState
from nvidia_migmanager.services.command_runner import CommandRunner
from nvidia_migmanager.services.commands import CommandPurpose, CommandSpec

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ", "

# Only these exact strings are recognised; anything else is UNKNOWN.
_MODE_VALUES = {
    "Enabled": MigState.ENABLED,
    "Disabled": MigState.DISABLED,
}


def parse_mode(value: str) -> MigState:
    return _MODE_VALUES.get(value, MigState.UNKNOWN)


def parse_query_output(output: str) -> List[GpuModeRecord]:
    """Parse `nvidia-smi --query-gpu=... --format=csv,noheader` output.

    Lines that do not have exactly three fields are skipped.
    """
    records = []
    for line in output.splitlines():
        parts = line.split(FIELD_SEPARATOR)
        logger.info(f"GPU query fields: {parts}")

        if len(parts) != 3:
            continue

        name, current, pending = parts
        records.append(
            GpuModeRecord(name=name, current=parse_mode(current), pending=parse_mode(pending))
        )
    return records


class GpuStateReader:
    """Reads the MIG mode of every GPU on the host."""

    def __init__(self, runner: CommandRunner, commands: Dict[CommandPurpose, CommandSpec]):
        self._runner = runner
        self._query = commands[CommandPurpose.QUERY_GPUS]

    def query(self) -> List[GpuModeRecord]:
        """Run the GPU query and return one record per GPU, in query order."""
        output = self._runner.run_spec(self._query)
        return parse_query_output(output)
