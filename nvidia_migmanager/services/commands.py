from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from nvidia_migmanager.config import Settings

GPU_QUERY_ARGS = (
    "--query-gpu=gpu_name,mig.mode.current,mig.mode.pending",
    "--format=csv,noheader",
)


class CommandPurpose(Enum):
    """External commands the agent issues."""

    QUERY_GPUS = "query_gpus"
    ENABLE_MIG = "enable_mig"
    APPLY_PROFILE = "apply_profile"
    REBOOT = "reboot"


@dataclass(frozen=True)
class CommandSpec:
    """Executable and argument list for one command."""

    bin_path: str
    args: Tuple[str, ...] = ()


def build_command_table(settings: Settings) -> Dict[CommandPurpose, CommandSpec]:
    """Build the command for each purpose from settings."""
    nvidia_smi = settings.nvidia_smi_path
    return {
        CommandPurpose.QUERY_GPUS: CommandSpec(nvidia_smi, GPU_QUERY_ARGS),
        CommandPurpose.ENABLE_MIG: CommandSpec(nvidia_smi, ("-mig", "1")),
        CommandPurpose.APPLY_PROFILE: CommandSpec(
            nvidia_smi, ("mig", "-cgi", settings.partition_profile, "-C")
        ),
        CommandPurpose.REBOOT: CommandSpec(settings.apiclient_path, ("reboot",)),
    }
