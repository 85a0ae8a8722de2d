import logging
from typing import Dict

from nvidia_migmanager.models.mig import MigState, ReconcileAction
from nvidia_migmanager.services.command_runner import CommandRunner
from nvidia_migmanager.services.commands import CommandPurpose, CommandSpec
from nvidia_migmanager.services.gpu_state_reader import GpuStateReader
from nvidia_migmanager.services.mode_analyzer import analyze

logger = logging.getLogger(__name__)


class Reconciler:
    """Drives the GPU fleet toward MIG enabled with the configured profile.

    One call to reconcile() is one complete pass. Errors from any command
    propagate immediately and nothing after the failing step runs.
    """

    def __init__(
        self,
        reader: GpuStateReader,
        runner: CommandRunner,
        commands: Dict[CommandPurpose, CommandSpec]
    ):
        self._reader = reader
        self._runner = runner
        self._commands = commands

    def reconcile(self) -> ReconcileAction:
        """Query, analyze and act on the fleet once."""
        capable, mode = analyze(self._reader.query())

        if not capable:
            logger.info("No MIG capable GPUs found, nothing to do")
            return ReconcileAction.NONE

        if mode == MigState.DISABLED:
            self._enable_and_reboot()
            return ReconcileAction.ENABLE_AND_REBOOT

        if mode == MigState.ENABLED:
            self._apply_profile()
            return ReconcileAction.APPLY_PROFILE

        # TRANSITION waits for a reboot already requested; UNKNOWN is unsafe to act on
        logger.info(f"Fleet MIG mode is {mode.name}, taking no action")
        return ReconcileAction.NONE

    def _enable_and_reboot(self) -> None:
        logger.info("Enabling MIG mode")
        self._run(CommandPurpose.ENABLE_MIG)

        # Refreshed state is only logged
        analyze(self._reader.query())

        logger.info("Requesting reboot for MIG mode change")
        self._run(CommandPurpose.REBOOT)

    def _apply_profile(self) -> None:
        spec = self._commands[CommandPurpose.APPLY_PROFILE]
        logger.info(f"Applying MIG partition profile: {' '.join(spec.args)}")
        self._runner.run_spec(spec)

    def _run(self, purpose: CommandPurpose) -> str:
        return self._runner.run_spec(self._commands[purpose])
