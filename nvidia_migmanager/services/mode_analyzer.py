"""Fleet-wide MIG mode analysis.

All GPUs on a host are assumed to be the same make and model, so the fleet
is reduced to a single mode. Any disagreement between GPUs makes the fleet
state UNKNOWN.
"""

import logging
from typing import Dict, Sequence, Tuple

from nvidia_migmanager.models.mig import GpuModeRecord, MigAnalysis, MigState

logger = logging.getLogger(__name__)

# (current, pending) -> fleet mode. Pairs not listed here are UNKNOWN,
# including ENABLED -> DISABLED.
_AGGREGATE_MODES: Dict[Tuple[MigState, MigState], MigState] = {
    (MigState.ENABLED, MigState.ENABLED): MigState.ENABLED,
    (MigState.DISABLED, MigState.DISABLED): MigState.DISABLED,
    (MigState.DISABLED, MigState.ENABLED): MigState.TRANSITION,
}


def is_mig_capable(records: Sequence[GpuModeRecord]) -> bool:
    """Return True if any GPU reports a known current or pending mode."""
    for record in records:
        # One GPU is enough, they are all the same model
        if record.current != MigState.UNKNOWN or record.pending != MigState.UNKNOWN:
            return True
    return False


def aggregate_mode(records: Sequence[GpuModeRecord]) -> MigState:
    """Reduce per-GPU modes to a single fleet mode."""
    current_states = {record.current for record in records}
    pending_states = {record.pending for record in records}

    if len(current_states) != 1 or len(pending_states) != 1:
        return MigState.UNKNOWN

    (current,) = current_states
    (pending,) = pending_states
    return _AGGREGATE_MODES.get((current, pending), MigState.UNKNOWN)


def analyze(records: Sequence[GpuModeRecord]) -> MigAnalysis:
    logger.info(f"Analyzing MIG status of {len(records)} GPU(s)")

    capable = is_mig_capable(records)
    logger.info(f"is_mig_capable: {capable}")

    mode = aggregate_mode(records)
    logger.info(f"overall_mig_mode: {mode.name}")

    return MigAnalysis(capable=capable, mode=mode)
